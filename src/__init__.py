"""ClassHub Backend.

Classroom membership and grade structure management for an education
platform: classrooms, invitations, class codes, and grading rubrics.

Copyright (C) 2025 Global Digital Labs (gdlabs.io)
SPDX-License-Identifier: LGPL-3.0-or-later
"""

__version__ = "1.0.0"
