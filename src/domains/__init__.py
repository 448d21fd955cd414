# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Domain services layer for ClassHub.

This package contains domain services that encapsulate business logic.

Domains:
    class_: Classroom membership, class codes and joins.
    grading: Per-classroom grade structures.
    invitation: Invite tokens and invitation emails.
"""
