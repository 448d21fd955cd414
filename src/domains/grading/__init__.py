# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Grading domain package.

Per-classroom grade structures (rubrics) and their weighted details.
"""

from src.domains.grading.service import GradeStructureService

__all__ = ["GradeStructureService"]
