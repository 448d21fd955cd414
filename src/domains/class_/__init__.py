# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Classroom domain package.

This package provides classroom membership functionality including:
- Classroom creation, lookup and updates
- Teacher/student membership transitions
- Class code generation and joins by code or invite token
"""

from src.domains.class_.code import (
    CLASS_CODE_ALPHABET,
    ClassCodeGenerator,
    random_class_code,
)
from src.domains.class_.membership import is_member, is_owner, is_student, is_teacher
from src.domains.class_.results import ClassroomResult, Outcome
from src.domains.class_.service import ClassroomService, UserClassrooms

__all__ = [
    "ClassroomService",
    "UserClassrooms",
    "ClassroomResult",
    "Outcome",
    "ClassCodeGenerator",
    "CLASS_CODE_ALPHABET",
    "random_class_code",
    "is_owner",
    "is_teacher",
    "is_student",
    "is_member",
]
