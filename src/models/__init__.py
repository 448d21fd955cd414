# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic schemas exchanged with the domain services."""

from src.models.classroom import (
    ClassroomCreateRequest,
    ClassroomResponse,
    ClassroomUpdateRequest,
)
from src.models.grading import GradeDetailCreateRequest, GradeDetailUpdateRequest
from src.models.invitation import InviteByEmailRequest, InvitePayload

__all__ = [
    "ClassroomCreateRequest",
    "ClassroomUpdateRequest",
    "ClassroomResponse",
    "GradeDetailCreateRequest",
    "GradeDetailUpdateRequest",
    "InviteByEmailRequest",
    "InvitePayload",
]
