# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation schemas.

Attributes of InvitePayload:
    class_id: Classroom the invitation admits to.
    is_student: True for a student invitation, False for a teacher one.
    expires_at: When the signed token stops being accepted.
"""

from datetime import datetime

from pydantic import BaseModel, Field

from src.utils.datetime import is_expired


class InvitePayload(BaseModel):
    """Decoded invite token claims."""

    class_id: str
    is_student: bool
    expires_at: datetime | None = None

    @property
    def is_expired(self) -> bool:
        return is_expired(self.expires_at)


class InviteByEmailRequest(BaseModel):
    """Request to email an invitation link."""

    class_id: str = Field(min_length=1)
    classroom_name: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    is_student: bool = True
