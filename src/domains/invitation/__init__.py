# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation domain package.

- token: signed, time-limited invite tokens and links
- service: invitation delivery by email
"""

from src.domains.invitation.service import (
    INVITATION_SUBJECT,
    InvitationService,
    role_label,
)
from src.domains.invitation.token import INVITE_TOKEN_TYPE, InviteTokenService

__all__ = [
    "InviteTokenService",
    "INVITE_TOKEN_TYPE",
    "InvitationService",
    "INVITATION_SUBJECT",
    "role_label",
]
