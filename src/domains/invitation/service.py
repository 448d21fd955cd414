# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation delivery by email.

Sending an invite is fire-and-forget from the classroom's point of view: the
result is a boolean, and a failed delivery never raises into the request
that triggered it. Failures are logged for operators.
"""

from src.domains.invitation.token import InviteTokenService
from src.infrastructure.notifications.base import Mailer
from src.infrastructure.notifications.email import INVITATION_TEMPLATE
from src.models.invitation import InviteByEmailRequest
from src.utils.identifiers import Identifier, normalize_id
from src.utils.logging import get_logger

logger = get_logger(__name__)

INVITATION_SUBJECT = "You have been invited to join a classroom"


def role_label(is_student: bool) -> str:
    return "Student" if is_student else "Teacher"


class InvitationService:
    """Builds invite links and mails them.

    Attributes:
        tokens: Token service that signs the invite link.
        mailer: Mail collaborator.
    """

    def __init__(self, tokens: InviteTokenService, mailer: Mailer) -> None:
        self.tokens = tokens
        self.mailer = mailer

    async def send_invite(
        self,
        class_id: Identifier,
        classroom_name: str,
        email: str,
        is_student: bool,
    ) -> bool:
        """Email an invitation link for a classroom.

        Args:
            class_id: Classroom the link admits to.
            classroom_name: Name shown in the message.
            email: Recipient address.
            is_student: Invite as student (True) or teacher (False).

        Returns:
            True only if the mailer reports successful delivery.
        """
        role = role_label(is_student)

        try:
            class_id = normalize_id(class_id)
            data = {
                "classroom_name": classroom_name,
                "role": role,
                "invite_link": self.tokens.build_invite_link(class_id, is_student),
            }
            html = self.mailer.render_template(INVITATION_TEMPLATE, data)
            delivered = await self.mailer.send(INVITATION_SUBJECT, email, html)
        except Exception as e:
            logger.error(
                "invite_delivery_failed",
                class_id=str(class_id),
                recipient=email,
                role=role,
                error=str(e),
                exc_info=True,
            )
            return False

        if not delivered:
            logger.warning(
                "invite_not_delivered",
                class_id=class_id,
                recipient=email,
                role=role,
            )
            return False

        logger.info("invite_sent", class_id=class_id, recipient=email, role=role)
        return True

    async def send_invite_request(self, request: InviteByEmailRequest) -> bool:
        """Send an invite described by a validated request."""
        return await self.send_invite(
            request.class_id,
            request.classroom_name,
            request.email,
            request.is_student,
        )
