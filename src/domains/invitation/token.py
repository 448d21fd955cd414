# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Invitation token signing and verification.

Invite tokens are JWTs signed with python-jose. They carry the classroom id
and the role the holder will join with, and expire after a fixed window.
Verification never raises: any unusable token yields ``None``.

Example:
    >>> from src.core.config import get_settings
    >>> settings = get_settings()
    >>> tokens = InviteTokenService(settings.invite, settings.client)
    >>> link = tokens.build_invite_link("c1", is_student=True)
    >>> tokens.verify_invite_token(link.rsplit("/", 1)[-1])
    InvitePayload(class_id='c1', is_student=True, ...)
"""

import logging
import secrets
from datetime import timedelta

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from src.core.config.settings import ClientSettings, InviteSettings
from src.models.invitation import InvitePayload
from src.utils.datetime import expires_after, utc_from_timestamp, utc_now
from src.utils.identifiers import Identifier, normalize_id

logger = logging.getLogger(__name__)

INVITE_TOKEN_TYPE = "invite"


class InviteTokenService:
    """Issues and verifies signed invitation tokens.

    Attributes:
        _settings: Invite signing settings.
        _client: Client location used for invite links.
    """

    def __init__(
        self,
        settings: InviteSettings,
        client: ClientSettings | None = None,
    ) -> None:
        """Initialize the token service.

        Args:
            settings: Invite signing settings.
            client: Client settings; needed only for build_invite_link.
        """
        self._settings = settings
        self._client = client

    @property
    def expires_in(self) -> timedelta:
        """Validity window of newly issued tokens."""
        return timedelta(minutes=self._settings.expire_minutes)

    def issue_invite_token(
        self,
        class_id: Identifier,
        is_student: bool,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Sign an invitation to a classroom.

        Args:
            class_id: Classroom to admit to.
            is_student: Join as student (True) or teacher (False).
            expires_delta: Override for the configured validity window.

        Returns:
            Encoded JWT string.
        """
        now = utc_now()
        exp = expires_after(expires_delta if expires_delta is not None else self.expires_in, now)

        payload = {
            "class_id": normalize_id(class_id),
            "is_student": bool(is_student),
            "type": INVITE_TOKEN_TYPE,
            "exp": int(exp.timestamp()),
            "iat": int(now.timestamp()),
            "jti": secrets.token_urlsafe(16),
        }

        return jwt.encode(
            payload,
            self._settings.secret_key.get_secret_value(),
            algorithm=self._settings.algorithm,
        )

    def build_invite_link(self, class_id: Identifier, is_student: bool) -> str:
        """Build a shareable invitation URL.

        Raises:
            RuntimeError: If the service was built without client settings.
        """
        if self._client is None:
            raise RuntimeError("Client settings are required to build invite links")

        token = self.issue_invite_token(class_id, is_student)
        return self._client.invite_url(token)

    def verify_invite_token(self, token: str) -> InvitePayload | None:
        """Decode an invitation token.

        Args:
            token: Token taken from an invite link.

        Returns:
            The invitation payload, or None when the token is malformed,
            expired, signed with another key or not an invite token.
        """
        try:
            claims = jwt.decode(
                token,
                self._settings.secret_key.get_secret_value(),
                algorithms=[self._settings.algorithm],
            )
        except ExpiredSignatureError:
            logger.info("Rejected expired invite token")
            return None
        except JWTError as e:
            logger.warning("Invite token decode failed: %s", str(e))
            return None

        if claims.get("type") != INVITE_TOKEN_TYPE:
            logger.warning("Rejected token of type %r as invite", claims.get("type"))
            return None

        try:
            return InvitePayload(
                class_id=claims["class_id"],
                is_student=claims["is_student"],
                expires_at=utc_from_timestamp(claims["exp"]),
            )
        except (KeyError, TypeError, ValidationError) as e:
            logger.warning("Invite token payload invalid: %s", str(e))
            return None
