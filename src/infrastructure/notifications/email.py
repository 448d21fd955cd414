# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SMTP mailer using aiosmtplib.

Messages go out as multipart/alternative: the rendered HTML part plus a plain
text part stripped from it.

Configuration comes from SMTPSettings (SMTP_HOST, SMTP_PORT, SMTP_USERNAME,
SMTP_PASSWORD, SMTP_USE_TLS, SMTP_FROM_EMAIL, SMTP_FROM_NAME).
"""

import html as html_lib
import re
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Any, Callable

import aiosmtplib

from src.core.config.settings import SMTPSettings
from src.infrastructure.notifications.base import Mailer, TemplateNotFoundError

INVITATION_TEMPLATE = "invitation"


class SMTPMailer(Mailer):
    """Mailer that renders built-in templates and sends via SMTP."""

    def __init__(self, settings: SMTPSettings) -> None:
        super().__init__()
        self._settings = settings
        self._templates: dict[str, Callable[[dict[str, Any]], str]] = {
            INVITATION_TEMPLATE: self._render_invitation,
        }

    def render_template(self, template_id: str, data: dict[str, Any]) -> str:
        renderer = self._templates.get(template_id)
        if renderer is None:
            raise TemplateNotFoundError(template_id)
        return renderer(data)

    async def send(self, subject: str, recipient: str, html: str) -> bool:
        if not self._settings.is_configured:
            self.logger.warning(
                "Email delivery disabled: SMTP_HOST, SMTP_USERNAME, "
                "SMTP_PASSWORD, or SMTP_FROM_EMAIL not set"
            )
            return False

        if not recipient:
            self.logger.warning("No recipient email address for %r", subject)
            return False

        message = self._build_message(subject, recipient, html)

        try:
            await aiosmtplib.send(
                message,
                hostname=self._settings.host,
                port=self._settings.port,
                username=self._settings.username,
                password=self._settings.password.get_secret_value(),
                start_tls=self._settings.use_tls,
            )
        except (aiosmtplib.SMTPException, OSError) as e:
            self.logger.error(
                "Failed to send email to %s: %s",
                recipient,
                str(e),
                exc_info=True,
            )
            return False

        self.logger.info("Email sent to %s: %s", recipient, subject)
        return True

    def _build_message(self, subject: str, recipient: str, html: str) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["From"] = f"{self._settings.from_name} <{self._settings.from_email}>"
        message["To"] = recipient
        message["Subject"] = subject

        message.attach(MIMEText(self._html_to_text(html), "plain", "utf-8"))
        message.attach(MIMEText(html, "html", "utf-8"))
        return message

    @staticmethod
    def _html_to_text(html: str) -> str:
        text = re.sub(r"<br\s*/?>", "\n", html)
        text = re.sub(r"<[^>]+>", "", text)
        lines = (line.strip() for line in html_lib.unescape(text).splitlines())
        return "\n".join(line for line in lines if line)

    def _render_invitation(self, data: dict[str, Any]) -> str:
        """Render the classroom invitation.

        Expects ``classroom_name``, ``role`` and ``invite_link``.
        """
        classroom_name = html_lib.escape(str(data["classroom_name"]))
        role = html_lib.escape(str(data["role"]))
        invite_link = html_lib.escape(str(data["invite_link"]), quote=True)
        from_name = html_lib.escape(self._settings.from_name)

        html = f"""
<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
</head>
<body style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto,
             Arial, sans-serif; line-height: 1.6; color: #1F2937;
             margin: 0; padding: 0; background-color: #F3F4F6;">
    <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
        <div style="background-color: white; border-radius: 8px; padding: 32px;">
            <h1 style="color: #4F46E5; font-size: 24px; margin: 0 0 24px 0;">
                {classroom_name}
            </h1>
            <p style="margin: 0 0 16px 0;">
                You have been invited to join {classroom_name} as a {role}.
            </p>
            <div style="margin: 24px 0;">
                <a href="{invite_link}"
                   style="background-color: #4F46E5; color: white;
                          padding: 12px 24px; text-decoration: none;
                          border-radius: 6px; font-weight: 500;">
                    Join classroom
                </a>
            </div>
            <p style="font-size: 12px; color: #9CA3AF; margin: 0;">
                Or open this link: {invite_link}<br>
                This invitation was sent by {from_name}.
            </p>
        </div>
    </div>
</body>
</html>
        """

        return html.strip()
