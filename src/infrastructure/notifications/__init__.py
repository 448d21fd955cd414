# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Outbound mail.

- base: Mailer contract (render a template, send HTML)
- email: SMTP implementation backed by aiosmtplib
"""

from src.infrastructure.notifications.base import Mailer, TemplateNotFoundError
from src.infrastructure.notifications.email import INVITATION_TEMPLATE, SMTPMailer

__all__ = [
    "Mailer",
    "TemplateNotFoundError",
    "SMTPMailer",
    "INVITATION_TEMPLATE",
]
