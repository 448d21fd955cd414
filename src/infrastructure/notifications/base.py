# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Base class for outbound mail.

A mailer renders a named template into HTML and delivers it. Delivery
reports success as a boolean; implementations log their own failures.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any


class TemplateNotFoundError(KeyError):
    """Raised when a template id has no renderer."""

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Mail template '{template_id}' not found")


class Mailer(ABC):
    """Abstract mail collaborator."""

    def __init__(self) -> None:
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def render_template(self, template_id: str, data: dict[str, Any]) -> str:
        """Render a template to HTML.

        Args:
            template_id: Name of the template.
            data: Values substituted into the template.

        Returns:
            HTML markup.

        Raises:
            TemplateNotFoundError: If the template id is unknown.
        """
        ...

    @abstractmethod
    async def send(self, subject: str, recipient: str, html: str) -> bool:
        """Deliver an HTML message.

        Args:
            subject: Message subject.
            recipient: Recipient email address.
            html: HTML body.

        Returns:
            True if the message was handed to the mail server.
        """
        ...
