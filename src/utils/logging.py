# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Structured logging configuration using structlog.

Service modules keep using ``logging.getLogger(__name__)``; operator-facing
events (such as invitation delivery failures) go through ``get_logger`` so
they carry key/value context. Both end up on stdout: colored console output
in development, JSON lines elsewhere.

Example:
    >>> from src.utils.logging import setup_logging, get_logger
    >>> from src.core.config import get_settings
    >>> setup_logging(get_settings())
    >>> logger = get_logger(__name__)
    >>> logger.info("invite_sent", class_id="c1", recipient="a@example.com")
"""

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from src.core.config.settings import Settings

_QUIET_LOGGERS = (
    "aiosmtplib",
    "aiosqlite",
    "asyncio",
    "asyncpg",
    "sqlalchemy",
    "sqlalchemy.engine",
)


def build_processors(json_output: bool) -> list[Processor]:
    """Build the structlog processor chain.

    Args:
        json_output: Render JSON lines instead of colored console output.

    Returns:
        Ordered processor list ending with a renderer.
    """
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_output:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    return processors


def setup_logging(settings: "Settings") -> None:
    """Configure structlog and standard library logging.

    Args:
        settings: Application settings containing log_level and debug flag.
    """
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)
    json_output = not (settings.is_development or settings.debug)

    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=log_level,
    )

    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.getLogger("src").setLevel(log_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger that tags its events with the module name."""
    return structlog.get_logger(name, logger_name=name)


def bind_context(**kwargs: object) -> None:
    """Bind request-scoped values (request_id, user_id) to later log calls."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables.

    Call at the end of request processing so context does not leak into the
    next request handled by the same task.
    """
    structlog.contextvars.clear_contextvars()
