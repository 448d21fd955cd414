# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for ClassHub.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime operations
- identifiers: Canonical identifier comparison
"""

from src.utils.datetime import (
    ensure_utc,
    expires_after,
    is_expired,
    utc_from_timestamp,
    utc_now,
)
from src.utils.identifiers import Identifier, normalize_id, same_id
from src.utils.logging import bind_context, clear_context, get_logger, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    # Datetime
    "utc_now",
    "utc_from_timestamp",
    "ensure_utc",
    "expires_after",
    "is_expired",
    # Identifiers
    "Identifier",
    "normalize_id",
    "same_id",
]
