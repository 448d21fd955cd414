# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""DateTime utilities for ClassHub.

All timestamps are stored in UTC and all Python datetimes are timezone-aware,
so naive and aware values are never mixed.

Usage:
------
    from src.utils.datetime import utc_now

    # For SQLAlchemy model defaults
    created_at = mapped_column(DateTime(timezone=True), default=utc_now)
"""

from datetime import datetime, timedelta, timezone


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def utc_from_timestamp(timestamp: float) -> datetime:
    """Create a timezone-aware UTC datetime from a Unix timestamp.

    Args:
        timestamp: Unix timestamp (seconds since epoch).

    Returns:
        Timezone-aware UTC datetime.
    """
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Ensure a datetime is timezone-aware UTC.

    Naive values are assumed to already be UTC. SQLite hands naive values
    back even for ``DateTime(timezone=True)`` columns.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)

    return dt.astimezone(timezone.utc)


def expires_after(window: timedelta, start: datetime | None = None) -> datetime:
    """Return the instant a validity window opened at ``start`` closes."""
    return (ensure_utc(start) or utc_now()) + window


def is_expired(expiry: datetime | None) -> bool:
    """Check if a datetime has passed.

    Args:
        expiry: The expiry datetime to check.

    Returns:
        True if expired or expiry is None, False otherwise.
    """
    if expiry is None:
        return True

    return utc_now() > ensure_utc(expiry)
