# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Canonical identifier handling.

Ids reach the services from several places: path parameters, token claims,
ORM rows. They are compared only after being reduced to one canonical string
form, so ``UUID("...")``, ``"...".upper()`` and ``" ... "`` all name the
same record.
"""

from uuid import UUID

Identifier = str | UUID


def normalize_id(value: Identifier) -> str:
    """Return the canonical string form of an identifier.

    UUIDs, and strings that parse as UUIDs, become lowercase hyphenated
    text. Anything else is stripped of surrounding whitespace.

    Args:
        value: Identifier as received.

    Returns:
        Canonical identifier string.

    Raises:
        ValueError: If the identifier is empty.
    """
    if isinstance(value, UUID):
        return str(value)

    text = str(value).strip()
    if not text:
        raise ValueError("Identifier must not be empty")

    try:
        return str(UUID(text))
    except ValueError:
        return text


def same_id(left: Identifier, right: Identifier) -> bool:
    """Check whether two identifiers name the same record."""
    return normalize_id(left) == normalize_id(right)
