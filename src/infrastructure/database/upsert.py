# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dialect-aware ``INSERT ... ON CONFLICT DO NOTHING``.

Get-or-create on a uniquely constrained column must not be a plain
select-then-insert: two concurrent writers can both miss the select. The
insert below lets the database arbitrate, and the caller re-reads the row.
"""

from typing import Any

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


async def insert_ignoring_conflict(
    session: AsyncSession,
    model: type,
    values: dict[str, Any],
    conflict_columns: list[str],
) -> bool:
    """Insert a row unless it collides on ``conflict_columns``.

    Args:
        session: Active session.
        model: Mapped class to insert into.
        values: Column values. Python-side column defaults still apply.
        conflict_columns: Columns of the unique constraint to arbitrate on.

    Returns:
        True if a row was inserted, False if one already existed.

    Raises:
        NotImplementedError: If the session's dialect has no upsert support.
    """
    dialect = session.get_bind().dialect.name
    insert = _DIALECT_INSERTS.get(dialect)
    if insert is None:
        raise NotImplementedError(f"Upsert not supported for dialect {dialect!r}")

    stmt = insert(model).values(**values).on_conflict_do_nothing(
        index_elements=conflict_columns,
    )
    result = await session.execute(stmt)
    return bool(result.rowcount)
