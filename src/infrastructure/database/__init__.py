# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database infrastructure.

This package provides SQLAlchemy async connections, ORM models and the
conflict-safe insert helper used by the domain services.

Example:
    from src.infrastructure.database import get_session, init_database

    await init_database(settings)
    async with get_session() as session:
        result = await session.execute(select(Classroom))
"""

from src.infrastructure.database.connection import (
    DatabaseError,
    build_sessionmaker,
    check_database_connection,
    close_database,
    create_schema,
    get_engine,
    get_session,
    get_sessionmaker,
    init_database,
)
from src.infrastructure.database.upsert import insert_ignoring_conflict

__all__ = [
    "DatabaseError",
    "build_sessionmaker",
    "check_database_connection",
    "close_database",
    "create_schema",
    "get_engine",
    "get_session",
    "get_sessionmaker",
    "init_database",
    "insert_ignoring_conflict",
]
