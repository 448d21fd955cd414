# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Database fixtures for integration tests.

Each test gets a fresh in-memory SQLite database through aiosqlite, with the
schema created from the ORM metadata.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from src.core.config.settings import ClientSettings, InviteSettings
from src.domains.class_ import ClassroomService
from src.domains.grading import GradeStructureService
from src.domains.invitation import InviteTokenService
from src.infrastructure.database import build_sessionmaker, create_schema

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Mark everything under tests/integration as integration."""
    for item in items:
        if "integration" in item.nodeid:
            item.add_marker(pytest.mark.integration)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an isolated in-memory database."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record) -> None:
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await create_schema(engine)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session configured like the application's."""
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest_asyncio.fixture
async def other_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """A second session on the same database, for cross-request checks."""
    async with build_sessionmaker(engine)() as session:
        yield session


@pytest.fixture
def token_service(
    invite_settings: InviteSettings,
    client_settings: ClientSettings,
) -> InviteTokenService:
    return InviteTokenService(invite_settings, client_settings)


@pytest.fixture
def classroom_service(
    session: AsyncSession,
    token_service: InviteTokenService,
) -> ClassroomService:
    return ClassroomService(session, token_service=token_service)


@pytest.fixture
def grade_service(session: AsyncSession) -> GradeStructureService:
    return GradeStructureService(session)
