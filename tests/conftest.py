# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- Unit tests
- Integration tests
"""

from collections.abc import Iterator

import pytest
from pydantic import SecretStr

from src.core.config.settings import (
    ClientSettings,
    InviteSettings,
    SMTPSettings,
    clear_settings_cache,
)


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def test_environment() -> dict[str, str]:
    """Provide test environment variables.

    Returns:
        Dictionary of environment variables for testing.
    """
    return {
        "ENVIRONMENT": "development",
        "DEBUG": "true",
        "LOG_LEVEL": "DEBUG",
        "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
        "INVITE_SECRET_KEY": "test-secret-key-for-testing-only",
        "INVITE_ALGORITHM": "HS256",
        "INVITE_EXPIRE_MINUTES": "60",
        "CLIENT_HOST": "http://classhub.test",
        "CLIENT_PORT": "8080",
    }


@pytest.fixture
def settings_cache() -> Iterator[None]:
    """Clear the settings cache around a test."""
    clear_settings_cache()
    yield
    clear_settings_cache()


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )


# =============================================================================
# Helper Fixtures
# =============================================================================


@pytest.fixture
def invite_settings() -> InviteSettings:
    """Invite signing settings with a test secret."""
    return InviteSettings(
        secret_key=SecretStr("test-secret-key-for-invite-testing"),
        algorithm="HS256",
        expire_minutes=60,
    )


@pytest.fixture
def client_settings() -> ClientSettings:
    """Client location used in invite links."""
    return ClientSettings(host="http://classhub.test", port=8080)


@pytest.fixture
def smtp_settings() -> SMTPSettings:
    """Fully configured SMTP settings."""
    return SMTPSettings(
        host="smtp.classhub.test",
        port=587,
        username="mailer",
        password=SecretStr("mailer-password"),
        use_tls=True,
        from_email="noreply@classhub.test",
        from_name="ClassHub",
    )


@pytest.fixture
def sample_owner_id() -> str:
    """Provide a sample classroom owner ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440001"


@pytest.fixture
def sample_student_id() -> str:
    """Provide a sample student ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440002"


@pytest.fixture
def sample_teacher_id() -> str:
    """Provide a sample co-teacher ID for testing."""
    return "550e8400-e29b-41d4-a716-446655440003"
