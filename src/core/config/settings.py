# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration management for ClassHub.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.environment)
    'development'
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import AliasChoices, Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INVITE_SECRET = "change-this-in-production"


class DatabaseSettings(BaseSettings):
    """Database configuration for classroom and grading records.

    Attributes:
        user: PostgreSQL username.
        password: PostgreSQL password.
        host: Database host address.
        port: Database port number.
        database: Database name.
        pool_size: Connection pool size.
        max_overflow: Maximum overflow connections.
        url_override: Full async URL that replaces the computed one.
    """

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        extra="ignore",
        populate_by_name=True,
    )

    user: str = "classhub"
    password: SecretStr = SecretStr("classhub_password")
    host: str = "localhost"
    port: int = 5432
    database: str = "classhub"
    pool_size: int = 10
    max_overflow: int = 20
    url_override: str | None = Field(
        default=None,
        validation_alias="DATABASE_URL",
    )

    @property
    def url(self) -> str:
        """Build the async database URL from components."""
        if self.url_override:
            return self.url_override
        pwd = self.password.get_secret_value()
        return f"postgresql+asyncpg://{self.user}:{pwd}@{self.host}:{self.port}/{self.database}"

    @property
    def is_sqlite(self) -> bool:
        """Check if the configured URL points at SQLite."""
        return self.url.startswith("sqlite")


class InviteSettings(BaseSettings):
    """Invitation token signing configuration.

    Attributes:
        secret_key: Secret key for signing invite tokens.
        algorithm: JWT signing algorithm.
        expire_minutes: Lifetime of an invite token.
    """

    model_config = SettingsConfigDict(
        env_prefix="INVITE_",
        extra="ignore",
        populate_by_name=True,
    )

    secret_key: SecretStr = Field(
        default=SecretStr(DEFAULT_INVITE_SECRET),
        validation_alias=AliasChoices("INVITE_SECRET_KEY", "JWT_SECRET_KEY"),
    )
    algorithm: str = "HS256"
    expire_minutes: int = 7 * 24 * 60


class ClientSettings(BaseSettings):
    """Frontend client location used to build shareable links.

    Attributes:
        host: Client host including scheme.
        port: Client port.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLIENT_",
        extra="ignore",
    )

    host: str = "http://localhost"
    port: int = 3000

    def invite_url(self, token: str) -> str:
        """Build the invitation URL for a signed token."""
        return f"{self.host}:{self.port}/invite/{token}"


class SMTPSettings(BaseSettings):
    """Outbound mail configuration.

    Attributes:
        host: SMTP server hostname.
        port: SMTP server port.
        username: SMTP authentication username.
        password: SMTP authentication password.
        use_tls: Use STARTTLS.
        from_email: Sender email address.
        from_name: Sender display name.
    """

    model_config = SettingsConfigDict(
        env_prefix="SMTP_",
        extra="ignore",
    )

    host: str | None = None
    port: int = 587
    username: str | None = None
    password: SecretStr | None = None
    use_tls: bool = True
    from_email: str | None = None
    from_name: str = "ClassHub"

    @property
    def is_configured(self) -> bool:
        """Check whether every value needed to send mail is present."""
        return all([self.host, self.username, self.password, self.from_email])


class ClassCodeSettings(BaseSettings):
    """Class code generation configuration.

    Attributes:
        length: Number of characters in a class code.
        max_insert_attempts: How many times a write is retried when the
            unique constraint on class codes rejects it.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLASS_CODE_",
        extra="ignore",
    )

    length: int = Field(default=8, ge=4, le=32)
    max_insert_attempts: int = Field(default=5, ge=1)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        database: Database settings.
        invite: Invite token settings.
        client: Frontend client settings.
        smtp: Outbound mail settings.
        class_code: Class code settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    invite: InviteSettings = Field(default_factory=InviteSettings)
    client: ClientSettings = Field(default_factory=ClientSettings)
    smtp: SMTPSettings = Field(default_factory=SMTPSettings)
    class_code: ClassCodeSettings = Field(default_factory=ClassCodeSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production with insecure defaults.
        """
        if self.environment == "production":
            if self.invite.secret_key.get_secret_value() == DEFAULT_INVITE_SECRET:
                raise ValueError(
                    "Invite secret key must be changed from default in production. "
                    "Set INVITE_SECRET_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
