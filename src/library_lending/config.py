"""Configuration management for the library lending ledger.

Settings are read from ``LIBRARY_LENDING_*`` environment variables or a
``.env`` file:
1. Storage - where the SQLite record store lives
2. Logging - level and debug switch
3. Notifications - SMTP transport used for overdue reminders
"""

import logging
import sys
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class LendingConfig(BaseSettings):
    """Runtime configuration for the lending ledger and its collaborators."""

    model_config = SettingsConfigDict(
        # Use LIBRARY_LENDING_ prefix for all env vars
        env_prefix="LIBRARY_LENDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # === Storage ===

    database_path: Path = Field(
        default=Path("data/lending.db"),
        description="SQLite database file backing the record store",
    )

    # === Logging ===

    debug: bool = Field(
        default=False,
        description="Enable debug logging",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
    )

    # === Notifications ===

    smtp_host: str = Field(
        default="localhost",
        description="SMTP server used to deliver reminder emails",
    )

    smtp_port: int = Field(
        default=587,
        description="SMTP server port",
        ge=1,
        le=65535,
    )

    smtp_username: str | None = Field(
        default=None,
        description="SMTP login name; no login is attempted when unset",
    )

    smtp_password: str | None = Field(
        default=None,
        description="SMTP password or app password",
        # Loaded from environment only
        repr=False,
    )

    smtp_use_tls: bool = Field(
        default=True,
        description="Upgrade the SMTP connection with STARTTLS",
    )

    smtp_timeout: float = Field(
        default=30.0,
        description="Seconds to wait for the SMTP server",
        gt=0,
    )

    sender_address: str = Field(
        default="library@example.com",
        description="From address on outgoing notifications",
    )

    reminder_subject: str = Field(
        default="Overdue library item",
        description="Subject line of overdue reminder emails",
        min_length=1,
    )

    @field_validator("database_path")
    @classmethod
    def validate_database_path(cls, v: Path) -> Path:
        """Resolve the database path and make sure its directory exists."""
        abs_path = v.absolute()
        abs_path.parent.mkdir(parents=True, exist_ok=True)

        if not abs_path.parent.is_dir():
            raise ValueError(f"Database directory {abs_path.parent} is not accessible")

        return abs_path

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level

    def get_database_url(self) -> str:
        """Get SQLAlchemy database URL."""
        return f"sqlite:///{self.database_path}"


class _ConfigStore:
    """Internal storage for configuration singleton."""

    _instance: LendingConfig | None = None


def get_config() -> LendingConfig:
    """Get or create the global configuration instance."""
    if _ConfigStore._instance is None:  # type: ignore[reportPrivateUsage]
        _ConfigStore._instance = LendingConfig()  # type: ignore[reportPrivateUsage]
    return _ConfigStore._instance  # type: ignore[reportPrivateUsage]


def reset_config() -> None:
    """Reset configuration (useful for testing)."""
    _ConfigStore._instance = None  # type: ignore[reportPrivateUsage]


def configure_logging(config: LendingConfig | None = None) -> None:
    """Send log records to stderr at the configured level."""
    config = config or get_config()
    logging.basicConfig(
        level=config.effective_log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
