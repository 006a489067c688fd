"""Configuration helpers for the Contact Book CLI."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv


DEFAULT_CONTACTS_FILE = "contacts.json"
DEFAULT_LOG_LEVEL = "WARNING"

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(RuntimeError):
    """Raised when configuration values are invalid."""


@dataclass(slots=True)
class Settings:
    """Runtime configuration for the CLI."""

    contacts_file: Path
    log_level: str = DEFAULT_LOG_LEVEL
    environment: str = "local"

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(
    *,
    contacts_file: Optional[str] = None,
    log_level: Optional[str] = None,
    use_dotenv: bool = True,
) -> Settings:
    """Load settings from environment variables.

    Explicit arguments (usually CLI options) take precedence over the
    environment. A ``.env`` file in the working directory is honoured.

    Args:
        contacts_file: Override for CONTACT_BOOK_FILE.
        log_level: Override for CONTACT_BOOK_LOG_LEVEL.
        use_dotenv: Whether to read a ``.env`` file first.

    Returns:
        The resolved Settings.

    Raises:
        ConfigError: if the log level is not a standard level name or the
            contacts file path is blank.
    """

    if use_dotenv:
        load_dotenv(find_dotenv(usecwd=True))

    path_value = contacts_file or os.getenv("CONTACT_BOOK_FILE", DEFAULT_CONTACTS_FILE)
    if not path_value.strip():
        raise ConfigError("Contacts file path cannot be blank. Check CONTACT_BOOK_FILE.")

    level = (log_level or os.getenv("CONTACT_BOOK_LOG_LEVEL", DEFAULT_LOG_LEVEL)).strip().upper()
    if level not in _LOG_LEVELS:
        raise ConfigError(
            f"Unknown log level '{level}'. Use one of: {', '.join(_LOG_LEVELS)}."
        )

    environment = os.getenv("CONTACT_BOOK_ENV", "local")

    return Settings(
        contacts_file=Path(path_value.strip()).expanduser(),
        log_level=level,
        environment=environment,
    )
