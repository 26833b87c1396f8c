"""Configuration management for libcirc.

Loads configuration from environment variables and provides defaults.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

DEFAULT_DB_PATH = Path.home() / ".libcirc" / "circulation.db"
DEFAULT_REMINDER_SUBJECT = "Overdue items reminder"


@dataclass
class Config:
    """Application configuration."""

    # Database
    db_path: Path

    # Logging
    log_level: str

    # Notifications
    reminder_subject: str

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        db_path_str = os.environ.get("LIBCIRC_DB_PATH", str(DEFAULT_DB_PATH))
        db_path = Path(db_path_str) if db_path_str == ":memory:" else Path(db_path_str).expanduser()

        return cls(
            db_path=db_path,
            log_level=os.environ.get("LIBCIRC_LOG_LEVEL", "WARNING").upper(),
            reminder_subject=os.environ.get(
                "LIBCIRC_REMINDER_SUBJECT", DEFAULT_REMINDER_SUBJECT
            ),
        )

    @property
    def is_memory_db(self) -> bool:
        return str(self.db_path) == ":memory:"

    def validate(self) -> list[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if logging.getLevelName(self.log_level) == f"Level {self.log_level}":
            errors.append(f"Unknown log level: {self.log_level}")

        # Check database directory is writable
        if not self.is_memory_db and not self.db_path.parent.exists():
            try:
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            except PermissionError:
                errors.append(f"Cannot create database directory: {self.db_path.parent}")

        return errors


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Calling this more than once only updates the level.
    """
    logger = logging.getLogger("libcirc")
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    return logger


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get or create the global config instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def reset_config() -> None:
    """Reset the global config instance. Used for testing."""
    global _config
    _config = None
