"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
API can be started locally without any setup.  In a production
deployment you should override these via environment variables.
"""

import os
from dataclasses import dataclass
from pathlib import Path


# Relative paths in the settings (database, log file) are resolved
# against the directory that holds the ``tobbedansen_api`` package.
PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes"}


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = os.getenv("PROJECT_NAME", "Tobbedansen API")
    api_version: str = os.getenv("API_VERSION", "1.0.0")
    debug: bool = _env_flag("DEBUG")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    # Optional path of a log file.  When empty only the console handler
    # is installed.
    log_file: str = os.getenv("LOG_FILE", "")

    # Path or connection string for the SQLite database.  If a
    # relative path is provided, it will be resolved relative to the
    # project root by the ``db`` module.
    database_url: str = os.getenv("DATABASE_URL", "tobbedansen.db")

    # Seconds a connection waits for another writer to release the
    # database lock before giving up with "database is locked".
    database_timeout: float = float(os.getenv("DATABASE_TIMEOUT", "5"))

    # Whether an event without a registration start date accepts
    # registrations.  Off by default: such an event stays closed until
    # an organiser sets the opening moment.
    registration_open_when_unset: bool = _env_flag("REGISTRATION_OPEN_WHEN_UNSET")


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
