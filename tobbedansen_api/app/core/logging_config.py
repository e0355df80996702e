"""
Logging configuration for the application.

``setup_logging`` is called from ``create_app`` with ``LOG_LEVEL`` and
``LOG_FILE`` from the settings.  The level is always applied to the
root logger, also when uvicorn or a test runner installed handlers
before the app was created; our own console handler is only added
when nobody else did.  A relative ``LOG_FILE`` is resolved against the
project root, like ``DATABASE_URL``, so the log ends up in the same
place whatever the working directory of the server is.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import PROJECT_ROOT


LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def resolve_log_path(logfile: str) -> Path:
    path = Path(logfile)
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    return path.resolve()


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    Parameters
    ----------
    level : str
        Logging level name (e.g. ``"DEBUG"``, ``"INFO"``).  Case
        insensitive; unknown names fall back to ``INFO``.
    logfile : Optional[str]
        File to log to in addition to the console.  Calling this
        function again with the same file does not add a second
        handler for it.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    if not root.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if logfile:
        log_path = resolve_log_path(logfile)
        already_attached = any(
            isinstance(handler, logging.FileHandler)
            and Path(handler.baseFilename) == log_path
            for handler in root.handlers
        )
        if not already_attached:
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
