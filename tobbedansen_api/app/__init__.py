"""
Application package initializer.

The package is split into ``core`` (configuration, logging, database,
exceptions), ``schemas`` (pydantic payloads), ``services`` (business
logic on top of SQLite) and ``api`` (FastAPI routers).  Each domain
exposes a router in ``api/endpoints``.
"""

from .main import app  # noqa: F401
