"""
Top-level package for the Tobbedansen registration API.

All functionality lives in submodules under ``app``; import the ASGI
application as ``tobbedansen_api.app.main:app``.
"""

__all__ = []
