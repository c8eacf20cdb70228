"""
Top-level package for the User Store API.

All functionality lives in submodules under ``app``; the ASGI
application is ``user_store_api.app.main:app``.
"""

__all__ = []
