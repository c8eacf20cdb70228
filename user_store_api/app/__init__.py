"""
Application package initializer.

The service is split into ``core`` (settings, logging, errors and
validators), ``schemas`` (pydantic models and request decoding),
``services`` (the in-memory store and user operations) and ``api``
(versioned FastAPI routers).
"""

from .main import app, create_app  # noqa: F401
