"""
Main entrypoint for the User Store API.

This module assembles the FastAPI application, sets up logging,
installs the error handlers and includes versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn user_store_api.app.main:app --reload

Each application owns its own ``UserStore``.  Tests pass in a fresh
store (typically with a deterministic id generator) to get an
isolated instance.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import UserStoreError
from .core.logging_config import setup_logging
from .services.user_service import UserService
from .services.user_store import UserStore

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Map service errors and undecodable bodies to ``{"message": ...}`` responses."""

    @app.exception_handler(UserStoreError)
    async def user_store_error_handler(request: Request, exc: UserStoreError) -> JSONResponse:
        logger.warning(
            "%s %s rejected (%d): %s",
            request.method,
            request.url.path,
            exc.http_status,
            exc.message,
        )
        return JSONResponse(status_code=exc.http_status, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Bodies are declared as ``Any``, so this only fires for a missing
        # or unparseable JSON body.
        logger.warning("%s %s rejected: malformed body %s", request.method, request.url.path, exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Malformed request body"},
        )


def create_app(settings: Optional[Settings] = None, store: Optional[UserStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Settings to use; the module-level ``settings`` when omitted.
    store : Optional[UserStore]
        Store backing the service; a new empty store when omitted.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that everything below can
    # safely log messages.
    setup_logging(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("%s %s started", settings.project_name, settings.api_version)
        yield
        logger.info("%s shutting down", settings.project_name)

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        description=settings.api_description,
        debug=settings.debug,
        docs_url=settings.docs_url,
        lifespan=lifespan,
    )
    app.state.user_service = UserService(store if store is not None else UserStore())

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
