"""Entry point that serves the User Store API with Uvicorn.

Host, port and log level come from ``Settings`` (``HOST``, ``PORT``
and ``LOG_LEVEL`` environment variables; defaults ``0.0.0.0``,
``3000`` and ``INFO``).

Usage:
    user-store-api
    python -m user_store_api
"""
import logging

from uvicorn import Config, Server

from user_store_api.app.core.config import settings
from user_store_api.app.main import create_app

logger = logging.getLogger(__name__)


def main() -> None:
    """Build the application and serve it until interrupted."""
    app = create_app(settings)
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
        # Logging is configured by create_app; uvicorn must not replace it.
        log_config=None,
    )
    server = Server(config)
    logger.info("Server running at http://%s:%d", settings.host, settings.port)
    try:
        server.run()
    except (KeyboardInterrupt, SystemExit):
        pass


if __name__ == "__main__":
    main()
