"""
Logging setup for the User Store API.

``setup_logging`` applies ``Settings.log_level`` to the service's own
loggers and to Uvicorn's, so one ``LOG_LEVEL`` governs request logs
and user-store events alike.  Uvicorn is started with
``log_config=None`` (see ``run.py``); its records propagate to the
root logger and share the service's format.

Handlers are owned by name.  Calling ``setup_logging`` again, e.g.
for every ``create_app`` in a test session, re-applies the level and
replaces the file handler instead of stacking duplicates.  When
something else already installed root handlers (pytest's log capture,
an embedding application) no console handler is added.
"""

import logging
from pathlib import Path
from typing import Optional

from .config import Settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SERVICE_LOGGER = "user_store_api"
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

CONSOLE_HANDLER_NAME = "user_store_api.console"
FILE_HANDLER_NAME = "user_store_api.file"


def resolve_level(name: str) -> int:
    """Map a level name such as ``"debug"`` to its number; unknown names give INFO."""
    level = logging.getLevelName(name.strip().upper())
    return level if isinstance(level, int) else logging.INFO


def _named_handler(logger: logging.Logger, name: str) -> Optional[logging.Handler]:
    for handler in logger.handlers:
        if handler.get_name() == name:
            return handler
    return None


def _install_file_handler(root: logging.Logger, logfile: Optional[str], formatter: logging.Formatter) -> None:
    existing = _named_handler(root, FILE_HANDLER_NAME)
    target = str(Path(logfile).resolve()) if logfile else None
    if existing is not None:
        if target is not None and getattr(existing, "baseFilename", None) == target:
            return
        root.removeHandler(existing)
        existing.close()
    if target is None:
        return
    file_handler = logging.FileHandler(target, encoding="utf-8")
    file_handler.set_name(FILE_HANDLER_NAME)
    file_handler.setFormatter(formatter)
    root.addHandler(file_handler)


def setup_logging(settings: Settings) -> None:
    """Configure logging from ``settings``.

    Parameters
    ----------
    settings : Settings
        ``log_level`` is applied to the ``user_store_api`` and Uvicorn
        loggers on every call; ``log_file``, when set, adds (or
        re-targets) a file handler on the root logger.
    """
    level = resolve_level(settings.log_level)
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    root = logging.getLogger()

    if not root.handlers:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)
        root.setLevel(level)
    elif _named_handler(root, CONSOLE_HANDLER_NAME) is not None:
        root.setLevel(level)

    _install_file_handler(root, settings.log_file, formatter)

    for name in (SERVICE_LOGGER,) + UVICORN_LOGGERS:
        logging.getLogger(name).setLevel(level)
    for name in UVICORN_LOGGERS:
        # Drop handlers left by an earlier uvicorn dictConfig so records reach
        # the root handlers exactly once.
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True
