"""setup_logging: Settings-driven levels for service and Uvicorn loggers.

Invariants:
    - LOG_LEVEL is applied on every call, even with handlers already attached
    - Uvicorn loggers propagate to the root handlers and carry no handlers of their own
    - Repeated calls never stack duplicate file handlers
"""

import logging

import pytest

from user_store_api.app.core.config import Settings
from user_store_api.app.core.logging_config import (
    FILE_HANDLER_NAME,
    SERVICE_LOGGER,
    UVICORN_LOGGERS,
    resolve_level,
    setup_logging,
)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    names = (SERVICE_LOGGER,) + UVICORN_LOGGERS
    saved_handlers = list(root.handlers)
    saved_root_level = root.level
    saved = {name: (logging.getLogger(name).level, logging.getLogger(name).propagate) for name in names}
    yield
    for handler in list(root.handlers):
        if handler not in saved_handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_root_level)
    for name, (level, propagate) in saved.items():
        logging.getLogger(name).setLevel(level)
        logging.getLogger(name).propagate = propagate


def file_handlers():
    return [h for h in logging.getLogger().handlers if h.get_name() == FILE_HANDLER_NAME]


@pytest.mark.parametrize(
    "name, level",
    [("DEBUG", logging.DEBUG), ("warning", logging.WARNING), (" error ", logging.ERROR), ("bogus", logging.INFO)],
)
def test_resolve_level(name, level):
    assert resolve_level(name) == level


def test_level_applies_to_service_and_uvicorn_loggers():
    setup_logging(Settings(log_level="DEBUG"))

    for name in (SERVICE_LOGGER,) + UVICORN_LOGGERS:
        assert logging.getLogger(name).level == logging.DEBUG


def test_level_is_reapplied_when_handlers_exist():
    logging.getLogger().addHandler(logging.NullHandler())

    setup_logging(Settings(log_level="DEBUG"))
    setup_logging(Settings(log_level="WARNING"))

    assert logging.getLogger("user_store_api.app.services.user_service").getEffectiveLevel() == logging.WARNING
    assert logging.getLogger("uvicorn.access").level == logging.WARNING


def test_uvicorn_loggers_propagate_to_root():
    access = logging.getLogger("uvicorn.access")
    access.addHandler(logging.NullHandler())
    access.propagate = False

    setup_logging(Settings())

    assert access.handlers == []
    assert access.propagate is True


def test_file_handler_is_installed_once(tmp_path):
    logfile = tmp_path / "users.log"
    settings = Settings(log_file=str(logfile))

    setup_logging(settings)
    setup_logging(settings)

    handlers = file_handlers()
    assert len(handlers) == 1
    assert handlers[0].baseFilename == str(logfile.resolve())

    logging.getLogger("user_store_api.test").warning("rejected request")
    handlers[0].flush()
    assert "[WARNING] user_store_api.test: rejected request" in logfile.read_text(encoding="utf-8")


def test_file_handler_is_retargeted_and_removed(tmp_path):
    setup_logging(Settings(log_file=str(tmp_path / "first.log")))
    setup_logging(Settings(log_file=str(tmp_path / "second.log")))

    assert [h.baseFilename for h in file_handlers()] == [str((tmp_path / "second.log").resolve())]

    setup_logging(Settings(log_file=None))
    assert file_handlers() == []
