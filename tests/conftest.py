"""Pytest configuration and fixtures."""

import logging

import pytest

from assertree.config import reset_config


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Detach handlers added to assertree loggers so tests don't leak log files."""
    yield

    # Module-level loggers hold references, so clear rather than delete them
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("assertree"):
            continue
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from default settings."""
    reset_config()
    yield
    reset_config()
