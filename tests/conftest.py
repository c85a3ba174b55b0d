"""
Shared pytest fixtures for transferobject tests.
"""

import logging
import os

import pytest

from transferobject.config import settings as settings_module


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test against default settings, ignoring the caller's environment."""
    for key in list(os.environ):
        if key.startswith('TRANSFEROBJECT_'):
            monkeypatch.delenv(key)
    settings_module._settings = None

    yield

    settings_module._settings = None


@pytest.fixture
def package_logger():
    """The package logger, restored to its original handlers and level afterwards."""
    logger = logging.getLogger('transferobject')
    handlers = list(logger.handlers)
    level = logger.level

    yield logger

    logger.handlers = handlers
    logger.setLevel(level)
