"""Shared fixtures for recordstore tests."""

import logging

import pytest
import structlog

from recordstore.core.config import get_settings


@pytest.fixture(autouse=True)
def reset_global_state():
    """Undo logging configuration and cached settings left by a test."""
    yield
    structlog.reset_defaults()
    root = logging.getLogger()
    for handler in list(root.handlers):
        if isinstance(handler, logging.StreamHandler) and not type(handler).__module__.startswith("_pytest"):
            root.removeHandler(handler)
            handler.close()
    get_settings.cache_clear()
