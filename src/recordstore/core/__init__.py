"""
recordstore Core Module

Core configuration, settings, and utilities.
"""

from .config import (
    Settings,
    StorageSettings,
    LogSettings,
    get_settings,
)
from .logging import setup_logging, get_logger

__all__ = [
    # Settings
    "Settings",
    "StorageSettings",
    "LogSettings",
    "get_settings",
    # Logging
    "setup_logging",
    "get_logger",
]
