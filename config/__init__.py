"""
Configuration module.

Exports:
    get_settings: Function to get settings
    configure_logging: structlog setup
"""

from config.settings import get_settings, Settings
from config.logging import configure_logging

__all__ = [
    # Settings
    "get_settings",
    "Settings",

    # Logging
    "configure_logging",
]
