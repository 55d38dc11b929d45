"""Configuration management for graalbuild."""

from graalbuild.core.config.loader import ConfigLoader
from graalbuild.core.config.settings import (
    LoggingSettings,
    NativeImageSettings,
    Settings,
    get_settings,
)

__all__ = [
    "ConfigLoader",
    "LoggingSettings",
    "NativeImageSettings",
    "Settings",
    "get_settings",
]
