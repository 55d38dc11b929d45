"""Logging for the build step.

Messages go to stderr so the native-image output on stdout stays readable.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

from graalbuild.core.config.settings import LoggingSettings, get_settings

FILE_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _console_handler(settings: LoggingSettings) -> logging.Handler:
    if settings.use_rich:
        return RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(settings.format))
    return handler


def setup_logging(settings: LoggingSettings | None = None) -> None:
    """Install the root handlers, replacing any existing ones.

    Args:
        settings: Logging settings. Uses global settings if not provided.
    """
    if settings is None:
        settings = get_settings().logging

    level = getattr(logging, settings.level)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    root_logger.addHandler(_console_handler(settings))

    if settings.file:
        settings.file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(settings.file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """Get a logger, configuring logging on first use.

    Args:
        name: Logger name (typically __name__).

    Returns:
        Logger instance.
    """
    if name not in _loggers:
        _loggers[name] = logging.getLogger(name)
        if not logging.getLogger().handlers:
            setup_logging()
    return _loggers[name]
