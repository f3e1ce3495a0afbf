"""
Logging helpers.

The library only creates loggers; nothing is configured on import.
Applications that want ads' log output call setup_logging().
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from .config import LOG_FORMATS, LOG_LEVELS, get_settings
from .errors import ConfigError

# Package logger, e.g. "backend.ads"
ROOT_LOGGER = __name__.rpartition(".")[0]

DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

SIMPLE_FORMAT = "%(levelname)s - %(name)s - %(message)s"

DETAILED_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(module)s.%(funcName)s:%(lineno)d - %(message)s"


class JsonFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def build_formatter(log_format: str) -> logging.Formatter:
    """
    Create the formatter for a format name.

    Raises:
        ConfigError: If the name is not one of LOG_FORMATS.
    """
    fmt = log_format.lower()
    if fmt not in LOG_FORMATS:
        raise ConfigError(f"log_format must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}")
    if fmt == "json":
        return JsonFormatter(datefmt=DATE_FORMAT)
    if fmt == "detailed":
        return logging.Formatter(DETAILED_FORMAT, datefmt=DATE_FORMAT)
    return logging.Formatter(SIMPLE_FORMAT, datefmt=DATE_FORMAT)


def setup_logging(
    level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Attach a stream handler to the package logger.

    Args:
        level: Override the level from the active settings.
        log_format: Override the format (simple, detailed, json).

    Returns:
        The configured package logger.

    Raises:
        ConfigError: If level or log_format is not a known value.
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    if level not in LOG_LEVELS:
        raise ConfigError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
    fmt = (log_format or settings.log_format).lower()
    formatter = build_formatter(fmt)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)

    # Replace our own handler on repeated calls
    for handler in logger.handlers[:]:
        if getattr(handler, "_ads_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(formatter)
    handler._ads_handler = True
    logger.addHandler(handler)

    logger.debug("Logging configured: level=%s, format=%s", level, fmt)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the package namespace.

    Args:
        name: Module name, usually __name__.
    """
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
