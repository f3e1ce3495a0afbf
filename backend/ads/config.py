"""
Library settings.

Settings are a pydantic model that can be built in code, loaded from a YAML
file, or assembled from environment variables. One instance is active per
process and is consulted by the math functions.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("simple", "detailed", "json")

ENV_CONFIG_PATH = "ADS_CONFIG"
ENV_INTEGER_BITS = "ADS_INTEGER_BITS"
ENV_LOG_LEVEL = "ADS_LOG_LEVEL"


class Settings(BaseModel):
    """
    Process-wide options.

    Attributes:
        integer_bits: Width of the unsigned integers the math functions
            emulate. None means Python's unbounded ints.
        log_level: Level applied by logging_config.setup_logging.
        log_format: One of simple, detailed, json.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    integer_bits: Optional[int] = None
    log_level: str = "WARNING"
    log_format: str = "simple"

    @field_validator("integer_bits")
    @classmethod
    def validate_integer_bits(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and v <= 0:
            raise ValueError("integer_bits must be a positive number of bits")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}")
        return level

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        fmt = v.lower()
        if fmt not in LOG_FORMATS:
            raise ValueError(f"log_format must be one of {', '.join(LOG_FORMATS)}")
        return fmt

    @property
    def max_integer(self) -> Optional[int]:
        """Largest value representable with integer_bits, if bounded."""
        if self.integer_bits is None:
            return None
        return (1 << self.integer_bits) - 1


def _build(data: Dict[str, Any], source: str) -> Settings:
    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {source}: {e}") from e


def load_settings(path: Union[str, Path]) -> Settings:
    """
    Load settings from a YAML file.

    Keys may sit at the top level or under an ``ads`` section.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated Settings.

    Raises:
        ConfigError: If the file is missing, malformed, or holds bad values.
    """
    path = Path(path)
    if not path.exists():
        raise ConfigError(f"Settings file not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise ConfigError(f"Settings file is not valid UTF-8: {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Cannot read settings file {path}: {e}") from e

    if data is None:
        return Settings()
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a mapping in {path}, got {type(data).__name__}")

    if "ads" in data:
        data = data["ads"] or {}
        if not isinstance(data, dict):
            raise ConfigError(f"Expected a mapping under 'ads' in {path}")

    logger.debug("Loaded settings from %s: %s", path, data)
    return _build(data, str(path))


def settings_from_env(environ: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build settings from environment variables.

    ADS_CONFIG names a YAML file used as the base; ADS_INTEGER_BITS and
    ADS_LOG_LEVEL override individual fields.
    """
    env = os.environ if environ is None else environ

    base = Settings()
    config_path = env.get(ENV_CONFIG_PATH)
    if config_path:
        base = load_settings(config_path)

    data = base.model_dump()
    bits = env.get(ENV_INTEGER_BITS)
    if bits:
        try:
            data["integer_bits"] = int(bits)
        except ValueError as e:
            raise ConfigError(f"{ENV_INTEGER_BITS} must be an integer, got {bits!r}") from e
    level = env.get(ENV_LOG_LEVEL)
    if level:
        data["log_level"] = level

    return _build(data, "environment")


_active: Settings = Settings()


def get_settings() -> Settings:
    """Return the active settings."""
    return _active


def configure(settings: Optional[Settings] = None, **overrides: Any) -> Settings:
    """
    Replace the active settings.

    Args:
        settings: Base settings; the current ones when omitted.
        **overrides: Individual fields to change.

    Returns:
        The new active settings.
    """
    global _active
    base = settings if settings is not None else _active
    if overrides:
        data = base.model_dump()
        data.update(overrides)
        base = _build(data, "configure()")
    _active = base
    logger.debug("Active settings: %s", _active)
    return _active


def reset_settings() -> Settings:
    """Restore default settings."""
    return configure(Settings())
