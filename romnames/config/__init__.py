"""Configuration loading and validation."""

from romnames.config.loader import (
    DEFAULT_CONFIG,
    ConfigError,
    default_config,
    get_config_value,
    load_config,
)
from romnames.config.validator import ValidationError, validate_config

__all__ = [
    'DEFAULT_CONFIG',
    'ConfigError',
    'ValidationError',
    'default_config',
    'get_config_value',
    'load_config',
    'validate_config',
]
