"""Configuration validation."""

import logging
from typing import Dict, Any, List

logger = logging.getLogger(__name__)

VALID_CONVENTIONS = ['auto', 'tosec', 'nointro', 'goodtools']
VALID_FORMATS = ['table', 'plain']


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    for name, validate in _SECTION_VALIDATORS:
        section = config.get(name)
        if section is None:
            section = {}
        if not isinstance(section, dict):
            errors.append(f"{name} must be a mapping")
            continue
        errors.extend(validate(section))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )
    logger.debug("Configuration validated")


def _validate_bool(section: Dict[str, Any], name: str, key: str, default: bool) -> List[str]:
    if not isinstance(section.get(key, default), bool):
        return [f"{name}.{key} must be a boolean"]
    return []


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    # Validate level
    level = section.get('level', 'WARNING')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
    if level not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    errors.extend(_validate_bool(section, 'logging', 'console', True))

    # Validate optional log file
    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors


def _validate_naming(section: Dict[str, Any]) -> List[str]:
    """Validate naming options section."""
    errors = []

    convention = section.get('convention', 'auto')
    if convention not in VALID_CONVENTIONS:
        errors.append(f"naming.convention must be one of: {', '.join(VALID_CONVENTIONS)}")

    errors.extend(_validate_bool(section, 'naming', 'strict', False))
    errors.extend(_validate_bool(section, 'naming', 'drop_trailing', False))

    return errors


def _validate_dats(section: Dict[str, Any]) -> List[str]:
    """Validate DAT ingestion section."""
    errors = []
    errors.extend(_validate_bool(section, 'dats', 'check_header', True))
    errors.extend(_validate_bool(section, 'dats', 'skip_unparseable', True))
    return errors


def _validate_output(section: Dict[str, Any]) -> List[str]:
    errors = []
    output_format = section.get('format', 'table')
    if output_format not in VALID_FORMATS:
        errors.append(f"output.format must be one of: {', '.join(VALID_FORMATS)}")
    return errors


_SECTION_VALIDATORS = (
    ('logging', _validate_logging),
    ('naming', _validate_naming),
    ('dats', _validate_dats),
    ('output', _validate_output),
)
