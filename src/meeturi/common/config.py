"""Loading of MeetUriConfig from YAML files and environment variables."""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from meeturi.common.config_schema import MeetUriConfig
from meeturi.common.log_events import LogEvent
from meeturi.common.logging import get_logger

logger = get_logger(__name__)

CONFIG_PATH_ENV = 'MEETURI_CONFIG'

# env var -> path inside the raw config dict
ENV_OVERRIDES = {
    'MEETURI_FALLBACK_SCHEME': ['fallback_scheme'],
    'MEETURI_LOG_LEVEL': ['logging', 'log_level'],
}


class ConfigValidationError(Exception):
    """Raised when configuration validation fails"""
    pass


def _read_yaml(config_file: Path) -> dict[str, Any]:
    if not config_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_file}")

    with open(config_file, encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    if not isinstance(config, dict):
        raise ConfigValidationError(
            f"Configuration file {config_file} must contain a mapping, "
            f"got {type(config).__name__}"
        )
    return config


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides on top of the file contents"""
    for env_var, config_path in ENV_OVERRIDES.items():
        if env_var in os.environ:
            current = config
            for key in config_path[:-1]:
                current = current.setdefault(key, {})
            current[config_path[-1]] = os.environ[env_var]
            logger.log_event(LogEvent.CONFIG_ENV_OVERRIDE, env_var=env_var, key='.'.join(config_path))

    return config


def _format_validation_error(error: ValidationError) -> str:
    error_lines = ["Configuration validation failed:", ""]

    for item in error.errors():
        location = " -> ".join(str(loc) for loc in item['loc']) or '<root>'
        error_type = item['type']

        if 'extra_forbidden' in error_type:
            field_name = item['loc'][-1] if item['loc'] else 'unknown'
            error_lines.append(f"  Unknown key '{field_name}' at {location}")
            error_lines.append("     This might be a typo. Check your configuration file.")
        elif 'value_error' in error_type:
            error_lines.append(f"  Value error at {location}: {item['msg']}")
        else:
            error_lines.append(f"  Error at {location}: {item['msg']}")

    return "\n".join(error_lines)


def load_config(path: str | Path | None = None) -> MeetUriConfig:
    """
    Load and validate configuration.

    The file is taken from ``path``, else from the MEETURI_CONFIG environment
    variable; without either only defaults and environment overrides apply.

    Raises:
        FileNotFoundError: If the selected file does not exist
        ConfigValidationError: If the configuration is invalid
    """
    if path is None:
        path = os.environ.get(CONFIG_PATH_ENV) or None

    raw_config = _read_yaml(Path(path)) if path is not None else {}
    raw_config = _apply_env_overrides(raw_config)

    try:
        config = MeetUriConfig.from_dict(raw_config)
    except ValidationError as e:
        error_message = _format_validation_error(e)
        logger.log_event(LogEvent.CONFIGURATION_ERROR, message=error_message, path=str(path))
        raise ConfigValidationError(error_message) from e

    logger.log_event(LogEvent.CONFIG_LOADED, path=str(path) if path is not None else None)
    return config
