"""
Configuration Management Module

YAML-based configuration for the Kalshi REST transport.

Key Features:
- YAML configuration with ${VAR} and ${VAR:default} environment substitution
- .env file loading via python-dotenv (existing environment wins)
- KALSHI_* environment overrides for credentials and environment selection
- Type-safe conversion into msgspec structs
- Clear error messages naming the offending setting

Usage:
    from kalshi_transport.config import load_config

    config = load_config('config.yaml')
    base_url = config.get_base_url()
    max_attempts = config.network.max_attempts
"""

import os
import re
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import msgspec
import yaml
from dotenv import load_dotenv

from ..infrastructure.exceptions.system import ConfigurationError
from ..infrastructure.logging import get_logger, LoggingConfig
from .structs import KalshiConfig

# Pre-compiled regex patterns
ENV_VAR_PATTERN = re.compile(r'\$\{([^}]+)\}')
ENV_VAR_DEFAULT_PATTERN = re.compile(r'^([^:]+):(.*)$')

ENV_API_KEY_ID = 'KALSHI_API_KEY_ID'
ENV_PRIVATE_KEY_PATH = 'KALSHI_PRIVATE_KEY_PATH'
ENV_PRODUCTION = 'KALSHI_PRODUCTION'

_TRUE_VALUES = {'1', 'true', 'yes', 'on'}
_FALSE_VALUES = {'0', 'false', 'no', 'off', ''}


def _logger():
    return get_logger('config.manager')


def substitute_env_vars(content: str) -> str:
    """
    Substitute environment variables in configuration content.

    Supports syntax:
    - ${VAR_NAME} - Environment variable, empty when unset
    - ${VAR_NAME:default} - Optional with default value

    Args:
        content: Raw configuration content

    Returns:
        Content with environment variables substituted
    """
    def replace_var(match):
        var_expr = match.group(1)

        default_match = ENV_VAR_DEFAULT_PATTERN.match(var_expr)
        if default_match:
            var_name, default_value = default_match.groups()
            env_value = os.getenv(var_name.strip())
            if env_value is None:
                return default_value
            return env_value

        # Allow empty for public-only mode
        var_name = var_expr.strip()
        env_value = os.getenv(var_name)
        if env_value is None:
            _logger().warning("Environment variable not set - using empty value", variable=var_name)
            return ''
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, content)


def parse_bool(value: str, setting_name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean value: {value!r}", setting_name)


def apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay KALSHI_* environment variables onto raw configuration data."""
    result = dict(data)
    credentials = dict(result.get('credentials') or {})

    api_key_id = os.getenv(ENV_API_KEY_ID)
    if api_key_id:
        credentials['api_key_id'] = api_key_id

    key_path = os.getenv(ENV_PRIVATE_KEY_PATH)
    if key_path:
        credentials['private_key_path'] = key_path

    if credentials:
        result['credentials'] = credentials

    production = os.getenv(ENV_PRODUCTION)
    if production is not None:
        result['production'] = parse_bool(production, 'production')

    return result


def _load_env_file(env_file: Optional[Union[str, Path]]) -> None:
    if env_file is not None:
        env_path = Path(env_file)
        if not env_path.exists():
            raise ConfigurationError(f"Environment file not found: {env_path}", "env_file")
        load_dotenv(dotenv_path=env_path, override=False)
        _logger().debug("Loaded environment file", path=str(env_path))
        return

    # Searches from the working directory upwards
    if load_dotenv(override=False):
        _logger().debug("Loaded environment file from default search path")


def _read_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        raise ConfigurationError(f"Configuration file not found: {path}", "config_file")

    try:
        raw_content = path.read_text(encoding='utf-8')
        config_data = yaml.safe_load(substitute_env_vars(raw_content))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}", "config_file") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}", "config_file") from e

    if config_data is None:
        return {}
    if not isinstance(config_data, dict):
        raise ConfigurationError(f"Configuration root must be a mapping, got {type(config_data).__name__}",
                                 "config_file")
    return config_data


def load_config_with_logging(
    path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None
) -> Tuple[KalshiConfig, Optional[LoggingConfig]]:
    """
    Load configuration plus the optional 'logging' section.

    Args:
        path: YAML file; when None only defaults and environment are used
        env_file: Explicit .env file; when None the default search applies

    Returns:
        Tuple of validated KalshiConfig and LoggingConfig (None if absent)

    Raises:
        ConfigurationError: If the file or any setting is invalid
    """
    _load_env_file(env_file)

    data: Dict[str, Any] = _read_yaml(Path(path)) if path is not None else {}
    logging_data = data.pop('logging', None)
    data = apply_env_overrides(data)

    try:
        config = msgspec.convert(data, type=KalshiConfig, strict=False)
    except msgspec.ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}", _error_path(e)) from e

    config.validate()

    logging_config = None
    if logging_data is not None:
        try:
            logging_config = LoggingConfig.from_dict(logging_data)
        except msgspec.ValidationError as e:
            raise ConfigurationError(f"Invalid logging configuration: {e}", "logging") from e

    _logger().info("Configuration loaded",
                   environment=config.environment,
                   base_url=config.get_base_url(),
                   credentials=config.credentials.get_preview(),
                   max_attempts=config.network.max_attempts)

    return config, logging_config


def load_config(
    path: Optional[Union[str, Path]] = None,
    env_file: Optional[Union[str, Path]] = None
) -> KalshiConfig:
    """Load and validate KalshiConfig from YAML, .env and environment."""
    config, _ = load_config_with_logging(path, env_file)
    return config


def _error_path(error: msgspec.ValidationError) -> Optional[str]:
    # msgspec reports locations as "... - at `$.network.max_retries`"
    match = re.search(r'`\$\.([^`]+)`', str(error))
    return match.group(1) if match else None
