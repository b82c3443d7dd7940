"""
Centralized configuration management for QTelemetry.

This module provides utilities for accessing configuration consistently
across all modules and avoiding hardcoded values.
"""

import os
from typing import Dict, Any, Optional
from flask import current_app


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""
    pass


def get_app_config() -> Dict[str, Any]:
    """
    Get the current application configuration.

    Returns:
        Dict containing the application configuration

    Raises:
        ConfigError: If configuration is not available
    """
    try:
        return current_app.config['QTELEMETRY_CONFIG']
    except (RuntimeError, KeyError) as e:
        raise ConfigError(
            "Application configuration not available. "
            "This function must be called within a Flask application context."
        ) from e


def get_config_value(key: str, default: Any = None) -> Any:
    """
    Get a specific configuration value.

    Args:
        key: Configuration key to retrieve
        default: Default value if key is not found

    Returns:
        Configuration value or default
    """
    try:
        config = get_app_config()
        return config.get(key, default)
    except ConfigError:
        # Fallback for cases outside Flask context
        return default


def get_status_bar() -> Dict[str, Any]:
    """Get the static status bar content from config."""
    return get_config_value('status_bar', dict(DEFAULT_STATUS_BAR))


def get_links() -> Dict[str, str]:
    """Get the outbound page links from config."""
    return get_config_value('links', dict(DEFAULT_LINKS))


def parse_seed(value: Any) -> Optional[int]:
    """
    Normalize a seed value coming from the environment, CLI or YAML.

    Raises:
        ConfigError: If the value is not an integer
    """
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ConfigError(f"Seed must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ConfigError(f"Seed must be an integer, got {value!r}")
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Seed must be an integer, got {value!r}") from e


def merge_file_config(config: Dict[str, Any], file_data: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Overlay values from a YAML configuration file onto a config dict.

    Only ``host``, ``port``, ``seed`` and ``intervals`` are read from the file.

    Raises:
        ConfigError: If the file content is not a mapping
    """
    if file_data is None:
        return config
    if not isinstance(file_data, dict):
        raise ConfigError("Configuration file must contain a mapping")

    for key in ('host', 'port'):
        if key in file_data:
            config[key] = file_data[key]
    if 'seed' in file_data:
        config['seed'] = parse_seed(file_data['seed'])

    intervals = file_data.get('intervals') or {}
    if not isinstance(intervals, dict):
        raise ConfigError("'intervals' must be a mapping of unit name to seconds")
    unknown = set(intervals) - set(DEFAULT_INTERVALS)
    if unknown:
        raise ConfigError(f"Unknown simulator intervals: {', '.join(sorted(unknown))}")
    config['intervals'] = {**config.get('intervals', DEFAULT_INTERVALS), **intervals}
    return config


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration values.

    Args:
        config: Configuration dictionary to validate

    Raises:
        ConfigError: If configuration is invalid
    """
    # Validate port range
    port = config.get('port', DEFAULT_PORT)
    if not isinstance(port, int) or isinstance(port, bool) or not (1 <= port <= 65535):
        raise ConfigError(f"Port number must be between 1 and 65535, got {port}")

    seed = config.get('seed')
    if seed is not None and (not isinstance(seed, int) or isinstance(seed, bool)):
        raise ConfigError(f"Seed must be an integer, got {seed!r}")

    for name, interval in config.get('intervals', {}).items():
        if name not in DEFAULT_INTERVALS:
            raise ConfigError(f"Unknown simulator interval: {name}")
        if not isinstance(interval, (int, float)) or isinstance(interval, bool) or interval <= 0:
            raise ConfigError(f"Interval for '{name}' must be a positive number of seconds, got {interval!r}")


# Constants for default values - centralized in one place
DEFAULT_PORT = 5010
DEFAULT_HOST = '127.0.0.1'

# Tick period of each simulator unit, in seconds
DEFAULT_INTERVALS = {
    'qubits': 0.1,
    'coherence': 0.5,
    'gates': 0.3,
    'probability': 0.2,
    'clock': 1.0,
}

DEFAULT_STATUS_BAR = {
    'status': 'QUANTUM PROCESSOR ONLINE',
    'fidelity': '99.2%',
    'qubits': 8,
    'temperature': '15mK',
}

DEFAULT_LINKS = {
    'source': 'https://github.com/kloudski/obaro-quantum-dashboard',
    'portfolio': 'https://kloudski.dev',
}
