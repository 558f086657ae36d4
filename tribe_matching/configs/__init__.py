"""Configuration loading module."""

from .loader import (
    load_config,
    validate_config,
    get_config_value,
    setup_logging,
    resolve_path,
    DEFAULT_CONFIG_PATH,
)

__all__ = [
    "load_config",
    "validate_config",
    "get_config_value",
    "setup_logging",
    "resolve_path",
    "DEFAULT_CONFIG_PATH",
]
