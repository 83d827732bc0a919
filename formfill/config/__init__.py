"""Configuration management for formfill."""

from .environment import EnvironmentConfig, load_environment_config
from .exceptions import ConfigurationError
from .loader import (
    load_alias_table,
    load_config,
    load_form,
    load_profile,
    resolve_alias_table,
    validate_config_file,
)
from .models import (
    AliasRecord,
    AppConfig,
    FillConfig,
    LogFormat,
    LogLevel,
    LoggingConfig,
)

__all__ = [
    # Loader functions
    "load_config",
    "load_alias_table",
    "resolve_alias_table",
    "load_profile",
    "load_form",
    "validate_config_file",
    "load_environment_config",
    # Configuration models
    "AppConfig",
    "AliasRecord",
    "FillConfig",
    "LoggingConfig",
    "EnvironmentConfig",
    # Enums
    "LogLevel",
    "LogFormat",
    # Exceptions
    "ConfigurationError",
]
