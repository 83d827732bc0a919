"""Environment variable loading and validation."""

import os
from typing import Optional

from .exceptions import ConfigurationError
from .models import LogFormat, LogLevel


class EnvironmentConfig:
    """Environment variable configuration holder."""

    def __init__(
        self,
        log_level: Optional[str] = None,
        log_format: Optional[str] = None,
        environment: Optional[str] = None,
        profile_path: Optional[str] = None,
    ):
        """Initialize environment configuration."""
        self.log_level = log_level
        self.log_format = log_format
        self.environment = environment or "local"
        self.profile_path = profile_path


def load_environment_config() -> EnvironmentConfig:
    """
    Load and validate environment variables.

    All variables are optional:
    - FORMFILL_LOG_LEVEL: Override log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - FORMFILL_LOG_FORMAT: Override log format (json, key-value)
    - FORMFILL_ENVIRONMENT: Environment label attached to every log record
    - FORMFILL_PROFILE: Path to the profile file

    Returns:
        EnvironmentConfig object with validated values

    Raises:
        ConfigurationError: If a variable holds an invalid value
    """
    errors = []

    log_level = os.getenv("FORMFILL_LOG_LEVEL")
    log_format = os.getenv("FORMFILL_LOG_FORMAT")
    environment = os.getenv("FORMFILL_ENVIRONMENT")
    profile_path = os.getenv("FORMFILL_PROFILE")

    if log_level:
        log_level = log_level.strip().upper()
        valid_levels = [level.value for level in LogLevel]
        if log_level not in valid_levels:
            errors.append(
                f"Invalid FORMFILL_LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(valid_levels)}"
            )

    if log_format:
        log_format = log_format.strip().lower()
        valid_formats = [fmt.value for fmt in LogFormat]
        if log_format not in valid_formats:
            errors.append(
                f"Invalid FORMFILL_LOG_FORMAT: '{log_format}'. Must be one of: {', '.join(valid_formats)}"
            )

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Unset the variable to fall back to the config file",
                "Check the .env file for typos",
            ],
        )

    return EnvironmentConfig(
        log_level=log_level or None,
        log_format=log_format or None,
        environment=environment.strip() if environment else None,
        profile_path=profile_path.strip() if profile_path else None,
    )
