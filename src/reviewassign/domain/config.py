"""Configuration file loading and validation

Settings come from three layers, later ones winning: built-in defaults, an
optional YAML file, and REVIEWASSIGN_* environment variables.
"""

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import yaml

from reviewassign.domain.constants import (
    DEFAULT_BUSY_TIMEOUT_SECONDS,
    DEFAULT_DATABASE_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_REVIEWERS,
    ENV_BUSY_TIMEOUT,
    ENV_CONFIG_PATH,
    ENV_DATABASE_PATH,
    ENV_LOG_LEVEL,
    ENV_MAX_REVIEWERS,
    ENV_RANDOM_SEED,
)
from reviewassign.domain.exceptions import (
    ConfigurationError,
    ConfigurationFileNotFoundError,
)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class AppConfig:
    """Resolved application settings"""

    database_path: str = DEFAULT_DATABASE_PATH
    max_reviewers: int = DEFAULT_MAX_REVIEWERS
    log_level: str = DEFAULT_LOG_LEVEL
    busy_timeout_seconds: float = DEFAULT_BUSY_TIMEOUT_SECONDS
    random_seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["AppConfig"] = None) -> "AppConfig":
        """Factory: Apply YAML keys on top of a base configuration

        Args:
            data: Parsed YAML mapping (camelCase keys)
            base: Configuration to start from (default: built-in defaults)

        Returns:
            New AppConfig instance

        Raises:
            ConfigurationError: If a value has the wrong type
        """
        config = base or cls()
        try:
            return cls(
                database_path=str(data.get("databasePath", config.database_path)),
                max_reviewers=int(data.get("maxReviewers", config.max_reviewers)),
                log_level=str(data.get("logLevel", config.log_level)).upper(),
                busy_timeout_seconds=float(
                    data.get("busyTimeoutSeconds", config.busy_timeout_seconds)
                ),
                random_seed=_optional_int(data.get("randomSeed", config.random_seed)),
            )
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid configuration value: {e}")

    def validate(self) -> "AppConfig":
        """Check value ranges

        Returns:
            Self, for chaining

        Raises:
            ConfigurationError: If a value is out of range
        """
        if self.max_reviewers < 0:
            raise ConfigurationError(
                f"maxReviewers must be zero or positive, got {self.max_reviewers}"
            )
        if self.log_level not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                f"logLevel must be one of {', '.join(VALID_LOG_LEVELS)}, got {self.log_level}"
            )
        if self.busy_timeout_seconds < 0:
            raise ConfigurationError(
                f"busyTimeoutSeconds must be zero or positive, got {self.busy_timeout_seconds}"
            )
        if not self.database_path:
            raise ConfigurationError("databasePath must not be empty")
        return self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "databasePath": self.database_path,
            "maxReviewers": self.max_reviewers,
            "logLevel": self.log_level,
            "busyTimeoutSeconds": self.busy_timeout_seconds,
            "randomSeed": self.random_seed,
        }


def load_config(file_path: str) -> Dict[str, Any]:
    """Load YAML configuration file and return parsed content

    Args:
        file_path: Path to YAML configuration file (.yml or .yaml)

    Returns:
        Parsed configuration as dictionary

    Raises:
        ConfigurationFileNotFoundError: If file doesn't exist
        ConfigurationError: If file is invalid YAML or not a mapping
    """
    if not os.path.exists(file_path):
        raise ConfigurationFileNotFoundError(f"File not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        content = f.read()
    return load_config_from_string(content, file_path)


def load_config_from_string(content: str, source_name: str = "config") -> Dict[str, Any]:
    """Load YAML configuration from string content

    An empty document yields an empty mapping.

    Args:
        content: YAML content as string
        source_name: Name of the source (for error messages)

    Returns:
        Parsed configuration as dictionary

    Raises:
        ConfigurationError: If content is invalid YAML or not a mapping
    """
    try:
        config = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {source_name}: {str(e)}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Invalid configuration in {source_name}: expected a mapping, "
            f"got {type(config).__name__}"
        )
    return config


def apply_environment(config: AppConfig, environ: Mapping[str, str]) -> AppConfig:
    """Override settings from REVIEWASSIGN_* environment variables

    Empty variables are ignored. Numeric variables that fail to parse keep
    the current value.

    Args:
        config: Configuration to start from
        environ: Environment mapping (usually os.environ)

    Returns:
        New AppConfig instance
    """
    return AppConfig(
        database_path=environ.get(ENV_DATABASE_PATH) or config.database_path,
        max_reviewers=_env_int(environ, ENV_MAX_REVIEWERS, config.max_reviewers),
        log_level=(environ.get(ENV_LOG_LEVEL) or config.log_level).upper(),
        busy_timeout_seconds=_env_float(environ, ENV_BUSY_TIMEOUT, config.busy_timeout_seconds),
        random_seed=_env_int(environ, ENV_RANDOM_SEED, config.random_seed),
    )


def load_app_config(
    file_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """Resolve the application configuration

    Args:
        file_path: Optional YAML file; falls back to $REVIEWASSIGN_CONFIG
        environ: Environment mapping (default: os.environ)

    Returns:
        Validated AppConfig

    Raises:
        ConfigurationFileNotFoundError: If the named file doesn't exist
        ConfigurationError: If the file or a resolved value is invalid
    """
    if environ is None:
        environ = os.environ

    config = AppConfig()
    path = file_path or environ.get(ENV_CONFIG_PATH)
    if path:
        config = AppConfig.from_dict(load_config(path), base=config)

    return apply_environment(config, environ).validate()


def configure_logging(level: str) -> None:
    """Send log records to stderr at the given level"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _env_int(environ: Mapping[str, str], key: str, default):
    value = environ.get(key)
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _env_float(environ: Mapping[str, str], key: str, default: float) -> float:
    value = environ.get(key)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default
