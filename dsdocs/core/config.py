"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Configuration management for DSDOCS.

This module provides a central location for all configuration settings in DSDOCS.
It handles environment variables, default values, and validation of configuration
parameters for the docs generator, the metastore client and logging.
"""

import logging
import os
from pathlib import Path
from typing import Any, ClassVar

from pydantic import BaseModel, Field, field_validator

from dsdocs.endpoint_filter import DEFAULT_ENDPOINTS_TO_KEEP

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_SPEC_PATH = Path(__file__).parent.parent / "specs" / "metastore-openapi.yml"


def _env_bool(value: str | bool) -> bool:
    if isinstance(value, bool):
        return value
    return value.strip().lower() in ("1", "true", "yes", "on")


class BaseConfig(BaseModel):
    """Base configuration class with common functionality."""

    # Class variable to store environment variable prefixes
    ENV_PREFIX: ClassVar[str] = "DSDOCS_"

    @classmethod
    def from_env(cls, **overrides) -> "BaseConfig":
        """
        Create a configuration instance from environment variables.

        Args:
        ----
            **overrides: Key-value pairs that override environment variables

        Returns:
        -------
            An instance of the configuration class

        """
        raise NotImplementedError("Subclasses must implement from_env method")

    @classmethod
    def get_env_var(cls, key: str, default: Any = None) -> Any:
        """
        Get an environment variable with the class prefix.

        Args:
        ----
            key: Key name without prefix
            default: Default value if environment variable is not found

        Returns:
        -------
            The environment variable value or default

        """
        env_key = f"{cls.ENV_PREFIX}{key.upper()}"
        return os.environ.get(env_key, default)


class LoggingConfig(BaseConfig):
    """Configuration for logging settings."""

    level: str = Field(
        default_factory=lambda: os.environ.get("DSDOCS_LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    format: str = Field(
        default="%(message)s",
        description="Logging format string",
    )
    date_format: str = Field(
        default="[%X]",
        description="Date format for logging timestamps",
    )
    use_rich: bool = Field(
        default=True,
        description="Whether to use rich for logging formatting",
    )
    log_file: str | None = Field(
        default=None,
        description="Path to the log file (None for console-only logging)",
    )
    json_format: bool = Field(
        default=False,
        description="Whether to use JSON format for logs",
    )
    include_correlation_id: bool = Field(
        default=True,
        description="Whether to include correlation IDs in logs",
    )

    @field_validator("level")
    @classmethod
    def validate_level(cls, value):
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        value = value.upper()
        if value not in valid_levels:
            logger.warning(f"Invalid log level '{value}', defaulting to INFO")
            return "INFO"
        return value

    @classmethod
    def from_env(cls, **overrides) -> "LoggingConfig":
        """Create a logging configuration from environment variables."""
        config = {
            "level": cls.get_env_var("LOG_LEVEL", "INFO"),
            "format": cls.get_env_var("LOG_FORMAT", "%(message)s"),
            "date_format": cls.get_env_var("LOG_DATE_FORMAT", "[%X]"),
            "use_rich": _env_bool(cls.get_env_var("LOG_USE_RICH", "true")),
            "log_file": cls.get_env_var("LOG_FILE", None),
            "json_format": _env_bool(cls.get_env_var("LOG_JSON", "false")),
            "include_correlation_id": _env_bool(cls.get_env_var("LOG_CORRELATION_ID", "true")),
        }

        # Override with any directly provided values
        config.update(overrides)

        return cls(**config)

    def get_log_level_int(self) -> int:
        """Get the numeric logging level."""
        return getattr(logging, self.level)

    def configure_logging(self, debug: bool = False) -> None:
        """
        Configure logging based on the settings.

        Args:
        ----
            debug: Whether to force debug mode

        """
        from dsdocs.core.logging import configure_logging as configure_contextual_logging

        configure_contextual_logging(
            level=logging.DEBUG if debug else self.get_log_level_int(),
            log_file=self.log_file,
            json_format=self.json_format,
            include_timestamp=True,
            use_rich=self.use_rich,
            include_correlation_id=self.include_correlation_id,
            debug=debug,
        )


class MetastoreConfig(BaseConfig):
    """Configuration for the metastore items API."""

    base_url: str = Field(
        ...,
        description="Base URL of the site serving the metastore API",
    )
    timeout: float = Field(
        default=30.0,
        gt=0,
        description="Request timeout in seconds",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Whether to verify TLS certificates",
    )
    api_token: str | None = Field(
        default=None,
        description="Optional bearer token sent with metastore requests",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value):
        """Require an http(s) URL and strip the trailing slash."""
        if not value.startswith(("http://", "https://")):
            raise ValueError(f"Metastore URL must start with http:// or https://: {value}")
        return value.rstrip("/")

    @classmethod
    def from_env(cls, **overrides) -> "MetastoreConfig":
        """Create a metastore configuration from environment variables."""
        config = {
            "base_url": cls.get_env_var("METASTORE_URL", "http://localhost"),
            "timeout": float(cls.get_env_var("METASTORE_TIMEOUT", "30")),
            "verify_ssl": _env_bool(cls.get_env_var("METASTORE_VERIFY_SSL", "true")),
            "api_token": cls.get_env_var("METASTORE_TOKEN", None),
        }

        # Override with any directly provided values
        config.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config)


class DocsConfig(BaseConfig):
    """Configuration for building dataset-specific docs."""

    spec_path: Path = Field(
        default=DEFAULT_SPEC_PATH,
        description="Path to the full OpenAPI document (YAML or JSON)",
    )
    endpoints_to_keep: dict[str, list[str]] = Field(
        default_factory=lambda: {
            pattern: list(methods) for pattern, methods in DEFAULT_ENDPOINTS_TO_KEEP.items()
        },
        description="Path patterns and the HTTP methods kept for each",
    )
    discover_modifiers: bool = Field(
        default=True,
        description="Whether to load data modifiers from installed entry points",
    )

    @classmethod
    def from_env(cls, **overrides) -> "DocsConfig":
        """Create a docs configuration from environment variables."""
        config: dict[str, Any] = {
            "discover_modifiers": _env_bool(cls.get_env_var("DISCOVER_MODIFIERS", "true")),
        }
        spec_path = cls.get_env_var("SPEC_PATH", None)
        if spec_path:
            config["spec_path"] = Path(spec_path)

        # Override with any directly provided values
        config.update({key: value for key, value in overrides.items() if value is not None})

        return cls(**config)


class AppConfig(BaseConfig):
    """Main application configuration that aggregates all other configurations."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )
    metastore: MetastoreConfig = Field(
        default_factory=lambda: MetastoreConfig(base_url="http://localhost"),
        description="Metastore API configuration",
    )
    docs: DocsConfig = Field(
        default_factory=DocsConfig,
        description="Docs generation configuration",
    )
    debug: bool = Field(
        default=False,
        description="Debug mode flag",
    )
    app_name: str = Field(
        default="DSDOCS",
        description="Application name",
    )
    app_version: str = Field(
        default="0.0.0",
        description="Application version",
    )

    @classmethod
    def from_env(cls, **overrides) -> "AppConfig":
        """Create an application configuration from environment variables."""
        config = {
            "logging": LoggingConfig.from_env(),
            "metastore": MetastoreConfig.from_env(),
            "docs": DocsConfig.from_env(),
            "debug": _env_bool(cls.get_env_var("DEBUG", "false")),
            "app_name": cls.get_env_var("APP_NAME", "DSDOCS"),
            "app_version": cls.get_env_var("APP_VERSION", "0.0.0"),
        }

        nested = {"logging": LoggingConfig, "metastore": MetastoreConfig, "docs": DocsConfig}

        # Override with any directly provided values
        for key, value in overrides.items():
            if key in nested and isinstance(value, dict):
                # For nested configs, accept either raw dict or instantiated objects
                config[key] = nested[key](**value)
            elif value is not None:
                config[key] = value

        return cls(**config)

    def configure_logging(self) -> None:
        """Configure logging based on the settings."""
        self.logging.configure_logging(debug=self.debug)


# Global app configuration
_app_config = None


def get_app_config() -> AppConfig:
    """
    Get the global application configuration.

    Returns
    -------
        The application configuration instance

    """
    global _app_config
    if _app_config is None:
        _app_config = AppConfig.from_env()
    return _app_config


def init_app_config(config: AppConfig = None, **kwargs) -> AppConfig:
    """
    Initialize the global application configuration.

    Args:
    ----
        config: An existing AppConfig instance
        **kwargs: Key-value pairs for creating a new AppConfig

    Returns:
    -------
        The application configuration instance

    """
    global _app_config
    _app_config = config if config is not None else AppConfig.from_env(**kwargs)
    return _app_config
