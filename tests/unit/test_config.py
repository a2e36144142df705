"""
Copyright (c) 2025 Eric C. Mumford (@heymumford)
This file is part of DSDOCS, licensed under the MIT License.
See LICENSE file for details.
"""

"""
Unit tests for configuration management module.

These tests verify that the configuration module correctly handles environment variables,
validation, and default values for the docs generator, metastore client and logging.
"""

import logging
import os
from pathlib import Path
from unittest.mock import patch

import pytest

from dsdocs.core.config import (
    DEFAULT_SPEC_PATH,
    AppConfig,
    DocsConfig,
    LoggingConfig,
    MetastoreConfig,
    get_app_config,
    init_app_config,
)


@pytest.mark.unit
class TestLoggingConfig:
    """Tests for the logging configuration."""

    def test_logging_config_defaults(self):
        """Test that logging config has sensible defaults."""
        with patch.dict(os.environ, {}, clear=True):
            config = LoggingConfig()
        assert config.level == "INFO"
        assert config.format == "%(message)s"
        assert config.date_format == "[%X]"
        assert config.use_rich is True
        assert config.json_format is False

    def test_logging_config_validation(self):
        """Test that log level validation works."""
        for level in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            assert LoggingConfig(level=level).level == level

        # Lower case is accepted, invalid falls back to INFO
        assert LoggingConfig(level="debug").level == "DEBUG"
        assert LoggingConfig(level="INVALID").level == "INFO"

    def test_get_log_level_int(self):
        """Test converting log level to int."""
        assert LoggingConfig(level="DEBUG").get_log_level_int() == logging.DEBUG
        assert LoggingConfig(level="WARNING").get_log_level_int() == logging.WARNING

    @patch("dsdocs.core.logging.configure_logging")
    def test_configure_logging(self, mock_configure):
        """Test that logging configuration is handed to the logging module."""
        config = LoggingConfig(level="WARNING", json_format=True)
        config.configure_logging()

        kwargs = mock_configure.call_args.kwargs
        assert kwargs["level"] == logging.WARNING
        assert kwargs["json_format"] is True

        # Debug mode overrides level
        config.configure_logging(debug=True)
        assert mock_configure.call_args.kwargs["level"] == logging.DEBUG

    @patch.dict(os.environ, {"DSDOCS_LOG_LEVEL": "DEBUG", "DSDOCS_LOG_JSON": "true"})
    def test_from_env(self):
        """Test creating config from environment variables."""
        config = LoggingConfig.from_env()
        assert config.level == "DEBUG"
        assert config.json_format is True

        # Override with direct values
        config = LoggingConfig.from_env(level="ERROR")
        assert config.level == "ERROR"
        assert config.json_format is True


@pytest.mark.unit
class TestMetastoreConfig:
    """Tests for the metastore configuration."""

    def test_defaults(self):
        config = MetastoreConfig(base_url="https://data.example.com")
        assert config.timeout == 30.0
        assert config.verify_ssl is True
        assert config.api_token is None

    def test_trailing_slash_is_stripped(self):
        assert MetastoreConfig(base_url="https://data.example.com/").base_url == "https://data.example.com"

    def test_invalid_url(self):
        with pytest.raises(ValueError):
            MetastoreConfig(base_url="data.example.com")

    def test_invalid_timeout(self):
        with pytest.raises(ValueError):
            MetastoreConfig(base_url="https://data.example.com", timeout=0)

    @patch.dict(
        os.environ,
        {
            "DSDOCS_METASTORE_URL": "https://catalog.example.org",
            "DSDOCS_METASTORE_TIMEOUT": "12.5",
            "DSDOCS_METASTORE_VERIFY_SSL": "false",
            "DSDOCS_METASTORE_TOKEN": "abc",
        },
    )
    def test_from_env(self):
        config = MetastoreConfig.from_env()
        assert config.base_url == "https://catalog.example.org"
        assert config.timeout == 12.5
        assert config.verify_ssl is False
        assert config.api_token == "abc"

        # None overrides leave the environment value alone
        assert MetastoreConfig.from_env(base_url=None).base_url == "https://catalog.example.org"
        assert MetastoreConfig.from_env(base_url="http://other").base_url == "http://other"


@pytest.mark.unit
class TestDocsConfig:
    """Tests for the docs configuration."""

    def test_defaults(self):
        with patch.dict(os.environ, {}, clear=True):
            config = DocsConfig.from_env()
        assert config.spec_path == DEFAULT_SPEC_PATH
        assert config.endpoints_to_keep == {
            "metastore/schemas/dataset/items/{identifier}": ["get"],
            "datastore/sql": ["get"],
        }
        assert config.discover_modifiers is True

    @patch.dict(os.environ, {"DSDOCS_SPEC_PATH": "/tmp/spec.yml", "DSDOCS_DISCOVER_MODIFIERS": "no"})
    def test_from_env(self):
        config = DocsConfig.from_env()
        assert config.spec_path == Path("/tmp/spec.yml")
        assert config.discover_modifiers is False


@pytest.mark.unit
class TestAppConfig:
    """Tests for the aggregated application configuration."""

    def test_from_env(self, mock_env_vars):
        config = AppConfig.from_env()
        assert config.logging.level == "DEBUG"
        assert config.metastore.base_url == "https://data.example.com"
        assert config.metastore.timeout == 5.0
        assert config.docs.discover_modifiers is False
        assert config.debug is False

    def test_nested_overrides(self, mock_env_vars):
        config = AppConfig.from_env(
            metastore={"base_url": "https://other.example.com"},
            docs=DocsConfig(discover_modifiers=True),
            debug=True,
        )
        assert config.metastore.base_url == "https://other.example.com"
        assert config.docs.discover_modifiers is True
        assert config.debug is True

    def test_global_config(self, mock_env_vars):
        config = init_app_config(app_version="9.9.9")
        assert get_app_config() is config
        assert config.app_version == "9.9.9"

        explicit = AppConfig()
        assert init_app_config(explicit) is explicit
        assert get_app_config() is explicit
