"""
Base fixtures for the DSDOCS testing framework.

This module provides foundational fixtures that can be used across all test types
to ensure consistent test setup and teardown.
"""

import os
import tempfile
from pathlib import Path
from typing import Dict, Generator
from unittest.mock import MagicMock

import pytest


@pytest.fixture
def base_test_env() -> Dict[str, str]:
    """
    Provide a standardized set of environment variables for testing.

    Returns:
        Dict[str, str]: Dictionary of environment variables
    """
    return {
        "DSDOCS_LOG_LEVEL": "DEBUG",
        "DSDOCS_METASTORE_URL": "https://data.example.com",
        "DSDOCS_METASTORE_TIMEOUT": "5",
        "DSDOCS_DISCOVER_MODIFIERS": "false",
    }


@pytest.fixture
def mock_env_vars(base_test_env: Dict[str, str]) -> Generator[Dict[str, str], None, None]:
    """
    Set and restore environment variables for tests.

    Args:
        base_test_env: The base testing environment variables

    Yields:
        Dict[str, str]: The applied environment variables
    """
    original_environ = os.environ.copy()

    # Apply the test environment
    os.environ.update(base_test_env)

    yield base_test_env

    # Restore original environment
    os.environ.clear()
    os.environ.update(original_environ)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """
    Create a temporary directory for test files.

    Yields:
        Path: Path to the temporary directory
    """
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def mock_response() -> MagicMock:
    """
    Create a mock HTTP response object for testing.

    Returns:
        MagicMock: A mock response object
    """
    mock = MagicMock()
    mock.status_code = 200
    mock.json.return_value = {"identifier": "abc-123", "distribution": []}
    mock.headers = {"Content-Type": "application/json"}
    return mock


@pytest.fixture
def mock_requests_session(mock_response: MagicMock) -> MagicMock:
    """
    A mock requests session whose GET returns ``mock_response``.

    Args:
        mock_response: The mock response to return from requests

    Returns:
        MagicMock: The mock session object
    """
    session = MagicMock()
    session.get.return_value = mock_response
    return session
