"""
Test configuration and fixtures for the dsdocs project.

This file is the root pytest configuration file that sets up pytest
markers and imports fixtures from the fixtures modules to make them
available to all tests.
"""

import logging

import pytest

# Import fixtures from the fixtures modules to make them available to all tests
from tests.fixtures.base import (
    base_test_env,
    mock_env_vars,
    temp_dir,
    mock_response,
    mock_requests_session,
)
from tests.fixtures.specs import (
    full_spec,
    mock_spec_source,
    distributions,
    mock_metastore,
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: mark a test as a unit test")
    config.addinivalue_line("markers", "integration: mark a test as an integration test")
    config.addinivalue_line("markers", "api: mark a test that tests API functionality")
    config.addinivalue_line("markers", "cli: mark a test that tests CLI functionality")


@pytest.fixture(autouse=True)
def reset_dsdocs_logger():
    """Give every test an unconfigured, propagating dsdocs logger."""
    yield
    logger = logging.getLogger("dsdocs")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
