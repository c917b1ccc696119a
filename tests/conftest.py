"""Shared pytest fixtures."""

import pytest
from loguru import logger


@pytest.fixture(autouse=True)
def reset_loguru():
    """Drop sinks added by main() so they don't outlive the test's captured stderr."""
    yield
    logger.remove()
