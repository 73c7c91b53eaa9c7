"""
Shared fixtures for CLI tests.
"""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_logging():
    """CLI.run reconfigures the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
