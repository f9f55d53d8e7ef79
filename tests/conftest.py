"""Pytest configuration and shared fixtures."""

import pytest

from filesystem.config import FilesystemSettings, configure_settings, reset_settings

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.items",
    "tests.fixtures.trees",
]


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test against default settings, whatever the environment says."""
    settings = configure_settings(FilesystemSettings())
    yield settings
    reset_settings()
