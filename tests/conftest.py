"""Shared fixtures for routebind tests."""

import pytest

from routebind import MetadataRegistry, clear_metadata_registry


@pytest.fixture(autouse=True)
def reset_default_registry():
    """Give every test a fresh process-wide registry."""
    clear_metadata_registry()
    yield
    clear_metadata_registry()


@pytest.fixture
def registry():
    """Isolated metadata registry."""
    return MetadataRegistry()


@pytest.fixture
def handler_owner():
    """Handler class used as the owner of binding maps."""

    class UsersController:
        def update(self, *args):
            return args

    return UsersController
