# tests/integration/conftest.py
"""Shared fixtures for CLI integration tests."""

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def restore_root_handlers() -> Iterator[None]:
    """The CLI points the root handler at the runner's stderr; put the old handlers back."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
