"""Pytest configuration and fixtures for navstack tests."""

from pathlib import Path

import pytest

from navstack.stack import NavigationStack
from tests.factories import FakeScreen, RecordingListener, TestDataFactory


@pytest.fixture
def stack() -> NavigationStack:
    """Provide an empty navigation stack."""
    return NavigationStack()


@pytest.fixture
def screens() -> list[FakeScreen]:
    """Provide three named screens."""
    return TestDataFactory.create_screens("c1", "c2", "c3")


@pytest.fixture
def listener() -> RecordingListener:
    """Provide a recording listener."""
    return RecordingListener()


@pytest.fixture
def tree(tmp_path: Path) -> Path:
    """Provide a small directory tree."""
    return TestDataFactory.create_tree(tmp_path)
