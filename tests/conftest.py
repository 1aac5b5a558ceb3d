"""
Pytest configuration and shared fixtures for cmakekits tests.
"""

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.projects import (
    cmake_project,
    non_cmake_project,
)
from tests.fixtures.registries import (
    sample_registry,
    linux_platform,
    make_context,
)
from tests.mocks import RecordingExecutor, RecordingNotifier


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()
