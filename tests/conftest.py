"""Shared test fixtures and configuration.

Sets up environment variables before any src imports, and provides common
fixtures like a temp-file store and a planner service wired to it.
"""

import os

# Patch env vars BEFORE any src imports
os.environ.setdefault("DATABASE_PATH", ":memory:")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

import pytest
from unittest.mock import AsyncMock, MagicMock


@pytest.fixture
def tmp_db_path(tmp_path):
    """Return a temporary SQLite DB path."""
    return str(tmp_path / "test_planner.db")


@pytest.fixture
def store(tmp_db_path):
    """Return a PlannerStore backed by a temp file."""
    from src.data.db import PlannerStore
    return PlannerStore(db_path=tmp_db_path)


@pytest.fixture
def state():
    """Return an empty PlannerState with default routines."""
    from src.data.models import PlannerState
    return PlannerState()


@pytest.fixture
def notifier():
    """Return a mock NotificationPort that has been granted permission."""
    mock = MagicMock()
    mock.permission = "granted"
    mock.notify = AsyncMock()
    mock.request_permission = AsyncMock(return_value="granted")
    return mock


@pytest.fixture
def service(state, store, notifier):
    """Return a PlannerService over the empty state and temp store."""
    from src.core.planner_service import PlannerService
    return PlannerService(state, store, notifier=notifier)
