"""Shared test fixtures for the pointerbridge test suite.

Provides a mock xdotool runner and an app/client pair wired to it, so
route tests never spawn real processes or sleep.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from pointerbridge.automation.xdotool import XdotoolRunner
from pointerbridge.server.app import create_app


@pytest.fixture
def mock_runner() -> AsyncMock:
    """A mock XdotoolRunner with all async methods stubbed."""
    runner = AsyncMock(spec=XdotoolRunner)
    runner.is_available.return_value = True
    runner.binary = "xdotool"
    runner.get_mouse_location.return_value = (100, 200)
    return runner


@pytest.fixture
def mock_sleep() -> AsyncMock:
    """Replaces asyncio.sleep for capture waits and drag pacing."""
    return AsyncMock()


@pytest.fixture
def client(mock_runner: AsyncMock, mock_sleep: AsyncMock) -> TestClient:
    """A test client for the API with the mock runner injected."""
    app = create_app(runner=mock_runner, sleep=mock_sleep)
    return TestClient(app)
