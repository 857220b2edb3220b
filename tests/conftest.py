"""
Shared fixtures for hahaha tests.

Provides port mocks and a fresh metrics registry per test.
"""

from unittest.mock import AsyncMock

import pytest

from hahaha.domain.ports import IEventPort, IPodPort
from hahaha.domain.value_objects import HttpReply
from hahaha.infrastructure.monitoring import ShutdownMetrics


@pytest.fixture
def metrics() -> ShutdownMetrics:
    """Counters on their own registry."""
    return ShutdownMetrics(prefix="hahaha")


@pytest.fixture
def mock_pod_port():
    """Pod port answering every HTTP signal with 200."""
    port = AsyncMock(spec=IPodPort)
    port.send_http_request.return_value = HttpReply(status=200, body="")
    port.exec_command.return_value = None
    return port


@pytest.fixture
def mock_event_port():
    """Event port that accepts every event."""
    return AsyncMock(spec=IEventPort)
