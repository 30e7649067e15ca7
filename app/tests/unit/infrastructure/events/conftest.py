"""Fixtures for infrastructure event system tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from infrastructure.events.dispatcher import clear_handlers
from infrastructure.events.models import Event


@pytest.fixture
def event_factory():
    """Build events for connection 1 with a fixed correlation token."""

    def _factory(
        event_type: str = "test.event",
        timestamp: datetime = None,
        metadata: dict = None,
        **overrides,
    ):
        fields = {
            "event_type": event_type,
            "timestamp": timestamp or datetime.now(timezone.utc),
            "correlation_id": "grants:resolve_database_id:0123456789abcdef",
            "connection_handle": 1,
            "metadata": metadata or {},
        }
        fields.update(overrides)
        return Event(**fields)

    return _factory


@pytest.fixture
def clear_event_handlers():
    clear_handlers()
    yield
    clear_handlers()


@pytest.fixture
def mock_event_handler():
    return MagicMock()
