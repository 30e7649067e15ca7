"""Unit tests for the Event model."""

from datetime import datetime, timezone

import pytest

from infrastructure.events import Event

pytestmark = pytest.mark.unit


class TestEvent:
    """Tests for Event defaults and serialization."""

    def test_defaults(self):
        event = Event(event_type="channel_group.grant.applied")

        assert event.timestamp.tzinfo is not None
        assert isinstance(event.correlation_id, str)
        assert event.connection_handle is None
        assert event.metadata == {}

    def test_to_dict_uses_iso_timestamp(self, event_factory):
        timestamp = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        event = event_factory(timestamp=timestamp, metadata={"channel_id": 19})

        data = event.to_dict()

        assert data["timestamp"] == "2024-05-01T12:00:00+00:00"
        assert data["event_type"] == "test.event"
        assert data["connection_handle"] == 1
        assert data["metadata"] == {"channel_id": 19}

    def test_from_dict_restores_event(self, event_factory):
        event = event_factory(metadata={"database_id": 9001})

        restored = Event.from_dict(event.to_dict())

        assert restored == event

    def test_from_dict_missing_type_raises(self):
        with pytest.raises(ValueError, match="Invalid event data"):
            Event.from_dict({"metadata": {}})

    def test_from_dict_invalid_timestamp_raises(self):
        with pytest.raises(ValueError):
            Event.from_dict({"event_type": "x", "timestamp": "not-a-date"})

    def test_hashable(self, event_factory):
        event = event_factory()

        assert event in {event}
