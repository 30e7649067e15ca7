"""Unit tests for the audit LoggingHandler."""

import logging
from unittest.mock import MagicMock

import pytest

from infrastructure.events import LoggingHandler

pytestmark = pytest.mark.unit


class TestLoggingHandler:
    """Tests for level selection and the logged fields."""

    def test_default_level(self):
        handler = LoggingHandler()

        assert handler.level_for("anything") == logging.INFO

    def test_level_per_event_type(self):
        handler = LoggingHandler(levels={"grant.failed": logging.WARNING})

        assert handler.level_for("grant.failed") == logging.WARNING
        assert handler.level_for("grant.applied") == logging.INFO

    def test_handle_logs_event_fields(self, event_factory):
        handler = LoggingHandler(levels={"test.event": logging.WARNING})
        handler.log = MagicMock()
        event = event_factory(metadata={"channel_id": 19})

        handler.handle(event)

        handler.log.log.assert_called_once()
        args, kwargs = handler.log.log.call_args
        assert args == (logging.WARNING, "event_occurred")
        assert kwargs["event_type"] == "test.event"
        assert kwargs["connection_handle"] == 1
        assert kwargs["metadata"] == {"channel_id": 19}
