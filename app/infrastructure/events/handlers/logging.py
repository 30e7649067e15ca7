"""Event handler writing audit events to the structured log."""

import logging
from typing import Mapping, Optional

import structlog

from infrastructure.events.models import Event

logger = structlog.get_logger()


class LoggingHandler:
    """Logs each event it receives as one ``event_occurred`` entry.

    Args:
        levels: Log level per event type; types not listed use
            ``default_level``.
        default_level: Level for event types without an entry in ``levels``.
    """

    def __init__(
        self,
        levels: Optional[Mapping[str, int]] = None,
        default_level: int = logging.INFO,
    ):
        self.levels = dict(levels or {})
        self.default_level = default_level
        self.log = logger.bind(component="audit_log")

    def level_for(self, event_type: str) -> int:
        return self.levels.get(event_type, self.default_level)

    def handle(self, event: Event) -> None:
        self.log.log(
            self.level_for(event.event_type),
            "event_occurred",
            event_type=event.event_type,
            correlation_id=event.correlation_id,
            connection_handle=event.connection_handle,
            timestamp=event.timestamp.isoformat(),
            metadata=event.metadata,
        )
