"""Audit event system.

Grant outcomes are published as ``Event`` objects through ``dispatch_event``.
Handlers subscribe per event type:

    from infrastructure.events import Event, register_event_handler

    @register_event_handler("channel_group.grant.failed")
    def alert_on_failed_grant(event: Event) -> None:
        ...
"""

from infrastructure.events.dispatcher import (
    clear_handlers,
    dispatch_event,
    get_handlers_for_event,
    get_registered_events,
    register_event_handler,
    unregister_event_handler,
)
from infrastructure.events.handlers import LoggingHandler
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "LoggingHandler",
    "dispatch_event",
    "register_event_handler",
    "unregister_event_handler",
    "get_registered_events",
    "get_handlers_for_event",
    "clear_handlers",
]
