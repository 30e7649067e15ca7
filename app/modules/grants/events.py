"""Audit events published by the grant correlator."""

import logging
from typing import Any, List

from infrastructure.events import (
    Event,
    LoggingHandler,
    get_handlers_for_event,
    register_event_handler,
    unregister_event_handler,
)
from modules.grants.domain.models import PendingResolution

GRANT_APPLIED = "channel_group.grant.applied"
GRANT_FAILED = "channel_group.grant.failed"
RESOLUTION_DISCARDED = "pending_resolution.discarded"

AUDIT_EVENT_TYPES = (GRANT_APPLIED, GRANT_FAILED, RESOLUTION_DISCARDED)

_audit_log_handler = LoggingHandler(
    levels={
        GRANT_FAILED: logging.WARNING,
        RESOLUTION_DISCARDED: logging.WARNING,
    }
)


def build_event(event_type: str, record: PendingResolution, **metadata: Any) -> Event:
    """Build an audit event describing a pending resolution's outcome."""
    return Event(
        event_type=event_type,
        correlation_id=record.correlation_token,
        connection_handle=record.connection_handle,
        metadata={**record.to_log_context(), **metadata},
    )


def register_audit_handlers() -> List[str]:
    """Write grant audit events to the structured log.

    Safe to call more than once; the logging handler is registered a single
    time per event type.

    Returns:
        Event types the handler is registered for.
    """
    for event_type in AUDIT_EVENT_TYPES:
        if _audit_log_handler.handle not in get_handlers_for_event(event_type):
            register_event_handler(event_type)(_audit_log_handler.handle)
    return list(AUDIT_EVENT_TYPES)


def unregister_audit_handlers() -> int:
    """Stop writing grant audit events to the log.

    Returns:
        Number of event types the handler was removed from.
    """
    return sum(
        unregister_event_handler(event_type, _audit_log_handler.handle)
        for event_type in AUDIT_EVENT_TYPES
    )
