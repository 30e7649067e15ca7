"""Host-event context for structured logging.

Fields bound with ``bind_event_context`` are merged into every entry logged
inside the block, on the same thread or task.

Usage:
    from infrastructure.logging import bind_event_context

    with bind_event_context(host_event="client_dbid_from_uid", connection_handle=1):
        logger.info("identity_resolved")
"""

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import structlog


@contextmanager
def bind_event_context(
    correlation_id: Optional[str] = None,
    host_event: Optional[str] = None,
    connection_handle: Optional[int] = None,
    **extra_context: Any,
) -> Iterator[None]:
    """Bind context for the duration of one host callback.

    Args:
        correlation_id: Id tying the block's entries together; a UUID4 is
            generated when omitted.
        host_event: Name of the host callback being handled.
        connection_handle: Server connection the callback arrived on.
        **extra_context: Additional fields to bind.

    Only the fields bound here are removed on exit; context bound by an
    enclosing block survives.
    """
    context: Dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    if host_event is not None:
        context["host_event"] = host_event
    if connection_handle is not None:
        context["connection_handle"] = connection_handle
    context.update(extra_context)

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context)


def get_correlation_id() -> Optional[str]:
    return structlog.contextvars.get_contextvars().get("correlation_id")


def clear_event_context() -> None:
    structlog.contextvars.clear_contextvars()
