"""In-process event dispatcher.

Handlers are kept in a module-level registry keyed by event type and are
called synchronously, in registration order, on the thread that dispatches
the event. A failing handler is logged and skipped.
"""

from typing import Any, Callable, Dict, List

from infrastructure.events.models import Event
from infrastructure.logging import get_module_logger

logger = get_module_logger()

EVENT_HANDLERS: Dict[str, List[Callable[[Event], Any]]] = {}


def _handler_name(handler: Callable) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", "unknown")


def register_event_handler(event_type: str):
    """Decorator registering a handler for one event type.

    Args:
        event_type: Event type to handle, e.g. 'channel_group.grant.applied'.

    Returns:
        Decorator returning the handler unchanged.
    """

    def decorator(handler: Callable[[Event], Any]) -> Callable[[Event], Any]:
        handlers = EVENT_HANDLERS.setdefault(event_type, [])
        handlers.append(handler)
        logger.debug(
            "registered_event_handler",
            handler=_handler_name(handler),
            event_type=event_type,
            total_handlers=len(handlers),
        )
        return handler

    return decorator


def unregister_event_handler(event_type: str, handler: Callable[[Event], Any]) -> bool:
    """Remove a handler from an event type.

    Returns:
        True if the handler was registered for the event type.
    """
    handlers = EVENT_HANDLERS.get(event_type)
    if not handlers or handler not in handlers:
        return False
    handlers.remove(handler)
    if not handlers:
        del EVENT_HANDLERS[event_type]
    logger.debug(
        "unregistered_event_handler",
        handler=_handler_name(handler),
        event_type=event_type,
    )
    return True


def dispatch_event(event: Event) -> List[Any]:
    """Call every handler registered for the event's type.

    Args:
        event: Event to deliver.

    Returns:
        Return values of the handlers that completed, in call order.
    """
    handlers = list(EVENT_HANDLERS.get(event.event_type, ()))
    logger.debug(
        "dispatching_event",
        event_type=event.event_type,
        handler_count=len(handlers),
        correlation_id=event.correlation_id,
    )

    results = []
    for handler in handlers:
        try:
            results.append(handler(event))
        except Exception as e:
            logger.error(
                "event_handler_failed",
                handler=_handler_name(handler),
                event_type=event.event_type,
                correlation_id=event.correlation_id,
                error=str(e),
                exc_info=True,
            )
    return results


def get_registered_events() -> List[str]:
    return list(EVENT_HANDLERS)


def get_handlers_for_event(event_type: str) -> List[Callable[[Event], Any]]:
    return list(EVENT_HANDLERS.get(event_type, ()))


def clear_handlers() -> None:
    """Remove every handler. Used by tests."""
    EVENT_HANDLERS.clear()
    logger.debug("cleared_all_event_handlers")
