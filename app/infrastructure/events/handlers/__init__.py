"""Built-in event handlers."""

from infrastructure.events.handlers.logging import LoggingHandler

__all__ = ["LoggingHandler"]
