"""Structured logging for the CritBot plugin.

Public API:
    - configure_logging(): Re-apply the logging configuration
    - get_module_logger(): Logger bound to the calling module
    - bind_event_context(): Bind host-event fields to every entry in a block
    - get_correlation_id(): Correlation id bound in the current context
    - clear_event_context(): Drop all bound context
    - add_plugin_info(): Processor stamping plugin name and version
"""

from infrastructure.logging.context import (
    bind_event_context,
    clear_event_context,
    get_correlation_id,
)
from infrastructure.logging.formatters import add_plugin_info
from infrastructure.logging.setup import configure_logging, get_module_logger

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_event_context",
    "get_correlation_id",
    "clear_event_context",
    "add_plugin_info",
]
