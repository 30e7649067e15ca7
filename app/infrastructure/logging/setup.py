"""Structlog configuration for the plugin.

The host client collects every plugin's output into one log. Entries carry
the plugin name and version, the call site, and whatever host-event context
is bound with ``bind_event_context``. Production builds render JSON lines;
development builds use the console renderer.

Logging is configured when this module is first imported, so modules only
need:

    from infrastructure.logging import get_module_logger

    logger = get_module_logger()
    logger.info("grant_applied", channel_id=19)
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger
from structlog.typing import Processor

from infrastructure.configuration import settings
from infrastructure.logging.formatters import add_plugin_info


def _is_test_environment() -> bool:
    return "pytest" in sys.modules


def _build_processors(prod_mode: bool) -> List[Processor]:
    processors: List[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_plugin_info(settings.host.name, settings.host.version, settings.GIT_SHA),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if prod_mode:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog and the standard library root logger.

    Under pytest every entry is dropped so test output stays readable.

    Args:
        log_level: Level name; defaults to ``settings.LOG_LEVEL``.
        is_production: JSON output when True; defaults to
            ``settings.is_production``.

    Returns:
        A logger using the new configuration.
    """
    if _is_test_environment():
        structlog.configure(
            processors=[
                structlog.stdlib.add_log_level,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(format="%(message)s", level=logging.CRITICAL + 1, force=True)
        return structlog.stdlib.get_logger()

    prod_mode = settings.is_production if is_production is None else is_production
    level_name = (log_level or settings.LOG_LEVEL).upper()

    structlog.configure(
        processors=_build_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return structlog.stdlib.get_logger()


logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Logger bound to the calling module.

    Example:
        # In modules/grants/correlator.py
        logger = get_module_logger()
        # context: {"component": "correlator", "module_path": "modules.grants.correlator"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module = inspect.getmodule(caller) if caller is not None else None
    if module is None:
        return logger.bind(component="unknown")

    module_path = module.__name__
    return logger.bind(component=module_path.rsplit(".", 1)[-1], module_path=module_path)
