"""Host plugin manager."""

from functools import lru_cache

import pluggy
import structlog

from infrastructure.hookspecs import host as host_hookspecs

logger = structlog.get_logger()

PROJECT_NAME = "critbot"


def create_host_plugin_manager() -> pluggy.PluginManager:
    """Create a plugin manager carrying the host hook specifications.

    Returns:
        A fresh PluginManager with no plugins registered.
    """
    pm = pluggy.PluginManager(PROJECT_NAME)
    pm.add_hookspecs(host_hookspecs)
    return pm


@lru_cache(maxsize=1)
def get_host_plugin_manager() -> pluggy.PluginManager:
    """Get the host plugin manager singleton.

    Returns:
        PluginManager configured with the host hook specifications.
    """
    pm = create_host_plugin_manager()
    logger.info("host_plugin_manager_created")
    return pm
