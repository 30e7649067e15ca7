"""Plugin managers and utilities."""

import pluggy

from infrastructure.services.plugins.host import (
    PROJECT_NAME,
    create_host_plugin_manager,
    get_host_plugin_manager,
)

# Singleton hookimpl marker for entire plugin
hookimpl = pluggy.HookimplMarker(PROJECT_NAME)

__all__ = [
    "hookimpl",
    "create_host_plugin_manager",
    "get_host_plugin_manager",
]
