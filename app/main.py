"""CritBot plugin bootstrap.

The host adapter imports this module and calls ``load_plugin`` with the
host function table, then drives the returned plugin manager's hooks.
"""

from typing import Optional

import pluggy
from dotenv import load_dotenv

from infrastructure.configuration import Settings, settings as default_settings
from infrastructure.logging import get_module_logger
from infrastructure.services.plugins import get_host_plugin_manager
from modules.grants import (
    CritBotPlugin,
    GroupGrantCorrelator,
    HostGroupSink,
    HostIdentityResolver,
)
from modules.grants.events import register_audit_handlers, unregister_audit_handlers
from modules.grants.host_functions import HostFunctions

logger = get_module_logger()

load_dotenv()

PLUGIN_REGISTRATION_NAME = "critbot.grants"


def load_plugin(
    host_functions: HostFunctions,
    settings: Optional[Settings] = None,
    plugin_manager: Optional[pluggy.PluginManager] = None,
) -> pluggy.PluginManager:
    """Wire the grant correlator to the host and register the plugin.

    Args:
        host_functions: Host function table used for lookups and grants.
        settings: Settings override; defaults to the module singleton.
        plugin_manager: Plugin manager override; defaults to the singleton.

    Returns:
        The plugin manager with the CritBot plugin registered.
    """
    settings = settings or default_settings
    pm = plugin_manager or get_host_plugin_manager()

    logger.info("plugin_loading", plugin=settings.host.name)
    list_configs(settings)

    register_audit_handlers()

    correlator = GroupGrantCorrelator.from_settings(
        settings.grants,
        resolver=HostIdentityResolver(host_functions),
        sink=HostGroupSink(host_functions),
    )
    plugin = CritBotPlugin(correlator, settings.host)
    pm.register(plugin, name=PLUGIN_REGISTRATION_NAME)

    logger.info(
        "plugin_registered",
        plugin=settings.host.name,
        policy_rules=len(correlator.policy),
        pending_timeout_seconds=settings.grants.pending_timeout_seconds,
    )
    return pm


def unload_plugin(plugin_manager: Optional[pluggy.PluginManager] = None) -> None:
    """Shut the plugin down and unregister it."""
    pm = plugin_manager or get_host_plugin_manager()
    plugin = pm.get_plugin(PLUGIN_REGISTRATION_NAME)
    if plugin is None:
        logger.warning("plugin_not_registered")
        return
    pm.hook.plugin_shutdown()
    pm.unregister(name=PLUGIN_REGISTRATION_NAME)
    unregister_audit_handlers()
    logger.info("plugin_unloaded")


def list_configs(settings: Settings) -> None:
    """Log the loaded configuration."""
    config_settings = {"settings": []}

    for key, value in settings.model_dump().items():
        if isinstance(value, dict):
            config_settings[key] = list(value.keys())
        else:
            config_settings["settings"].append({key: value})

    logger.info("configuration_initialized", base_settings=config_settings["settings"])
    for key, value in config_settings.items():
        if key != "settings":
            logger.info("configuration_loaded", config_setting=key, keys=value)
