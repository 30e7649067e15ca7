"""Host plugin implementing the CritBot callbacks.

Registered with the host plugin manager; the host adapter calls the hooks
declared in ``infrastructure.hookspecs.host`` and this plugin forwards the
membership and identity callbacks to the grant correlator.
"""

from typing import Optional

from infrastructure.configuration import HostSettings
from infrastructure.logging import bind_event_context, get_module_logger
from infrastructure.services.plugins import hookimpl
from modules.grants.correlator import GroupGrantCorrelator
from modules.grants.domain.models import Invoker

logger = get_module_logger()

# Host convention for the console command hook
COMMAND_HANDLED = 0
COMMAND_NOT_HANDLED = 1

# plugin_init return values
INIT_OK = 0
INIT_FAILED = 1


class CritBotPlugin:
    """The Crimson Tempest utility plugin.

    Args:
        correlator: Correlator receiving membership and identity callbacks.
        host_settings: Metadata reported to the host.
    """

    def __init__(self, correlator: GroupGrantCorrelator, host_settings: HostSettings):
        self.correlator = correlator
        self.host_settings = host_settings
        self.plugin_id: Optional[str] = None

    # Metadata -----------------------------------------------------------

    @hookimpl
    def plugin_name(self) -> str:
        return self.host_settings.name

    @hookimpl
    def plugin_version(self) -> str:
        return self.host_settings.version

    @hookimpl
    def plugin_api_version(self) -> int:
        return self.host_settings.api_version

    @hookimpl
    def plugin_author(self) -> str:
        return self.host_settings.author

    @hookimpl
    def plugin_description(self) -> str:
        return self.host_settings.description

    @hookimpl
    def plugin_command_keyword(self) -> Optional[str]:
        return self.host_settings.command_keyword or None

    @hookimpl
    def plugin_request_autoload(self) -> bool:
        return self.host_settings.request_autoload

    # Lifecycle ----------------------------------------------------------

    @hookimpl
    def plugin_init(self) -> int:
        logger.info(
            "plugin_initialized",
            plugin=self.host_settings.name,
            version=self.host_settings.version,
            api_version=self.host_settings.api_version,
            policy=self.correlator.policy.to_dict(),
        )
        return INIT_OK

    @hookimpl
    def plugin_shutdown(self) -> None:
        dropped = self.correlator.reset()
        self.plugin_id = None
        logger.info("plugin_shutdown", pending_dropped=dropped)

    @hookimpl
    def plugin_register_id(self, plugin_id: str) -> None:
        self.plugin_id = str(plugin_id)
        logger.debug("plugin_id_registered", plugin_id=self.plugin_id)

    @hookimpl
    def plugin_process_command(self, connection_handle: int, command: str) -> int:
        """Handle ``<keyword> status`` and ``<keyword> evict``."""
        parts = (command or "").split()
        if not parts:
            return COMMAND_NOT_HANDLED

        name = parts[0].lower()
        if name == "status":
            logger.info(
                "correlator_status",
                connection_handle=connection_handle,
                pending_keys=[str(key) for key in self.correlator.pending_keys()],
                **self.correlator.get_stats(),
            )
            return COMMAND_HANDLED
        if name == "evict":
            evicted = self.correlator.evict_stale()
            logger.info(
                "stale_resolutions_evicted",
                connection_handle=connection_handle,
                count=len(evicted),
            )
            return COMMAND_HANDLED

        logger.debug("unknown_plugin_command", command=name)
        return COMMAND_NOT_HANDLED

    # Host events --------------------------------------------------------

    @hookimpl
    def on_server_group_client_added(
        self,
        connection_handle: int,
        client_id: int,
        client_name: str,
        client_unique_identity: str,
        server_group_id: int,
        invoker_client_id: int,
        invoker_name: str,
        invoker_unique_identity: str,
    ) -> None:
        with bind_event_context(
            host_event="server_group_client_added",
            connection_handle=connection_handle,
        ):
            self.correlator.on_membership_added(
                connection_handle,
                client_id,
                client_unique_identity,
                server_group_id,
                invoker=Invoker(invoker_client_id, invoker_name, invoker_unique_identity),
                client_name=client_name,
            )

    @hookimpl
    def on_server_group_client_deleted(
        self,
        connection_handle: int,
        client_id: int,
        client_name: str,
        client_unique_identity: str,
        server_group_id: int,
        invoker_client_id: int,
        invoker_name: str,
        invoker_unique_identity: str,
    ) -> None:
        with bind_event_context(
            host_event="server_group_client_deleted",
            connection_handle=connection_handle,
        ):
            self.correlator.on_membership_removed(
                connection_handle,
                client_id,
                client_unique_identity,
                server_group_id,
                invoker=Invoker(invoker_client_id, invoker_name, invoker_unique_identity),
                client_name=client_name,
            )

    @hookimpl
    def on_client_channel_group_changed(
        self,
        connection_handle: int,
        channel_group_id: int,
        channel_id: int,
        client_id: int,
        invoker_client_id: int,
        invoker_name: str,
        invoker_unique_identity: str,
    ) -> None:
        with bind_event_context(
            host_event="client_channel_group_changed",
            connection_handle=connection_handle,
        ):
            self.correlator.on_channel_group_changed(
                connection_handle,
                channel_group_id,
                channel_id,
                client_id,
                invoker=Invoker(invoker_client_id, invoker_name, invoker_unique_identity),
            )

    @hookimpl
    def on_client_dbid_from_uid(
        self,
        connection_handle: int,
        unique_client_identifier: str,
        client_database_id: int,
    ) -> None:
        with bind_event_context(
            host_event="client_dbid_from_uid",
            connection_handle=connection_handle,
        ):
            self.correlator.on_identity_resolved(
                connection_handle,
                unique_client_identifier,
                client_database_id,
            )
