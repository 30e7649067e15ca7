"""Hook specifications for the voice-chat host plugin surface.

Each hook mirrors a callback the host client makes into a loaded plugin.
The host adapter calls them through ``pm.hook.<name>(...)`` with keyword
arguments only.
"""

from typing import Optional

import pluggy

hookspec = pluggy.HookspecMarker("critbot")


# Metadata ---------------------------------------------------------------


@hookspec(firstresult=True)
def plugin_name() -> str:
    """Unique name identifying the plugin."""


@hookspec(firstresult=True)
def plugin_version() -> str:
    """Plugin version string."""


@hookspec(firstresult=True)
def plugin_api_version() -> int:
    """Host plugin API version; must equal the host's or loading fails."""


@hookspec(firstresult=True)
def plugin_author() -> str:
    """Plugin author."""


@hookspec(firstresult=True)
def plugin_description() -> str:
    """Plugin description."""


@hookspec(firstresult=True)
def plugin_command_keyword() -> Optional[str]:
    """Console command keyword, or None/"" when commands are unused."""


@hookspec(firstresult=True)
def plugin_request_autoload() -> bool:
    """Whether the plugin asks the host to load it automatically."""


# Lifecycle --------------------------------------------------------------


@hookspec(firstresult=True)
def plugin_init() -> int:
    """Called right after loading.

    Returns:
        0 on success, 1 on failure (the host unloads the plugin again).
    """


@hookspec
def plugin_shutdown() -> None:
    """Called right before the plugin is unloaded."""


@hookspec
def plugin_register_id(plugin_id: str) -> None:
    """Receive the id the host assigned to this plugin.

    Args:
        plugin_id: Plugin id; only valid for the duration of the call on the
            host side, so implementations copy it.
    """


@hookspec(firstresult=True)
def plugin_process_command(connection_handle: int, command: str) -> Optional[int]:
    """Process a console command addressed to the plugin keyword.

    Args:
        connection_handle: Server connection the command was typed on.
        command: Command text following the keyword.

    Returns:
        0 if the plugin handled the command, 1 if not.
    """


# Membership and identity events -----------------------------------------


@hookspec
def on_server_group_client_added(
    connection_handle: int,
    client_id: int,
    client_name: str,
    client_unique_identity: str,
    server_group_id: int,
    invoker_client_id: int,
    invoker_name: str,
    invoker_unique_identity: str,
) -> None:
    """A client was added to a server group."""


@hookspec
def on_server_group_client_deleted(
    connection_handle: int,
    client_id: int,
    client_name: str,
    client_unique_identity: str,
    server_group_id: int,
    invoker_client_id: int,
    invoker_name: str,
    invoker_unique_identity: str,
) -> None:
    """A client was removed from a server group."""


@hookspec
def on_client_channel_group_changed(
    connection_handle: int,
    channel_group_id: int,
    channel_id: int,
    client_id: int,
    invoker_client_id: int,
    invoker_name: str,
    invoker_unique_identity: str,
) -> None:
    """A client's channel group changed in a channel."""


@hookspec
def on_client_dbid_from_uid(
    connection_handle: int,
    unique_client_identifier: str,
    client_database_id: int,
) -> None:
    """Completion of a database id lookup by unique identifier."""
