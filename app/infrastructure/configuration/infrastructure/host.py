"""Host plugin settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class HostSettings(InfrastructureSettings):
    """How the plugin identifies itself to the voice-chat host client.

    The host refuses to load a plugin whose API version differs from its
    own major plugin API version.

    Environment Variables:
        PLUGIN_NAME: Unique plugin name shown by the host
        PLUGIN_VERSION: Plugin version string
        PLUGIN_API_VERSION: Host plugin API version the plugin targets
        PLUGIN_AUTHOR: Plugin author
        PLUGIN_DESCRIPTION: Plugin description
        PLUGIN_COMMAND_KEYWORD: Console command keyword ("" disables commands)
        PLUGIN_REQUEST_AUTOLOAD: Ask the host to load the plugin automatically
    """

    name: str = Field(default="CriticalBot", alias="PLUGIN_NAME")
    version: str = Field(default="1.2", alias="PLUGIN_VERSION")
    api_version: int = Field(default=19, alias="PLUGIN_API_VERSION")
    author: str = Field(default="Skryttlock, Skutov", alias="PLUGIN_AUTHOR")
    description: str = Field(
        default="Utility plugin for The Crimson Tempest [CriT].",
        alias="PLUGIN_DESCRIPTION",
    )
    command_keyword: str = Field(default="critbot", alias="PLUGIN_COMMAND_KEYWORD")
    request_autoload: bool = Field(default=False, alias="PLUGIN_REQUEST_AUTOLOAD")
