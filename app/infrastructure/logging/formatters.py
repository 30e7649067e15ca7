"""Custom structlog processors."""

from typing import Any, Callable, Dict

EventDict = Dict[str, Any]


def add_plugin_info(
    plugin_name: str, plugin_version: str = "unknown", git_sha: str = ""
) -> Callable[[Any, str, EventDict], EventDict]:
    """Processor stamping entries with the plugin's identity.

    The host client writes every loaded plugin's output to the same log, so
    each entry names the plugin and version that produced it. ``git_sha`` is
    added only when set.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["plugin"] = plugin_name
        event_dict["plugin_version"] = plugin_version
        if git_sha:
            event_dict["git_sha"] = git_sha
        return event_dict

    return processor
