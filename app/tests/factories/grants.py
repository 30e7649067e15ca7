"""Factories for grant correlator test data."""

from typing import Any, Dict

from modules.grants import GrantRule, PendingResolution


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


def make_membership_event(**overrides: Any) -> Dict[str, Any]:
    """Keyword arguments for ``on_server_group_client_added``.

    Defaults describe Alice (runtime id 5, UID-A) joining server group 27 on
    connection 1, added by an admin.
    """
    event = {
        "connection_handle": 1,
        "client_id": 5,
        "client_name": "Alice",
        "client_unique_identity": "UID-A",
        "server_group_id": 27,
        "invoker_client_id": 2,
        "invoker_name": "Admin",
        "invoker_unique_identity": "UID-ADMIN",
    }
    event.update(overrides)
    return event


def make_pending_resolution(**overrides: Any) -> PendingResolution:
    """PendingResolution for UID-A on connection 1 with the default rule."""
    fields = {
        "connection_handle": 1,
        "client_unique_identity": "UID-A",
        "client_runtime_id": 5,
        "server_group_id": 27,
        "rule": GrantRule(channel_group_id=13, channel_id=19),
        "correlation_token": "grants:resolve_database_id:0000000000000001",
        "client_name": "Alice",
        "created_at": 1000.0,
        "expires_at": None,
    }
    fields.update(overrides)
    return PendingResolution(**fields)
