"""Data models for the channel-group grants module.

Lightweight dataclasses (not Pydantic) describing the policy table entries
and the in-flight correlation records. Configuration input is validated by
``GrantsFeatureSettings`` before it reaches these models.

Key distinctions:
  - models.py: correlation keys, grant rules and pending resolution records
  - types.py: enums for record state and outcome counters
"""

from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Optional

from modules.grants.domain.types import ResolutionState


class CorrelationKey(NamedTuple):
    """Key matching an identity-resolution completion to its request.

    The transient runtime client id is deliberately not part of the key; a
    client may reconnect under a new runtime id while the lookup is in
    flight.
    """

    connection_handle: int
    client_unique_identity: str

    def __str__(self) -> str:
        return f"{self.connection_handle}/{self.client_unique_identity}"


@dataclass(frozen=True)
class GrantRule:
    """Which channel group to set, and in which channel.

    Attributes:
        channel_group_id: Channel group granted to the client.
        channel_id: Channel the channel group is granted in.
    """

    channel_group_id: int
    channel_id: int


@dataclass
class PendingResolution:
    """One in-flight "resolve identity, then grant" workflow.

    Attributes:
        connection_handle: Server connection the membership event arrived on.
        client_unique_identity: Stable client identifier, correlation key part.
        client_runtime_id: Runtime client id at event time (diagnostics only).
        server_group_id: Server group whose membership triggered the workflow.
        rule: Policy outcome decided at event time.
        correlation_token: Token handed to the host with each request.
        client_name: Client display name at event time (diagnostics only).
        created_at: Clock reading when the record was created.
        expires_at: Clock reading after which the record is stale, or None.
        state: Current workflow state.
    """

    connection_handle: int
    client_unique_identity: str
    client_runtime_id: int
    server_group_id: int
    rule: GrantRule
    correlation_token: str
    client_name: str = ""
    created_at: float = 0.0
    expires_at: Optional[float] = None
    state: ResolutionState = field(default=ResolutionState.AWAITING_RESOLUTION)

    @property
    def key(self) -> CorrelationKey:
        return CorrelationKey(self.connection_handle, self.client_unique_identity)

    @property
    def channel_group_to_grant(self) -> int:
        return self.rule.channel_group_id

    @property
    def channel_to_grant(self) -> int:
        return self.rule.channel_id

    def is_expired(self, now: float) -> bool:
        """Whether the record is still awaiting resolution past its deadline."""
        return (
            self.state == ResolutionState.AWAITING_RESOLUTION
            and self.expires_at is not None
            and now >= self.expires_at
        )

    def to_log_context(self) -> Dict[str, Any]:
        """Fields identifying this workflow in structured logs and audit events."""
        return {
            "connection_handle": self.connection_handle,
            "client_unique_identity": self.client_unique_identity,
            "client_runtime_id": self.client_runtime_id,
            "client_name": self.client_name,
            "server_group_id": self.server_group_id,
            "channel_group_id": self.rule.channel_group_id,
            "channel_id": self.rule.channel_id,
            "state": self.state.value,
        }


class Invoker(NamedTuple):
    """Client who caused a membership event (diagnostics only)."""

    client_id: int
    name: str = ""
    unique_identity: str = ""
