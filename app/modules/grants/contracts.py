"""Collaborator contracts for the grant correlator.

The correlator never talks to the host client directly. It calls an
identity resolver and a group-management sink, both fire-and-forget; the
resolver's answer comes back later through
``GroupGrantCorrelator.on_identity_resolved``.

Implementations may return an ``OperationResult`` describing whether the
request was submitted, or None when they cannot tell.
"""

from typing import Optional, Protocol, runtime_checkable

from infrastructure.operations import OperationResult


@runtime_checkable
class IdentityResolver(Protocol):
    """Asynchronously resolves a unique identity to a database id."""

    def resolve_database_id(
        self,
        connection_handle: int,
        client_unique_identity: str,
        correlation_token: Optional[str] = None,
    ) -> Optional[OperationResult]:
        ...


@runtime_checkable
class GroupManagementSink(Protocol):
    """Applies channel-group assignments."""

    def set_client_channel_group(
        self,
        connection_handle: int,
        channel_group_id: int,
        channel_id: int,
        database_id: int,
        correlation_token: Optional[str] = None,
    ) -> Optional[OperationResult]:
        ...
