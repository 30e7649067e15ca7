"""Automatic channel-group grants.

When a client is added to a server group named in the grant policy, the
client's database id is looked up and, once the host answers, the policy's
channel group is granted in the policy's channel.

Components:
- GroupGrantPolicy: server group id to grant rule table
- PendingResolutionTable: in-flight lookups keyed by connection and identity
- GroupGrantCorrelator: matches lookup answers to membership events
- HostIdentityResolver / HostGroupSink: host function table adapters
- CritBotPlugin: host callbacks forwarding to the correlator
"""

from modules.grants.contracts import GroupManagementSink, IdentityResolver
from modules.grants.correlator import GroupGrantCorrelator
from modules.grants.domain import (
    CorrelationKey,
    GrantRule,
    Invoker,
    OutcomeKind,
    PendingResolution,
    ResolutionState,
)
from modules.grants.host_functions import HostGroupSink, HostIdentityResolver
from modules.grants.pending import PendingResolutionTable
from modules.grants.plugin import CritBotPlugin
from modules.grants.policy import GroupGrantPolicy

__all__ = [
    "CorrelationKey",
    "CritBotPlugin",
    "GrantRule",
    "GroupGrantCorrelator",
    "GroupGrantPolicy",
    "GroupManagementSink",
    "HostGroupSink",
    "HostIdentityResolver",
    "IdentityResolver",
    "Invoker",
    "OutcomeKind",
    "PendingResolution",
    "PendingResolutionTable",
    "ResolutionState",
]
