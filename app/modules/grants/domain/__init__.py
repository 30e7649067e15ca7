"""Domain layer - data models and types."""

from modules.grants.domain.models import (
    CorrelationKey,
    GrantRule,
    Invoker,
    PendingResolution,
)
from modules.grants.domain.types import OutcomeKind, ResolutionState

__all__ = [
    "CorrelationKey",
    "GrantRule",
    "Invoker",
    "PendingResolution",
    "OutcomeKind",
    "ResolutionState",
]
