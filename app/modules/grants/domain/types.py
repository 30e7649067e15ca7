"""Enumerations for the channel-group grants module."""

from enum import Enum


class ResolutionState(Enum):
    """States of a pending resolution.

    AWAITING_RESOLUTION -> RESOLVED -> APPLIED
    AWAITING_RESOLUTION -> DISCARDED (stale, or the lookup was never submitted)
    """

    AWAITING_RESOLUTION = "awaiting_resolution"
    RESOLVED = "resolved"
    APPLIED = "applied"
    DISCARDED = "discarded"


class OutcomeKind(Enum):
    """Counted outcomes of correlator event handling."""

    POLICY_MISS = "policy_miss"
    DUPLICATE_IN_FLIGHT = "duplicate_in_flight"
    UNKNOWN_CORRELATION = "unknown_correlation"
    STALE_RESOLUTION = "stale_resolution"
    RESOLVE_REQUESTED = "resolve_requested"
    RESOLVE_FAILED = "resolve_failed"
    GRANT_APPLIED = "grant_applied"
    GRANT_FAILED = "grant_failed"
