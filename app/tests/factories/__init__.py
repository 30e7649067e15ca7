"""Test data factories for deterministic test data generation."""

from tests.factories.grants import (
    FakeClock,
    make_membership_event,
    make_pending_resolution,
)
from tests.factories.host import FakeHostFunctions

__all__ = [
    "FakeClock",
    "FakeHostFunctions",
    "make_membership_event",
    "make_pending_resolution",
]
