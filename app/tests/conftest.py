"""Shared fixtures for the CritBot test suite."""

from unittest.mock import MagicMock

import pytest

from infrastructure.events.dispatcher import clear_handlers
from infrastructure.operations import OperationResult
from modules.grants import GrantRule, GroupGrantCorrelator, GroupGrantPolicy
from tests.factories.grants import FakeClock


@pytest.fixture
def clock():
    """Manually advanced monotonic clock."""
    return FakeClock()


@pytest.fixture
def policy():
    """The Crimson Tempest policy: thief server group -> officers' room."""
    return GroupGrantPolicy({27: GrantRule(channel_group_id=13, channel_id=19)})


@pytest.fixture
def mock_resolver():
    """Identity resolver accepting every lookup."""
    resolver = MagicMock()
    resolver.resolve_database_id.return_value = OperationResult.success()
    return resolver


@pytest.fixture
def mock_sink():
    """Group-management sink accepting every grant."""
    sink = MagicMock()
    sink.set_client_channel_group.return_value = OperationResult.success()
    return sink


@pytest.fixture
def published_events():
    """List collecting audit events published by a correlator."""
    return []


@pytest.fixture
def make_correlator(policy, mock_resolver, mock_sink, clock, published_events):
    """Factory for correlators wired to the mock collaborators."""

    def _factory(**overrides):
        kwargs = {
            "policy": policy,
            "resolver": mock_resolver,
            "sink": mock_sink,
            "clock": clock,
            "publish": published_events.append,
        }
        kwargs.update(overrides)
        return GroupGrantCorrelator(**kwargs)

    return _factory


@pytest.fixture
def correlator(make_correlator):
    """Correlator with eviction disabled and a single grant attempt."""
    return make_correlator()


@pytest.fixture
def clean_event_handlers():
    """Clear event handlers before and after test."""
    clear_handlers()
    yield
    clear_handlers()
