"""Unit tests for GroupGrantPolicy."""

import pytest

from infrastructure.configuration import GrantsFeatureSettings
from modules.grants import GrantRule, GroupGrantPolicy

pytestmark = pytest.mark.unit


class TestGroupGrantPolicy:
    """Tests for policy lookups."""

    def test_lookup_configured_group(self, policy):
        assert policy.lookup(27) == GrantRule(channel_group_id=13, channel_id=19)

    def test_lookup_missing_group_returns_none(self, policy):
        assert policy.lookup(99) is None

    def test_contains_and_len(self, policy):
        assert 27 in policy
        assert 99 not in policy
        assert len(policy) == 1
        assert list(policy) == [27]

    def test_rules_are_read_only(self, policy):
        with pytest.raises(TypeError):
            policy.rules[28] = GrantRule(1, 1)

    def test_source_mapping_changes_do_not_leak(self):
        rules = {27: GrantRule(13, 19)}
        policy = GroupGrantPolicy(rules)

        rules[28] = GrantRule(1, 1)

        assert 28 not in policy

    def test_from_config_converts_string_keys(self):
        policy = GroupGrantPolicy.from_config(
            {
                "27": {"channel_group_id": 13, "channel_id": 19},
                "31": {"channel_group_id": "14", "channel_id": 22},
            }
        )

        assert policy.lookup(27) == GrantRule(13, 19)
        assert policy.lookup(31) == GrantRule(14, 22)

    def test_from_settings_uses_default_rule(self):
        policy = GroupGrantPolicy.from_settings(GrantsFeatureSettings())

        assert policy.to_dict() == {27: {"channel_group_id": 13, "channel_id": 19}}

    def test_empty_policy_matches_nothing(self):
        policy = GroupGrantPolicy({})

        assert policy.lookup(27) is None
        assert len(policy) == 0
