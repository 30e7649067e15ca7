"""Static server-group to channel-group grant policy."""

from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, Optional

from modules.grants.domain.models import GrantRule


class GroupGrantPolicy:
    """Read-only mapping from server group id to the grant it triggers.

    Args:
        rules: Mapping of server group id to GrantRule.

    Example:
        >>> policy = GroupGrantPolicy({27: GrantRule(channel_group_id=13, channel_id=19)})
        >>> policy.lookup(27)
        GrantRule(channel_group_id=13, channel_id=19)
        >>> policy.lookup(99) is None
        True
    """

    def __init__(self, rules: Mapping[int, GrantRule]):
        self._rules = MappingProxyType(dict(rules))

    @classmethod
    def from_config(cls, config: Mapping[Any, Mapping[str, int]]) -> "GroupGrantPolicy":
        """Build a policy from the ``GRANT_POLICY`` settings shape.

        Args:
            config: Mapping of server group id to
                ``{"channel_group_id": int, "channel_id": int}``.

        Returns:
            GroupGrantPolicy with one rule per entry.
        """
        return cls(
            {
                int(server_group_id): GrantRule(
                    channel_group_id=int(rule["channel_group_id"]),
                    channel_id=int(rule["channel_id"]),
                )
                for server_group_id, rule in config.items()
            }
        )

    @classmethod
    def from_settings(cls, grants_settings) -> "GroupGrantPolicy":
        return cls.from_config(grants_settings.policy)

    def lookup(self, server_group_id: int) -> Optional[GrantRule]:
        """Rule for a server group, or None when the group triggers nothing."""
        return self._rules.get(server_group_id)

    @property
    def rules(self) -> Mapping[int, GrantRule]:
        return self._rules

    def to_dict(self) -> Dict[int, Dict[str, int]]:
        return {
            server_group_id: {
                "channel_group_id": rule.channel_group_id,
                "channel_id": rule.channel_id,
            }
            for server_group_id, rule in self._rules.items()
        }

    def __contains__(self, server_group_id: object) -> bool:
        return server_group_id in self._rules

    def __iter__(self) -> Iterator[int]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"GroupGrantPolicy({self.to_dict()!r})"
