"""Channel-group grants feature settings."""

import json
from typing import Any, Dict, Optional

from pydantic import Field, field_validator
import structlog

from infrastructure.configuration.base import FeatureSettings

logger = structlog.stdlib.get_logger().bind(component="config.grants")

# The Crimson Tempest rule: thief server group -> MC team channel group in
# the officers' room.
DEFAULT_GRANT_POLICY: Dict[int, Dict[str, int]] = {
    27: {"channel_group_id": 13, "channel_id": 19},
}

RULE_FIELDS = ("channel_group_id", "channel_id")


class GrantsFeatureSettings(FeatureSettings):
    """Configuration for automatic channel-group grants.

    Environment Variables:
        GRANT_POLICY: JSON object mapping server group ids to grant rules
        PENDING_TIMEOUT_SECONDS: Seconds before an unanswered identity
            resolution is dropped (0 disables eviction)
        GRANT_MAX_ATTEMPTS: Total attempts for a channel-group grant when the
            host reports a transient failure

    Policy Configuration (GRANT_POLICY):
        Schema:
            {
                "27": {"channel_group_id": 13, "channel_id": 19},
                "31": {"channel_group_id": 14, "channel_id": 22}
            }

        Validation:
            - Keys must be positive integer server group ids
            - Every rule needs positive integer channel_group_id and channel_id

    Example:
        ```python
        from infrastructure.configuration import settings

        rule = settings.grants.policy.get(27)
        if rule:
            channel_group_id = rule["channel_group_id"]
        ```
    """

    policy: Dict[int, Dict[str, int]] = Field(
        default_factory=lambda: {k: dict(v) for k, v in DEFAULT_GRANT_POLICY.items()},
        alias="GRANT_POLICY",
        description="Server group id to channel-group grant rule mapping",
    )

    @field_validator("policy", mode="before")
    @classmethod
    def _parse_policy(cls, v: Optional[Any]) -> Any:
        """Parse GRANT_POLICY from JSON string or dict."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return v
        if isinstance(v, str):
            s = v.strip()
            if (s.startswith("'") and s.endswith("'")) or (
                s.startswith('"') and s.endswith('"')
            ):
                s = s[1:-1]
            try:
                return json.loads(s) if s else {}
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid GRANT_POLICY JSON: {e} (value: {s[:80]}...)"
                ) from e
        raise ValueError("GRANT_POLICY must be a JSON string or a mapping")

    @field_validator("policy", mode="after")
    @classmethod
    def _validate_policy(cls, v: Dict[int, Dict[str, int]]):
        """Validate GRANT_POLICY rules."""
        if not v:
            logger.warning("no_grant_rules_configured")
            return {}

        for server_group_id, rule in v.items():
            if server_group_id <= 0:
                raise ValueError(
                    f"GRANT_POLICY server group id must be positive, got {server_group_id}"
                )
            missing = [name for name in RULE_FIELDS if name not in rule]
            if missing:
                raise ValueError(
                    f"GRANT_POLICY rule for server group {server_group_id} "
                    f"is missing {', '.join(missing)}"
                )
            for name in RULE_FIELDS:
                if rule[name] <= 0:
                    raise ValueError(
                        f"GRANT_POLICY rule for server group {server_group_id} "
                        f"has non-positive {name}: {rule[name]}"
                    )

        return v

    # Pending resolution eviction
    pending_timeout_seconds: float = Field(
        default=0,
        ge=0,
        alias="PENDING_TIMEOUT_SECONDS",
        description="Seconds before an unanswered resolution is discarded (0 disables)",
    )

    # Grant submission
    grant_max_attempts: int = Field(
        default=1,
        ge=1,
        alias="GRANT_MAX_ATTEMPTS",
        description="Total attempts for a grant when the host reports a transient error",
    )

