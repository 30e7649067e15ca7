"""Audit event model."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Event:
    """Something the plugin did on the host's behalf.

    Attributes:
        event_type: Dotted event name, e.g. 'channel_group.grant.applied'.
        timestamp: UTC time the event was created.
        correlation_id: Token shared by the requests of one workflow; the
            grant correlator uses the token it handed to the host.
        connection_handle: Server connection the workflow ran on.
        metadata: Event-type specific fields.
    """

    event_type: str
    timestamp: datetime = field(default_factory=_utcnow)
    correlation_id: str = field(default_factory=lambda: str(uuid4()))
    connection_handle: Optional[int] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Event":
        """Rebuild an event serialized with ``to_dict``.

        Raises:
            ValueError: If event_type is missing or the timestamp is not ISO 8601.
        """
        try:
            timestamp = data.get("timestamp") or _utcnow()
            if isinstance(timestamp, str):
                timestamp = datetime.fromisoformat(timestamp)
            return cls(
                event_type=data["event_type"],
                timestamp=timestamp,
                correlation_id=str(data.get("correlation_id") or uuid4()),
                connection_handle=data.get("connection_handle"),
                metadata=dict(data.get("metadata") or {}),
            )
        except (KeyError, ValueError) as e:
            raise ValueError(f"Invalid event data: {e}") from e

    def __hash__(self) -> int:
        return hash((self.correlation_id, self.event_type, self.timestamp))
