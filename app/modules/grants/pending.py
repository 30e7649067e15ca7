"""Table of in-flight identity resolutions.

Every operation that reads and writes a record happens under one lock, so a
host that delivers callbacks from more than one thread cannot interleave a
lookup with a removal.
"""

import threading
import time
from typing import Callable, Dict, List, Optional, Tuple

from modules.grants.domain.models import CorrelationKey, PendingResolution
from modules.grants.domain.types import ResolutionState


class PendingResolutionTable:
    """Pending resolutions keyed by (connection handle, unique identity).

    Args:
        clock: Monotonic clock used to read "now" for deadlines.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._records: Dict[CorrelationKey, PendingResolution] = {}
        self._lock = threading.Lock()

    def now(self) -> float:
        return self._clock()

    def insert_or_update(
        self, record: PendingResolution
    ) -> Tuple[PendingResolution, bool]:
        """Insert a record, or refresh the outcome of the one already pending.

        When the key is already pending, the stored record keeps its
        correlation token and deadline; its runtime id, name, server group
        and grant rule are replaced with the new record's.

        Args:
            record: Freshly built record in AWAITING_RESOLUTION.

        Returns:
            Tuple of (stored record, created) where created is False when an
            existing record was updated.
        """
        with self._lock:
            existing = self._records.get(record.key)
            if existing is None:
                self._records[record.key] = record
                return record, True

            existing.client_runtime_id = record.client_runtime_id
            existing.client_name = record.client_name
            existing.server_group_id = record.server_group_id
            existing.rule = record.rule
            return existing, False

    def take(self, key: CorrelationKey) -> Optional[PendingResolution]:
        """Remove the record for a key and mark it RESOLVED.

        Returns:
            The removed record, or None when nothing was pending for the key.
        """
        with self._lock:
            record = self._records.pop(key, None)
            if record is not None:
                record.state = ResolutionState.RESOLVED
            return record

    def discard(
        self, key: CorrelationKey, expected: Optional[PendingResolution] = None
    ) -> Optional[PendingResolution]:
        """Remove the record for a key and mark it DISCARDED.

        Args:
            key: Correlation key to remove.
            expected: When given, only remove if the stored record is this
                exact object.

        Returns:
            The removed record, or None when nothing matching was pending.
        """
        with self._lock:
            record = self._records.get(key)
            if record is None or (expected is not None and record is not expected):
                return None
            del self._records[key]
            record.state = ResolutionState.DISCARDED
            return record

    def evict_expired(self, now: Optional[float] = None) -> List[PendingResolution]:
        """Remove every record past its deadline and mark it DISCARDED.

        Args:
            now: Clock reading to compare deadlines against; defaults to the
                table clock.

        Returns:
            The evicted records.
        """
        if now is None:
            now = self._clock()
        with self._lock:
            expired = [r for r in self._records.values() if r.is_expired(now)]
            for record in expired:
                del self._records[record.key]
                record.state = ResolutionState.DISCARDED
            return expired

    def get(self, key: CorrelationKey) -> Optional[PendingResolution]:
        with self._lock:
            return self._records.get(key)

    def keys(self) -> List[CorrelationKey]:
        with self._lock:
            return list(self._records)

    def clear(self) -> int:
        """Drop every record, returning how many were pending."""
        with self._lock:
            count = len(self._records)
            for record in self._records.values():
                record.state = ResolutionState.DISCARDED
            self._records.clear()
            return count

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._records

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
