"""Deterministic and sequenced idempotency keys."""

import hashlib
import itertools
import threading
from typing import Any

DEFAULT_DIGEST_LENGTH = 16


class IdempotencyKeyBuilder:
    """Builds ``namespace:operation:digest`` keys.

    ``build`` hashes the given components, so equal components give equal
    keys. ``next_key`` adds a per-builder sequence number, giving every
    request its own key; the grant correlator hands these to the host as
    return codes so a host reply can be traced to the request that caused it.

    Args:
        namespace: Prefix isolating one feature's keys, e.g. "grants".
        digest_length: Hex characters of the SHA-256 digest to keep.

    Example:
        >>> builder = IdempotencyKeyBuilder(namespace="grants")
        >>> builder.build("resolve_database_id", connection_handle=1)
        'grants:resolve_database_id:...'
    """

    def __init__(self, namespace: str, digest_length: int = DEFAULT_DIGEST_LENGTH):
        if not 1 <= digest_length <= 64:
            raise ValueError("digest_length must be between 1 and 64")
        self.namespace = namespace
        self.digest_length = digest_length
        self._sequence = itertools.count(1)
        self._sequence_lock = threading.Lock()

    def build(self, operation: str, **components: Any) -> str:
        """Key for an operation and its components.

        Component order does not matter.
        """
        material = "|".join(
            [self.namespace, operation]
            + [f"{name}={value}" for name, value in sorted(components.items())]
        )
        digest = hashlib.sha256(material.encode()).hexdigest()[: self.digest_length]
        return f"{self.namespace}:{operation}:{digest}"

    def next_key(self, operation: str, **components: Any) -> str:
        """Key unique to this call within the builder's lifetime."""
        with self._sequence_lock:
            sequence = next(self._sequence)
        return self.build(operation, sequence=sequence, **components)
