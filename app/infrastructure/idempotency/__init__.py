"""Deterministic idempotency keys.

Usage:

    from infrastructure.idempotency import IdempotencyKeyBuilder

    builder = IdempotencyKeyBuilder(namespace="grants")
    token = builder.build("resolve_database_id", connection_handle=1, sequence=7)
"""

from infrastructure.idempotency.key_builder import IdempotencyKeyBuilder

__all__ = [
    "IdempotencyKeyBuilder",
]
