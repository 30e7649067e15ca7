"""Group-grant correlator.

Grants a channel group to a client who joins a server group named in the
policy. The client's database id is not part of the membership event, so
the grant happens in two phases:

1. ``on_membership_added`` records a pending resolution and asks the
   identity resolver for the database id.
2. ``on_identity_resolved`` arrives later, possibly after unrelated events,
   is matched to the pending record by (connection handle, unique identity)
   and issues the channel-group assignment.

None of the handlers raise into the caller. Outcomes that are not failures
(policy misses, duplicate events, orphan completions) are counted and
logged; see ``get_stats``.
"""

import threading
import time
from collections import Counter
from typing import Any, Callable, Dict, List, Optional

from infrastructure.events import Event, dispatch_event
from infrastructure.idempotency import IdempotencyKeyBuilder
from infrastructure.logging import get_module_logger
from modules.grants import events as grant_events
from modules.grants.contracts import GroupManagementSink, IdentityResolver
from modules.grants.domain.models import (
    CorrelationKey,
    Invoker,
    PendingResolution,
)
from modules.grants.domain.types import OutcomeKind, ResolutionState
from modules.grants.pending import PendingResolutionTable
from modules.grants.policy import GroupGrantPolicy

logger = get_module_logger()

TOKEN_NAMESPACE = "grants"


class GroupGrantCorrelator:
    """Correlates membership events with identity resolutions.

    Args:
        policy: Server group to grant rule mapping.
        resolver: Identity resolver receiving database id lookups.
        sink: Group-management sink receiving channel-group assignments.
        pending_timeout_seconds: Seconds a lookup may stay unanswered before
            its record is discarded; 0 or None keeps records until answered.
        grant_max_attempts: Total submissions of one grant when the sink
            reports a transient error or raises.
        clock: Monotonic clock for deadlines.
        publish: Callable receiving audit events.
    """

    def __init__(
        self,
        policy: GroupGrantPolicy,
        resolver: IdentityResolver,
        sink: GroupManagementSink,
        pending_timeout_seconds: Optional[float] = None,
        grant_max_attempts: int = 1,
        clock: Callable[[], float] = time.monotonic,
        publish: Callable[[Event], Any] = dispatch_event,
    ):
        if grant_max_attempts < 1:
            raise ValueError("grant_max_attempts must be at least 1")
        if pending_timeout_seconds is not None and pending_timeout_seconds < 0:
            raise ValueError("pending_timeout_seconds must not be negative")

        self.policy = policy
        self.resolver = resolver
        self.sink = sink
        self.pending_timeout_seconds = pending_timeout_seconds or None
        self.grant_max_attempts = grant_max_attempts
        self._pending = PendingResolutionTable(clock=clock)
        self._publish = publish
        self._key_builder = IdempotencyKeyBuilder(namespace=TOKEN_NAMESPACE)
        self._counters: Counter = Counter()
        self._counters_lock = threading.Lock()

    @classmethod
    def from_settings(
        cls,
        grants_settings,
        resolver: IdentityResolver,
        sink: GroupManagementSink,
        **kwargs: Any,
    ) -> "GroupGrantCorrelator":
        """Build a correlator from ``settings.grants``."""
        return cls(
            policy=GroupGrantPolicy.from_settings(grants_settings),
            resolver=resolver,
            sink=sink,
            pending_timeout_seconds=grants_settings.pending_timeout_seconds,
            grant_max_attempts=grants_settings.grant_max_attempts,
            **kwargs,
        )

    # Membership events --------------------------------------------------

    def on_membership_added(
        self,
        connection_handle: int,
        client_runtime_id: int,
        client_unique_identity: str,
        server_group_id: int,
        invoker: Optional[Invoker] = None,
        client_name: str = "",
    ) -> None:
        """Handle a client being added to a server group.

        Requests one database id lookup per correlation key. A second event
        for a key whose lookup is still in flight replaces the stored grant
        rule without issuing another lookup.
        """
        self.evict_stale()

        log = logger.bind(
            connection_handle=connection_handle,
            client_runtime_id=client_runtime_id,
            client_unique_identity=client_unique_identity,
            server_group_id=server_group_id,
        )
        if invoker is not None:
            log = log.bind(invoker_client_id=invoker.client_id, invoker_name=invoker.name)

        if not client_unique_identity:
            log.warning("membership_event_without_unique_identity")
            return

        rule = self.policy.lookup(server_group_id)
        if rule is None:
            self._count(OutcomeKind.POLICY_MISS)
            log.debug("server_group_not_in_policy")
            return

        now = self._pending.now()
        record = PendingResolution(
            connection_handle=connection_handle,
            client_unique_identity=client_unique_identity,
            client_runtime_id=client_runtime_id,
            server_group_id=server_group_id,
            rule=rule,
            correlation_token=self._next_token(connection_handle, client_unique_identity),
            client_name=client_name,
            created_at=now,
            expires_at=(
                now + self.pending_timeout_seconds
                if self.pending_timeout_seconds
                else None
            ),
        )

        stored, created = self._pending.insert_or_update(record)
        if not created:
            self._count(OutcomeKind.DUPLICATE_IN_FLIGHT)
            log.info(
                "resolution_already_in_flight",
                correlation_token=stored.correlation_token,
                channel_group_id=rule.channel_group_id,
                channel_id=rule.channel_id,
            )
            return

        self._request_resolution(stored)

    def on_membership_removed(
        self,
        connection_handle: int,
        client_runtime_id: int,
        client_unique_identity: str,
        server_group_id: int,
        invoker: Optional[Invoker] = None,
        client_name: str = "",
    ) -> None:
        """Observation point for server-group removals. Takes no action."""
        logger.debug(
            "server_group_client_removed",
            connection_handle=connection_handle,
            client_runtime_id=client_runtime_id,
            client_unique_identity=client_unique_identity,
            server_group_id=server_group_id,
        )

    def on_channel_group_changed(
        self,
        connection_handle: int,
        channel_group_id: int,
        channel_id: int,
        client_runtime_id: int,
        invoker: Optional[Invoker] = None,
    ) -> None:
        """Observation point for channel-group changes. Takes no action."""
        logger.debug(
            "client_channel_group_changed",
            connection_handle=connection_handle,
            channel_group_id=channel_group_id,
            channel_id=channel_id,
            client_runtime_id=client_runtime_id,
        )

    # Identity resolution ------------------------------------------------

    def on_identity_resolved(
        self,
        connection_handle: int,
        client_unique_identity: str,
        resolved_database_id: int,
    ) -> None:
        """Handle a database id lookup completion.

        Completions with no pending record (already granted, evicted, or
        requested by someone else) are ignored.
        """
        self.evict_stale()

        key = CorrelationKey(connection_handle, client_unique_identity)
        record = self._pending.take(key)
        if record is None:
            self._count(OutcomeKind.UNKNOWN_CORRELATION)
            logger.debug(
                "resolution_without_pending_request",
                connection_handle=connection_handle,
                client_unique_identity=client_unique_identity,
                database_id=resolved_database_id,
            )
            return

        logger.info(
            "identity_resolved",
            correlation_token=record.correlation_token,
            database_id=resolved_database_id,
            **record.to_log_context(),
        )
        self._apply_grant(record, resolved_database_id)

    # Eviction -----------------------------------------------------------

    def evict_stale(self, now: Optional[float] = None) -> List[PendingResolution]:
        """Discard lookups that went unanswered past the timeout.

        Args:
            now: Clock reading to evaluate deadlines at; defaults to the
                correlator clock.

        Returns:
            The discarded records.
        """
        if not self.pending_timeout_seconds:
            return []

        if now is None:
            now = self._pending.now()
        expired = self._pending.evict_expired(now)
        for record in expired:
            self._count(OutcomeKind.STALE_RESOLUTION)
            logger.warning(
                "pending_resolution_stale",
                correlation_token=record.correlation_token,
                age_seconds=round(now - record.created_at, 3),
                timeout_seconds=self.pending_timeout_seconds,
                **record.to_log_context(),
            )
            self._emit(grant_events.RESOLUTION_DISCARDED, record, reason="stale")
        return expired

    # Introspection ------------------------------------------------------

    def get_stats(self) -> Dict[str, Any]:
        """Outcome counters and current table size.

        Returns:
            Dict with one counter per OutcomeKind value, plus ``pending``,
            ``policy_rules``, ``pending_timeout_seconds`` and
            ``grant_max_attempts``.
        """
        with self._counters_lock:
            stats: Dict[str, Any] = {
                kind.value: self._counters[kind] for kind in OutcomeKind
            }
        stats["pending"] = len(self._pending)
        stats["policy_rules"] = len(self.policy)
        stats["pending_timeout_seconds"] = self.pending_timeout_seconds or 0
        stats["grant_max_attempts"] = self.grant_max_attempts
        return stats

    def pending_keys(self) -> List[CorrelationKey]:
        return self._pending.keys()

    def get_pending(
        self, connection_handle: int, client_unique_identity: str
    ) -> Optional[PendingResolution]:
        return self._pending.get(CorrelationKey(connection_handle, client_unique_identity))

    def reset(self) -> int:
        """Drop all pending resolutions, e.g. when the host unloads the plugin.

        Returns:
            Number of records dropped.
        """
        dropped = self._pending.clear()
        if dropped:
            logger.info("pending_resolutions_dropped", count=dropped)
        return dropped

    # Internals ----------------------------------------------------------

    def _next_token(self, connection_handle: int, client_unique_identity: str) -> str:
        return self._key_builder.next_key(
            "resolve_database_id",
            connection_handle=connection_handle,
            client_unique_identity=client_unique_identity,
        )

    def _request_resolution(self, record: PendingResolution) -> None:
        self._count(OutcomeKind.RESOLVE_REQUESTED)
        context = record.to_log_context()
        try:
            result = self.resolver.resolve_database_id(
                record.connection_handle,
                record.client_unique_identity,
                record.correlation_token,
            )
        except Exception as e:
            logger.error(
                "resolve_request_failed",
                correlation_token=record.correlation_token,
                error=str(e),
                exc_info=True,
                **context,
            )
            self._abandon(record, reason="resolve_request_failed")
            return

        if result is not None and not result.is_success:
            logger.error(
                "resolve_request_rejected",
                correlation_token=record.correlation_token,
                message=result.message,
                error_code=result.error_code,
                **context,
            )
            self._abandon(record, reason="resolve_request_rejected")
            return

        logger.info(
            "resolve_requested",
            correlation_token=record.correlation_token,
            **context,
        )

    def _abandon(self, record: PendingResolution, reason: str) -> None:
        # The completion may already have been delivered synchronously.
        if self._pending.discard(record.key, expected=record) is None:
            return
        self._count(OutcomeKind.RESOLVE_FAILED)
        self._emit(grant_events.RESOLUTION_DISCARDED, record, reason=reason)

    def _apply_grant(self, record: PendingResolution, database_id: int) -> None:
        context = record.to_log_context()
        last_error: Optional[str] = None
        attempts = 0

        while attempts < self.grant_max_attempts:
            attempts += 1
            try:
                result = self.sink.set_client_channel_group(
                    record.connection_handle,
                    record.channel_group_to_grant,
                    record.channel_to_grant,
                    database_id,
                    record.correlation_token,
                )
            except Exception as e:
                last_error = str(e)
                logger.warning(
                    "grant_attempt_raised",
                    attempt=attempts,
                    correlation_token=record.correlation_token,
                    error=last_error,
                    exc_info=True,
                    **context,
                )
                continue

            if result is None or result.is_success:
                record.state = ResolutionState.APPLIED
                self._count(OutcomeKind.GRANT_APPLIED)
                logger.info(
                    "grant_applied",
                    attempts=attempts,
                    correlation_token=record.correlation_token,
                    database_id=database_id,
                    **record.to_log_context(),
                )
                self._emit(
                    grant_events.GRANT_APPLIED,
                    record,
                    database_id=database_id,
                    attempts=attempts,
                )
                return

            last_error = result.error_code or result.message
            if not result.is_transient:
                break
            logger.warning(
                "grant_attempt_failed",
                attempt=attempts,
                correlation_token=record.correlation_token,
                error=last_error,
                **context,
            )

        # The grant was issued; the record is no longer addressable either way.
        record.state = ResolutionState.APPLIED
        self._count(OutcomeKind.GRANT_FAILED)
        logger.error(
            "grant_failed",
            attempts=attempts,
            correlation_token=record.correlation_token,
            database_id=database_id,
            error=last_error,
            **context,
        )
        self._emit(
            grant_events.GRANT_FAILED,
            record,
            database_id=database_id,
            attempts=attempts,
            error=last_error,
        )

    def _emit(self, event_type: str, record: PendingResolution, **metadata: Any) -> None:
        try:
            self._publish(grant_events.build_event(event_type, record, **metadata))
        except Exception:
            logger.exception(
                "audit_event_publish_failed",
                event_type=event_type,
                correlation_token=record.correlation_token,
            )

    def _count(self, kind: OutcomeKind) -> None:
        with self._counters_lock:
            self._counters[kind] += 1
