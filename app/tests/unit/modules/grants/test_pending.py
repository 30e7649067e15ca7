"""Unit tests for PendingResolutionTable."""

import threading

import pytest

from modules.grants import CorrelationKey, GrantRule, PendingResolutionTable, ResolutionState
from tests.factories import make_pending_resolution

pytestmark = pytest.mark.unit

KEY_A = CorrelationKey(1, "UID-A")


@pytest.fixture
def table(clock):
    return PendingResolutionTable(clock=clock)


class TestInsertOrUpdate:
    """Tests for insert_or_update."""

    def test_inserts_new_record(self, table):
        record = make_pending_resolution()

        stored, created = table.insert_or_update(record)

        assert created is True
        assert stored is record
        assert KEY_A in table
        assert len(table) == 1

    def test_updates_existing_record_in_place(self, table):
        first = make_pending_resolution(correlation_token="first", expires_at=1030.0)
        table.insert_or_update(first)
        second = make_pending_resolution(
            client_runtime_id=8,
            client_name="Alice (2)",
            server_group_id=31,
            rule=GrantRule(14, 22),
            correlation_token="second",
            expires_at=1090.0,
        )

        stored, created = table.insert_or_update(second)

        assert created is False
        assert stored is first
        assert stored.correlation_token == "first"
        assert stored.expires_at == 1030.0
        assert stored.client_runtime_id == 8
        assert stored.client_name == "Alice (2)"
        assert stored.server_group_id == 31
        assert stored.rule == GrantRule(14, 22)
        assert len(table) == 1


class TestTakeAndDiscard:
    """Tests for take and discard."""

    def test_take_removes_and_marks_resolved(self, table):
        table.insert_or_update(make_pending_resolution())

        record = table.take(KEY_A)

        assert record.state == ResolutionState.RESOLVED
        assert KEY_A not in table

    def test_take_missing_key_returns_none(self, table):
        assert table.take(KEY_A) is None

    def test_discard_marks_discarded(self, table):
        table.insert_or_update(make_pending_resolution())

        record = table.discard(KEY_A)

        assert record.state == ResolutionState.DISCARDED
        assert len(table) == 0

    def test_discard_with_other_expected_record_keeps_entry(self, table):
        stored = make_pending_resolution()
        table.insert_or_update(stored)

        assert table.discard(KEY_A, expected=make_pending_resolution()) is None
        assert table.get(KEY_A) is stored
        assert stored.state == ResolutionState.AWAITING_RESOLUTION

    def test_discard_with_expected_record_removes_it(self, table):
        stored = make_pending_resolution()
        table.insert_or_update(stored)

        assert table.discard(KEY_A, expected=stored) is stored


class TestEvictExpired:
    """Tests for evict_expired."""

    def test_evicts_only_expired(self, table, clock):
        table.insert_or_update(make_pending_resolution(expires_at=clock.now + 10))
        table.insert_or_update(
            make_pending_resolution(client_unique_identity="UID-B", expires_at=clock.now + 60)
        )
        table.insert_or_update(
            make_pending_resolution(client_unique_identity="UID-C", expires_at=None)
        )
        clock.advance(10)

        evicted = table.evict_expired()

        assert [r.client_unique_identity for r in evicted] == ["UID-A"]
        assert evicted[0].state == ResolutionState.DISCARDED
        assert sorted(k.client_unique_identity for k in table.keys()) == ["UID-B", "UID-C"]

    def test_explicit_now(self, table, clock):
        table.insert_or_update(make_pending_resolution(expires_at=clock.now + 10))

        assert table.evict_expired(now=clock.now) == []
        assert len(table.evict_expired(now=clock.now + 11)) == 1


class TestTableHousekeeping:
    """Tests for clear, keys and thread safety."""

    def test_clear_returns_count(self, table):
        table.insert_or_update(make_pending_resolution())
        table.insert_or_update(make_pending_resolution(client_unique_identity="UID-B"))

        assert table.clear() == 2
        assert table.keys() == []

    def test_now_uses_clock(self, table, clock):
        clock.advance(5)
        assert table.now() == clock.now

    def test_concurrent_inserts_create_one_record_per_key(self, table):
        results = []
        barrier = threading.Barrier(8)

        def _insert():
            barrier.wait()
            results.append(table.insert_or_update(make_pending_resolution())[1])

        threads = [threading.Thread(target=_insert) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results.count(True) == 1
        assert len(table) == 1

    def test_correlation_key_str(self):
        assert str(KEY_A) == "1/UID-A"
