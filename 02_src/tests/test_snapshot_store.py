"""Tests for SnapshotStore."""

import asyncio

import pytest

from sonifier.models import Snapshot, TelemetryKind


class TestSnapshotStore:
    """Tests for last-write-wins snapshot storage."""

    @pytest.mark.asyncio
    async def test_empty_store_returns_none(self, store):
        """Test that an empty store signals no content."""
        assert await store.get() is None

    @pytest.mark.asyncio
    async def test_put_then_get(self, store):
        """Test that get returns exactly what was put."""
        payload = {"resourceSpans": []}
        await store.put(TelemetryKind.TRACES, payload)

        snapshot = await store.get()
        assert snapshot == Snapshot(kind=TelemetryKind.TRACES, payload=payload)

    @pytest.mark.asyncio
    async def test_last_write_wins(self, store):
        """Test that a new put discards the previous snapshot."""
        await store.put(TelemetryKind.TRACES, {"resourceSpans": []})
        await store.put(TelemetryKind.LOGS, {"resourceLogs": []})

        snapshot = await store.get()
        assert snapshot.kind is TelemetryKind.LOGS
        assert snapshot.payload == {"resourceLogs": []}

    @pytest.mark.asyncio
    async def test_get_is_stable_until_next_put(self, store):
        """Test that repeated reads do not consume the snapshot."""
        await store.put(TelemetryKind.METRICS, {"resourceMetrics": []})
        first = await store.get()
        second = await store.get()
        assert first == second

    @pytest.mark.asyncio
    async def test_clear(self, store):
        """Test that clear returns the store to the empty state."""
        await store.put(TelemetryKind.UNKNOWN, "raw")
        await store.clear()
        assert await store.get() is None

    @pytest.mark.asyncio
    async def test_concurrent_puts_leave_one_consistent_snapshot(self, store):
        """Test that concurrent writers never produce a mixed snapshot."""
        writes = [
            (TelemetryKind.TRACES, {"resourceSpans": [i]}) for i in range(20)
        ] + [(TelemetryKind.LOGS, {"resourceLogs": [i]}) for i in range(20)]

        await asyncio.gather(*[store.put(kind, payload) for kind, payload in writes])

        snapshot = await store.get()
        assert (snapshot.kind, snapshot.payload) in writes
