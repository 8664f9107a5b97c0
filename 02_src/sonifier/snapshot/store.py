"""Single-slot, last-write-wins snapshot store."""

import asyncio
from typing import Any, Protocol

from ..models import Snapshot, TelemetryKind


class ISnapshotStore(Protocol):
    """Holds the most recently ingested normalized payload."""

    async def put(self, kind: TelemetryKind, payload: Any) -> Snapshot:
        """Overwrite the slot."""
        ...

    async def get(self) -> Snapshot | None:
        """Return the current snapshot, or None if nothing was ingested yet."""
        ...

    async def clear(self) -> None:
        """Drop the current snapshot."""
        ...


class SnapshotStore:
    """In-memory snapshot slot guarded by an asyncio lock."""

    def __init__(self):
        self._lock = asyncio.Lock()
        self._snapshot: Snapshot | None = None

    async def put(self, kind: TelemetryKind, payload: Any) -> Snapshot:
        """Overwrite the slot."""
        snapshot = Snapshot(kind=kind, payload=payload)
        async with self._lock:
            self._snapshot = snapshot
        return snapshot

    async def get(self) -> Snapshot | None:
        """Return the current snapshot, or None if nothing was ingested yet."""
        async with self._lock:
            return self._snapshot

    async def clear(self) -> None:
        """Drop the current snapshot."""
        async with self._lock:
            self._snapshot = None
