"""Snapshot store module."""

from .store import ISnapshotStore, SnapshotStore

__all__ = ["ISnapshotStore", "SnapshotStore"]
