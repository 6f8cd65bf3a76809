"""Storage module for size snapshots."""

from storage.snapshot_store import SnapshotStore, SnapshotWriteError

__all__ = [
    "SnapshotStore",
    "SnapshotWriteError",
]
