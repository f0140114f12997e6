"""Schema snapshot persistence."""

from automigrate.snapshot.store import SnapshotStore

__all__ = ["SnapshotStore"]
