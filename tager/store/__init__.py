"""Persistence for the tag graph."""

from tager.store.snapshot import SnapshotStore

__all__ = ["SnapshotStore"]
