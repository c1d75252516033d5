"""Snapshot capture, storage and undo/redo."""

from __future__ import annotations

from .caretaker import UndoHistory
from .clone import clone_state
from .originator import DictOriginator, Originator
from .snapshot import Snapshot
from .store import SnapshotStore, StoreStats

__all__ = [
    "DictOriginator",
    "Originator",
    "Snapshot",
    "SnapshotStore",
    "StoreStats",
    "UndoHistory",
    "clone_state",
]
