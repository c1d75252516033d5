"""
Undo history bound to one owner.

:class:`SnapshotStore` only hands snapshots back; applying them is left to the
caller. :class:`UndoHistory` closes that loop for the common case: it takes a
checkpoint before each mutation and restores the owner on ``undo``/``redo``,
answering with a plain ``bool`` ("did anything happen?").

Usage
-----
    editor = TextEditor()
    history = UndoHistory(editor)
    history.checkpoint()
    editor.insert("Hello")
    history.undo()   # -> True, editor.text == ""
"""

from __future__ import annotations

from typing import Generic, TypeVar

from .originator import Originator
from .store import SnapshotStore, StoreStats

S = TypeVar("S")


class UndoHistory(Generic[S]):
    """Caretaker applying a :class:`SnapshotStore` to its owner."""

    def __init__(self, owner: Originator[S], store: SnapshotStore[S] | None = None) -> None:
        self.owner = owner
        self.store: SnapshotStore[S] = store if store is not None else SnapshotStore(owner)

    def checkpoint(self, note: str | None = None) -> None:
        """Record the owner's current state; call this *before* mutating it."""
        self.store.save(note=note)

    def undo(self) -> bool:
        snap = self.store.undo()
        if snap is None:
            return False
        self.owner.restore(snap)
        return True

    def redo(self) -> bool:
        snap = self.store.redo()
        if snap is None:
            return False
        self.owner.restore(snap)
        return True

    def stats(self) -> StoreStats:
        return self.store.stats()


__all__ = ["UndoHistory"]
