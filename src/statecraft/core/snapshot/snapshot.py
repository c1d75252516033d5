"""
Snapshot definition.

A snapshot is the immutable record of an owner's complete observable state at
one instant. It is created only by :class:`~statecraft.core.snapshot.store.SnapshotStore`,
which clones the state before wrapping it, so the payload shares nothing with
the live owner.

Design Notes
------------
- **Immutability**: ``frozen=True`` protects the attributes; the payload itself
  is never handed out directly. :meth:`Snapshot.value` returns a fresh clone,
  so restoring and then editing an owner cannot reach back into the stack.
- **Timestamps**: stored as ISO-8601 UTC strings, converted at capture time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from .clone import clone_state

S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class Snapshot(Generic[S]):
    """
    Immutable, deep-copied state value plus its capture metadata.

    Attributes
    ----------
    payload : S
        Cloned state. Treat as read-only; use :meth:`value` to get a working copy.
    created_at : str
        ISO-8601 UTC timestamp (e.g., "2025-10-27T10:00:00.123456Z").
    note : str | None
        Optional human-readable label (e.g., 'before paste').
    """

    payload: S
    created_at: str
    note: str | None = None

    def value(self) -> S:
        """Return an independent copy of the captured state for restoration."""
        return clone_state(self.payload)

    def as_dict(self) -> dict[str, Any]:
        """Return a plain mapping view (payload cloned) for rendering."""
        return {"created_at": self.created_at, "note": self.note, "state": self.value()}


__all__ = ["Snapshot"]
