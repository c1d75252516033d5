"""
Snapshot store with undo/redo stacks.

The store gives an owner object transactable undo/redo over an opaque state
value without knowing the value's shape. It keeps two ordered stacks of
:class:`Snapshot` objects:

- ``save(state)`` clones ``state`` onto the undo stack and clears the redo stack
  (a new action invalidates redo history; branching is not supported).
- ``undo()`` pops the undo stack, pushes the owner's *current* state onto the
  redo stack and returns the popped snapshot for the caller to apply.
- ``redo()`` is the mirror image.

Empty stacks are not errors: ``undo()``/``redo()`` return ``None`` and leave
both stacks untouched.

Memory
------
Each stack is a :class:`BoundedLog`. With ``max_depth`` set, pushing onto a
full stack evicts its oldest snapshot. The default comes from
``settings.snapshot_max_depth``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from statecraft.core.clock import utc_timestamp
from statecraft.core.history.log import BoundedLog
from statecraft.core.settings import get_logger, load_settings

from .clone import clone_state
from .originator import Originator
from .snapshot import Snapshot

S = TypeVar("S")

_UNSET: Any = object()


@dataclass(frozen=True, slots=True)
class StoreStats:
    """Depth of both stacks at query time."""

    undo_depth: int
    redo_depth: int

    def as_dict(self) -> dict[str, int]:
        return {"undo_depth": self.undo_depth, "redo_depth": self.redo_depth}


class SnapshotStore(Generic[S]):
    """
    Per-owner undo/redo snapshot stacks.

    Parameters
    ----------
    owner : Originator[S]
        The object whose current state is captured when the store moves a
        snapshot between stacks.
    max_depth : int | None
        Capacity of each stack; ``None`` for unbounded. Defaults to the
        configured ``SNAPSHOT_MAX_DEPTH``.
    logger : logging.Logger | None
        Injected logger; falls back to ``get_logger("statecraft.snapshot")``.
    """

    __slots__ = ("_owner", "_undo", "_redo", "_log")

    def __init__(
        self,
        owner: Originator[S],
        *,
        max_depth: int | None = _UNSET,
        logger: logging.Logger | None = None,
    ) -> None:
        if max_depth is _UNSET:
            max_depth = load_settings().snapshot_max_depth
        self._owner = owner
        self._undo: BoundedLog[Snapshot[S]] = BoundedLog(max_depth)
        self._redo: BoundedLog[Snapshot[S]] = BoundedLog(max_depth)
        self._log = logger if logger is not None else get_logger("statecraft.snapshot")

    # ------------------------------- Capture --------------------------------

    def capture(self, state: S, note: str | None = None) -> Snapshot[S]:
        """
        Clone ``state`` into a new timestamped :class:`Snapshot` (no push).

        Raises
        ------
        UnserializableStateError
            If ``state`` holds a cycle or an unsupported value type.
        """
        return Snapshot(payload=clone_state(state), created_at=utc_timestamp(), note=note)

    def save(self, state: S = _UNSET, note: str | None = None) -> None:
        """
        Push a snapshot of ``state`` (default: the owner's current state).

        The redo stack is cleared: any new action discards the redo branch.
        """
        source = self._owner.get_state() if state is _UNSET else state
        snap = self.capture(source, note)
        self._push(self._undo, snap, "undo")
        if self._redo:
            self._log.debug("save(): discarding %d redo snapshot(s)", len(self._redo))
        self._redo.clear()

    # ------------------------------- Undo / Redo ----------------------------

    def undo(self) -> Snapshot[S] | None:
        """Pop the newest undo snapshot, or return ``None`` if there is none."""
        if not self._undo:
            self._log.debug("undo(): nothing to undo")
            return None
        # capture before popping: a failing clone must leave both stacks intact
        current = self.capture(self._owner.get_state(), note="redo point")
        snap = self._undo.pop()
        self._push(self._redo, current, "redo")
        return snap

    def redo(self) -> Snapshot[S] | None:
        """Pop the newest redo snapshot, or return ``None`` if there is none."""
        if not self._redo:
            self._log.debug("redo(): nothing to redo")
            return None
        current = self.capture(self._owner.get_state(), note="undo point")
        snap = self._redo.pop()
        self._push(self._undo, current, "undo")
        return snap

    def clear(self) -> None:
        """Forget both stacks."""
        self._undo.clear()
        self._redo.clear()

    # ------------------------------- Queries --------------------------------

    def stats(self) -> StoreStats:
        """Return the depth of both stacks."""
        return StoreStats(undo_depth=len(self._undo), redo_depth=len(self._redo))

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    @property
    def max_depth(self) -> int | None:
        return self._undo.limit

    # ------------------------------- Internals ------------------------------

    def _push(self, stack: BoundedLog[Snapshot[S]], snap: Snapshot[S], label: str) -> None:
        dropped = stack.append(snap)
        if dropped is not None:
            self._log.debug(
                "%s stack full (max_depth=%s); evicted snapshot from %s",
                label,
                stack.limit,
                dropped.created_at,
            )


__all__ = ["SnapshotStore", "StoreStats"]
