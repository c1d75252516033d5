"""Originator contract: the owner whose state a snapshot store captures."""

from __future__ import annotations

from typing import Any, Protocol, TypeVar, runtime_checkable

from .snapshot import Snapshot

S = TypeVar("S")


@runtime_checkable
class Originator(Protocol[S]):
    """Anything that can expose its state and be restored from a snapshot."""

    def get_state(self) -> S:
        """Return the owner's current observable state."""
        ...

    def restore(self, snapshot: Snapshot[S]) -> None:
        """Replace the owner's state with the one captured in ``snapshot``."""
        ...


class DictOriginator:
    """Owner holding a flat ``dict`` state that is updated by partial merges."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._state: dict[str, Any] = dict(initial or {})

    def set_state(self, **partial: Any) -> None:
        """Merge ``partial`` into the current state."""
        self._state = {**self._state, **partial}

    def get_state(self) -> dict[str, Any]:
        """Return a shallow copy of the current state."""
        return dict(self._state)

    def restore(self, snapshot: Snapshot[dict[str, Any]]) -> None:
        self._state = snapshot.value()

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        return f"DictOriginator({self._state!r})"


__all__ = ["DictOriginator", "Originator"]
