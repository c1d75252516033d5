"""
Bounded, ordered log shared by the snapshot stacks and the transition history.

Both halves of the package keep the same kind of record: an ordered sequence
that grows on every accepted mutation. Undo/redo stacks pop from the newest
end; the transition history is append-only. Either way memory has to stay
bounded, so the log works as a ring buffer once ``limit`` is reached: the
oldest entry is evicted and handed back to the caller.

Design Notes
------------
- ``limit=None`` keeps everything.
- Eviction is reported, never silent: ``append`` returns the dropped entry and
  ``evicted`` keeps a running count.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from typing import Generic, TypeVar

T = TypeVar("T")


class BoundedLog(Generic[T]):
    """
    Ordered log with optional ring-buffer capacity.

    Attributes
    ----------
    _items : deque[T]
        Entries, oldest first.
    _limit : int | None
        Capacity; ``None`` means unbounded.
    _evicted : int
        Number of entries dropped because the log was full.
    """

    __slots__ = ("_items", "_limit", "_evicted")

    def __init__(self, limit: int | None = None, items: Iterable[T] = ()) -> None:
        if limit is not None and (isinstance(limit, bool) or limit <= 0):
            raise ValueError(f"limit must be a positive int or None, got {limit!r}")
        self._limit = limit
        self._items: deque[T] = deque()
        self._evicted = 0
        for item in items:
            self.append(item)

    # ------------------------------- Mutation -------------------------------

    def append(self, item: T) -> T | None:
        """
        Append ``item`` as the newest entry.

        Returns
        -------
        T | None
            The evicted oldest entry when the log was already full, else ``None``.
        """
        dropped: T | None = None
        if self._limit is not None and len(self._items) >= self._limit:
            dropped = self._items.popleft()
            self._evicted += 1
        self._items.append(item)
        return dropped

    def pop(self) -> T | None:
        """Remove and return the newest entry, or ``None`` when empty."""
        if not self._items:
            return None
        return self._items.pop()

    def clear(self) -> None:
        """Drop every entry (eviction counter is kept)."""
        self._items.clear()

    # ------------------------------- Queries --------------------------------

    def peek(self) -> T | None:
        """Return the newest entry without removing it."""
        return self._items[-1] if self._items else None

    def items(self) -> tuple[T, ...]:
        """Return all entries, oldest first, as an immutable tuple."""
        return tuple(self._items)

    @property
    def limit(self) -> int | None:
        return self._limit

    @property
    def evicted(self) -> int:
        return self._evicted

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(tuple(self._items))

    def __repr__(self) -> str:  # pragma: no cover - trivial representation
        return f"BoundedLog(len={len(self._items)}, limit={self._limit})"


__all__ = ["BoundedLog"]
