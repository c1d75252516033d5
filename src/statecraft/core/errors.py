"""Exception types for contract violations.

Domain rejections (invalid transitions, undo on an empty stack) are never
raised; they come back as return values. Only programmer errors end up here.
"""

from __future__ import annotations


class StatecraftError(Exception):
    """Base class for all errors raised by this package."""


class UnserializableStateError(StatecraftError, TypeError):
    """A state value could not be structurally cloned.

    Attributes
    ----------
    path : str
        JSONPath-like location of the offending value (e.g. ``$.items[2]``).
    """

    def __init__(self, message: str, *, path: str = "$") -> None:
        super().__init__(f"{message} (at {path})")
        self.path = path


__all__ = ["StatecraftError", "UnserializableStateError"]
