"""
State machine core: variants, transition records and the owning context.

A :class:`Context` holds exactly one current :class:`StateVariant` out of a
closed set and delegates events to it. The variant decides what happens and,
when a change is warranted, asks the context to swap it via
:meth:`Context.set_state`. That method is the single mutator of the current
variant and always appends one :class:`TransitionRecord`.

Failure semantics
-----------------
Asking a variant for something it does not allow is not an exception. The
variant logs the rejection and returns ``TransitionResult.reject(...)``;
history is left untouched. Exceptions are reserved for contract errors such
as passing a non-variant to ``set_state``.
"""

from __future__ import annotations

import logging
from abc import ABC
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar

from statecraft.core.clock import utc_timestamp
from statecraft.core.history.log import BoundedLog
from statecraft.core.settings import get_logger, load_settings

C = TypeVar("C", bound="Context[Any]")
V = TypeVar("V", bound="StateVariant[Any]")

NO_STATE = "None"

_UNSET: Any = object()


class StateVariant(ABC, Generic[C]):
    """
    One member of a closed set of named behaviours.

    Variants carry no per-instance data: everything mutable lives on the
    context they are applied to. Subclasses may override the class attributes:

    - ``name``: state name recorded in history (defaults to the class name).
    - ``description``: human-readable summary.
    - ``final``: ``True`` for terminal variants.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    final: ClassVar[bool] = False

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if not cls.__dict__.get("name"):
            cls.name = cls.__name__

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"<{self.name}>"


@dataclass(frozen=True, slots=True)
class TransitionRecord:
    """Append-only history entry ``{from, to, timestamp}``."""

    from_state: str
    to_state: str
    timestamp: str

    def as_dict(self) -> dict[str, str]:
        return {"from": self.from_state, "to": self.to_state, "timestamp": self.timestamp}


@dataclass(frozen=True, slots=True)
class TransitionResult:
    """
    Outcome of an event handled by a variant.

    Attributes
    ----------
    accepted : bool
        ``True`` if the event changed the current variant.
    from_state : str
        Variant name when the event arrived.
    to_state : str | None
        New variant name, or ``None`` for a rejection.
    reason : str | None
        Short explanation, mainly for rejections.
    """

    accepted: bool
    from_state: str
    to_state: str | None = None
    reason: str | None = None

    @classmethod
    def accept(
        cls, from_state: str, to_state: str, reason: str | None = None
    ) -> TransitionResult:
        return cls(accepted=True, from_state=from_state, to_state=to_state, reason=reason)

    @classmethod
    def reject(cls, from_state: str, reason: str) -> TransitionResult:
        return cls(accepted=False, from_state=from_state, to_state=None, reason=reason)

    def __bool__(self) -> bool:
        return self.accepted


class Context(Generic[V]):
    """
    Owner of the current variant and its transition history.

    Parameters
    ----------
    initial : V | None
        Starting variant. It is installed without a history record; pass
        ``None`` and call :meth:`set_state` to record a ``None -> X`` transition.
    history_limit : int | None
        Number of records retained (oldest evicted first); ``None`` keeps all.
        Defaults to the configured ``TRANSITION_HISTORY_LIMIT``.
    logger : logging.Logger | None
        Injected logger; falls back to ``get_logger("statecraft.machine")``.
    label : str
        Name used in log lines (e.g. an order id).
    """

    def __init__(
        self,
        initial: V | None = None,
        *,
        history_limit: int | None = _UNSET,
        logger: logging.Logger | None = None,
        label: str = "context",
    ) -> None:
        if history_limit is _UNSET:
            history_limit = load_settings().transition_history_limit
        self._state: V | None = initial
        self._history: BoundedLog[TransitionRecord] = BoundedLog(history_limit)
        self._transitions = 0
        self.label = label
        self.log = logger if logger is not None else get_logger("statecraft.machine")

    # ------------------------------- Mutation -------------------------------

    def set_state(self, variant: V) -> TransitionRecord:
        """Install ``variant`` as the current state and record the transition."""
        if not isinstance(variant, StateVariant):
            raise TypeError(f"expected a StateVariant, got {type(variant).__name__}")
        record = TransitionRecord(
            from_state=self.state_name,
            to_state=variant.name,
            timestamp=utc_timestamp(),
        )
        self._state = variant
        self._history.append(record)
        self._transitions += 1
        self.log.info(
            "[%s] state changed: %s -> %s", self.label, record.from_state, record.to_state
        )
        return record

    # ------------------------------- Queries --------------------------------

    @property
    def state(self) -> V | None:
        return self._state

    @property
    def state_name(self) -> str:
        return self._state.name if self._state is not None else NO_STATE

    @property
    def is_final(self) -> bool:
        return self._state is not None and self._state.final

    @property
    def transition_count(self) -> int:
        """Total accepted transitions, including records evicted from history."""
        return self._transitions

    def history(self) -> tuple[TransitionRecord, ...]:
        """Return retained transition records, oldest first."""
        return self._history.items()


__all__ = [
    "NO_STATE",
    "Context",
    "StateVariant",
    "TransitionRecord",
    "TransitionResult",
]
