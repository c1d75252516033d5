"""
Finite automaton over the alphabet ``{a, b, c}`` built on :class:`Context`.

    Initial --a--> A        A --a--> A (stay)   B --a--> A
    Initial --b--> B        A --b--> B          B --b--> B (stay)
                            A --c--> FinalC     B --c--> FinalC

A word is accepted once ``FinalC`` is reached; the rest of the input is then
ignored. Any symbol without an outgoing edge rejects the word on the spot.
Staying in the same state is not a transition and leaves no history record.

Each call to :meth:`Automaton.process_input` is an independent run with its
own context, so the history of one word never bleeds into the next.
"""

from __future__ import annotations

import logging
from typing import Any

from statecraft.core.errors import StatecraftError
from statecraft.core.machine.context import Context, StateVariant, TransitionRecord
from statecraft.core.settings import get_logger, load_settings

_UNSET: Any = object()


class AutomatonState(StateVariant["Context[AutomatonState]"]):
    """A recognizer state; subclasses declare their outgoing edges."""

    def next_state(self, symbol: str) -> type[AutomatonState] | None:
        """Return the target state class for ``symbol`` or ``None`` if there is no edge."""
        return None

    def consume(self, symbol: str, context: Context[AutomatonState]) -> bool:
        """Feed one symbol; return ``False`` if it is rejected."""
        target = self.next_state(symbol)
        if target is None:
            context.log.info("[%s] %s: no edge for %r", context.label, self.name, symbol)
            return False
        if target is not type(self):
            context.set_state(target())
        return True


class InitialState(AutomatonState):
    name = "Initial"

    def next_state(self, symbol: str) -> type[AutomatonState] | None:
        return {"a": StateA, "b": StateB}.get(symbol)


class StateA(AutomatonState):
    name = "A"

    def next_state(self, symbol: str) -> type[AutomatonState] | None:
        return {"a": StateA, "b": StateB, "c": FinalStateC}.get(symbol)


class StateB(AutomatonState):
    name = "B"

    def next_state(self, symbol: str) -> type[AutomatonState] | None:
        return {"a": StateA, "b": StateB, "c": FinalStateC}.get(symbol)


class FinalStateC(AutomatonState):
    name = "FinalC"
    final = True


class Automaton:
    """Runs words through the recognizer and keeps the last run for inspection."""

    def __init__(
        self,
        *,
        history_limit: int | None = _UNSET,
        logger: logging.Logger | None = None,
    ) -> None:
        if history_limit is _UNSET:
            history_limit = load_settings().transition_history_limit
        self._history_limit = history_limit
        self.log = logger if logger is not None else get_logger("statecraft.automaton")
        self._context: Context[AutomatonState] = self._new_context()
        self._inputs: list[str] = []

    def process_input(self, text: str) -> bool:
        """Run ``text`` from the initial state; return ``True`` if it is accepted."""
        self._context = self._new_context()
        self._inputs = []
        self._context.set_state(InitialState())

        for symbol in text:
            self._inputs.append(symbol)
            state = self._context.state
            if state is None:
                raise StatecraftError("automaton context lost its state")
            if not state.consume(symbol, self._context):
                self.log.info("[automaton] %r rejected at symbol %r", text, symbol)
                return False
            if self._context.is_final:
                break

        accepted = self._context.is_final
        self.log.info("[automaton] %r %s", text, "accepted" if accepted else "rejected")
        return accepted

    # ------------------------------- Queries --------------------------------

    @property
    def current_state(self) -> str:
        return self._context.state_name

    def input_history(self) -> tuple[str, ...]:
        return tuple(self._inputs)

    def history(self) -> tuple[TransitionRecord, ...]:
        return self._context.history()

    def info(self) -> dict[str, Any]:
        return {
            "current_state": self.current_state,
            "is_final": self._context.is_final,
            "input_history": list(self._inputs),
            "state_history": [r.as_dict() for r in self.history()],
        }

    def _new_context(self) -> Context[AutomatonState]:
        return Context(history_limit=self._history_limit, logger=self.log, label="automaton")


__all__ = [
    "Automaton",
    "AutomatonState",
    "FinalStateC",
    "InitialState",
    "StateA",
    "StateB",
]
