"""Finite automaton recognizer built on the state machine context."""

from __future__ import annotations

from .recognizer import Automaton

__all__ = ["Automaton"]
