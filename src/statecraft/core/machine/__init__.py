"""Generic state machine context and transition records."""

from __future__ import annotations

from .context import NO_STATE, Context, StateVariant, TransitionRecord, TransitionResult

__all__ = ["NO_STATE", "Context", "StateVariant", "TransitionRecord", "TransitionResult"]
