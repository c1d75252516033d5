"""Statecraft: reversible state for owner objects.

Two building blocks live here:

- a snapshot store giving any owner undo/redo over an opaque state value, and
- a state machine context that swaps named behaviour variants and audits
  every transition.
"""

from __future__ import annotations

__all__ = ["__version__"]
__version__ = "0.1.0"
