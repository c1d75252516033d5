"""Reversible and append-only logs."""

from __future__ import annotations

from .log import BoundedLog

__all__ = ["BoundedLog"]
