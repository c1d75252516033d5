"""
Structural deep clone for snapshot payloads.

A snapshot must be detached from the live state it was taken from, otherwise a
later mutation of the owner would silently rewrite history. Serialization
round-trips (e.g. through JSON) are not an option: they drop dates, tuples and
anything non-JSON without complaint. This module walks the value instead and
rebuilds it node by node.

Strategies
----------
- Immutable atoms (None, bool, numbers, str, bytes, Decimal, Fraction, UUID,
  Enum members, PurePath, date/time/datetime/timedelta) -> returned as-is.
- bytearray -> copied.
- dict / list / tuple / named tuple / set / frozenset -> rebuilt with cloned
  members; subclasses keep their type. Dict keys must be atoms or tuples and
  frozensets made of atoms.
- dataclass instances -> shallow copy with every field cloned.
- pydantic models -> ``model_copy`` with every field, extra and private
  attribute cloned.
- Anything else -> :class:`UnserializableStateError` naming the path.

Cycles are rejected. Shared, acyclic references are cloned once per
occurrence, so object identity between branches is not preserved.
"""

from __future__ import annotations

import copy
import dataclasses
from datetime import date, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel

from statecraft.core.errors import UnserializableStateError

T = TypeVar("T")

# datetime is a subclass of date, so it is covered here too.
_ATOMS: tuple[type, ...] = (
    bool,
    int,
    float,
    complex,
    str,
    bytes,
    Decimal,
    Fraction,
    UUID,
    Enum,
    PurePath,
    date,
    time,
    timedelta,
)


def is_atom(value: Any) -> bool:
    """Return ``True`` if ``value`` is an immutable leaf that needs no copy."""
    return value is None or isinstance(value, _ATOMS)


def clone_state(value: T) -> T:
    """
    Return a structurally independent deep copy of ``value``.

    Raises
    ------
    UnserializableStateError
        If ``value`` contains a cycle or a type outside the supported set.
    """
    return _clone(value, "$", set())


def _clone(value: Any, path: str, active: set[int]) -> Any:
    if is_atom(value):
        return value
    if isinstance(value, bytearray):
        return bytearray(value)

    marker = id(value)
    if marker in active:
        raise UnserializableStateError("cyclic reference in state", path=path)
    active.add(marker)
    try:
        return _clone_container(value, path, active)
    finally:
        active.discard(marker)


def _is_key(value: Any) -> bool:
    if is_atom(value):
        return True
    return isinstance(value, tuple | frozenset) and all(_is_key(m) for m in value)


def _clone_container(value: Any, path: str, active: set[int]) -> Any:
    if isinstance(value, BaseModel):
        updates = {
            name: _clone(getattr(value, name), f"{path}.{name}", active)
            for name in type(value).model_fields
        }
        dup = value.model_copy(update=updates)
        # model_copy hands back shallow copies of the extra and private dicts
        for name, member in (value.__pydantic_extra__ or {}).items():
            dup.__pydantic_extra__[name] = _clone(member, f"{path}.{name}", active)
        for name, member in (value.__pydantic_private__ or {}).items():
            dup.__pydantic_private__[name] = _clone(member, f"{path}.{name}", active)
        return dup

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        dup = copy.copy(value)
        for f in dataclasses.fields(value):
            # object.__setattr__ also works for frozen and slotted dataclasses
            member = _clone(getattr(value, f.name), f"{path}.{f.name}", active)
            object.__setattr__(dup, f.name, member)
        return dup

    if isinstance(value, dict):
        # copy-then-clear keeps dict subclasses (and a defaultdict factory) intact
        out = {} if type(value) is dict else copy.copy(value)
        out.clear()
        for k, v in value.items():
            if not _is_key(k):
                raise UnserializableStateError(
                    f"unsupported dict key type {type(k).__name__}", path=path
                )
            out[k] = _clone(v, f"{path}.{k}", active)
        return out

    if isinstance(value, list):
        items = [_clone(v, f"{path}[{i}]", active) for i, v in enumerate(value)]
        if type(value) is list:
            return items
        dup = copy.copy(value)
        dup[:] = items
        return dup

    if isinstance(value, tuple):
        members = [_clone(v, f"{path}[{i}]", active) for i, v in enumerate(value)]
        if type(value) is tuple:
            return tuple(members)
        if hasattr(value, "_fields"):  # named tuple
            return type(value)(*members)
        return type(value)(members)

    if isinstance(value, set):
        members = [_clone(v, f"{path}{{}}", active) for v in value]
        if type(value) is set:
            return set(members)
        dup = copy.copy(value)
        dup.clear()
        dup.update(members)
        return dup

    if isinstance(value, frozenset):
        members = [_clone(v, f"{path}{{}}", active) for v in value]
        return type(value)(members)

    raise UnserializableStateError(f"unsupported value of type {type(value).__name__}", path=path)


__all__ = ["clone_state", "is_atom"]
