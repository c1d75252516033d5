"""Core package initializer for Statecraft.

Re-exports nothing on purpose; import from the submodules directly:
    from statecraft.core.settings import settings, load_settings, Settings, get_logger
    from statecraft.core.snapshot.store import SnapshotStore
    from statecraft.core.machine.context import Context
"""

from __future__ import annotations

__all__ = ["__doc__"]
