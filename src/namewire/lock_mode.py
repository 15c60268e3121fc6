from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for cached service resolution.

    Pass one of these values as ``Injector(..., lock_mode=...)``. Child
    injectors inherit the mode of their parent.
    """

    THREAD = "thread"
    """Guard the cache and first construction with a ``threading.RLock``."""

    NONE = "none"
    """Disable locking for single-threaded, cooperative use."""
