from __future__ import annotations

from contextvars import ContextVar
from typing import Any

# Names currently being constructed, paired with the injector doing the work.
# A ContextVar keeps concurrent threads and tasks from seeing each other's
# in-progress resolutions.
_resolution_stack: ContextVar[tuple[tuple[Any, str], ...]] = ContextVar(
    "namewire_resolution_stack",
    default=(),
)


def get_resolution_stack() -> tuple[tuple[Any, str], ...]:
    """Return the ``(injector, name)`` pairs being resolved in this context."""
    return _resolution_stack.get()


def find_cycle(injector: Any, name: str) -> tuple[str, ...] | None:
    """Return the cycle closed by resolving ``name`` on ``injector``, if any."""
    stack = _resolution_stack.get()
    for index, (owner, in_progress) in enumerate(stack):
        if owner is injector and in_progress == name:
            return (*(entry_name for _, entry_name in stack[index:]), name)
    return None


def requested_names() -> tuple[str, ...]:
    """Return the chain of service names that led to the current resolution."""
    return tuple(name for _, name in _resolution_stack.get())


def push(injector: Any, name: str) -> Any:
    """Mark ``name`` as in progress; returns a token for ``pop``."""
    return _resolution_stack.set((*_resolution_stack.get(), (injector, name)))


def pop(token: Any) -> None:
    _resolution_stack.reset(token)
