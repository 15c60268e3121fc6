from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from namewire.defaults import INJECT_ATTR
from namewire.exceptions import NamewireInvalidRegistrationError

C = TypeVar("C", bound=Callable[..., Any])


def validate_names(names: Iterable[object]) -> tuple[str, ...]:
    """Return ``names`` as a tuple, rejecting anything but non-empty strings."""
    if isinstance(names, str):
        msg = f"Dependency names must be given as a sequence of strings, not the string {names!r}"
        raise NamewireInvalidRegistrationError(msg)

    validated: list[str] = []
    for name in names:
        if not isinstance(name, str) or not name:
            msg = f"Dependency names must be non-empty strings, got {name!r}"
            raise NamewireInvalidRegistrationError(msg)
        validated.append(name)
    return tuple(validated)


def inject(*names: str) -> Callable[[C], C]:
    """Attach an explicit, ordered dependency list to a callable.

    The list is authoritative: the leading positional parameters receive the
    named services in order, every remaining parameter is supplied by the
    caller. Use it whenever parameter names do not follow the ``_name`` /
    ``name_`` convention or may be rewritten by tooling.

    Examples:
        .. code-block:: python

            @inject("$window", "greeter")
            def controller(self, window, greeter, name): ...

    """
    validated = validate_names(names)

    def decorator(callable_obj: C) -> C:
        setattr(callable_obj, INJECT_ATTR, validated)
        return callable_obj

    return decorator


def explicit_dependencies(callable_obj: object) -> tuple[str, ...] | None:
    """Return the dependency list attached by ``inject``, or ``None``.

    A class only counts its own list: subclasses define their own
    constructor and do not inherit the list of an annotated base.
    """
    if isinstance(callable_obj, type):
        names = vars(callable_obj).get(INJECT_ATTR)
    else:
        names = getattr(callable_obj, INJECT_ATTR, None)
    if names is None:
        return None
    return validate_names(names)
