from __future__ import annotations

from collections.abc import Sequence


class NamewireError(Exception):
    """Represent a base class for all namewire-specific failures.

    Catch this type when you want to handle any namewire error path without
    matching each concrete exception class individually.
    """


class NamewireInvalidRegistrationError(NamewireError):
    """Signal invalid registration or annotation input.

    Raised by ``Registry.register``, ``Registry.provides`` and ``inject`` when
    the service name is empty or not a string, when the factory is not
    callable, or when an explicit dependency list contains non-string entries.
    """


class NamewireInvalidAnnotationError(NamewireInvalidRegistrationError):
    """Signal an explicit dependency list that does not fit its callable.

    Raised while inspecting a callable whose explicit list names more
    dependencies than the callable has positional parameters and which does
    not accept ``*args``.

    Typical fix is shortening the list passed to ``inject(...)`` or
    ``register(..., inject=...)`` so it matches the leading parameters.
    """

    def __init__(self, callable_obj: object, names: Sequence[str], capacity: int) -> None:
        self.callable_obj = callable_obj
        self.names = tuple(names)
        self.capacity = capacity
        super().__init__(
            f"Explicit dependency list {list(self.names)!r} names {len(self.names)} "
            f"dependencies but {callable_obj!r} accepts only {capacity} positional arguments",
        )


class NamewireUnknownServiceError(NamewireError):
    """Signal that a service name has no registration on the resolution chain.

    Raised by ``Injector.resolve``, ``Injector.invoke`` and ``Scope.new`` when
    neither the injector's registry nor any ancestor registry knows the name.
    Nothing is cached for the missing name.

    Typical fixes include registering the service, checking the spelling of
    the parameter name (``foo_`` injects ``foo``), or decorating the callable
    with an explicit ``inject(...)`` list.
    """

    def __init__(self, name: str, requested_by: Sequence[str] = ()) -> None:
        self.name = name
        self.requested_by = tuple(requested_by)
        message = f"Service {name!r} is not registered"
        if self.requested_by:
            chain = " -> ".join((*self.requested_by, name))
            message = f"{message} (requested via {chain})"
        super().__init__(message)


class NamewireCircularDependencyError(NamewireError):
    """Signal that resolving a service re-entered a name already in progress.

    Raised by ``Injector.resolve`` with the discovered ``cycle``: the names
    from the first occurrence of the repeated service through the repeated
    service itself. The partially constructed services are not cached.

    Typical fix is breaking the cycle by resolving one side lazily, e.g.
    injecting ``$injector`` and calling ``resolve`` when the value is needed.
    """

    def __init__(self, cycle: Sequence[str]) -> None:
        self.cycle = tuple(cycle)
        super().__init__(f"Circular dependency detected: {' -> '.join(self.cycle)}")


class NamewireInvalidInvocationError(NamewireError):
    """Signal a receiver that cannot be bound to the invoked callable.

    Raised by ``Injector.invoke`` and ``Scope.new`` when ``this`` is given for
    a callable that is not a plain function (classes, bound methods and
    builtins already carry their own receiver).
    """

    def __init__(self, callable_obj: object) -> None:
        self.callable_obj = callable_obj
        super().__init__(f"Cannot bind a receiver to {callable_obj!r}; pass a plain function")


UnknownServiceError = NamewireUnknownServiceError
CircularDependencyError = NamewireCircularDependencyError
