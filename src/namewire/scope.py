from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping
from typing import TYPE_CHECKING, Any

from namewire.defaults import ROOT_SCOPE_SERVICE_NAME, SCOPE_SERVICE_NAME
from namewire.injector import Injector
from namewire.policies import ChildCachePolicy
from namewire.registry import Registry

if TYPE_CHECKING:
    from typing_extensions import Self


class Scope:
    """A node in a tree of application objects fed by an injector.

    Attribute reads that miss on a scope fall through to its parent scope;
    assignments always land on the scope itself and shadow the parent's
    value. The parent reference is used for lookups only: a scope owns
    neither its parent nor the services cached by its injector.

    ``$scope`` and ``$rootScope`` resolve to the scope itself and to the root
    of its chain when requested through the scope.

    ``injector``, ``parent`` and ``root`` are read-only structural attributes
    and cannot be assigned; application data needs other names.
    """

    def __init__(self, injector: Injector, *, parent: Scope | None = None) -> None:
        self._injector = injector
        self._parent = parent

    @property
    def injector(self) -> Injector:
        return self._injector

    @property
    def parent(self) -> Scope | None:
        return self._parent

    @property
    def root(self) -> Scope:
        scope = self
        while scope._parent is not None:
            scope = scope._parent
        return scope

    def ancestors(self) -> Iterator[Scope]:
        """Yield the parent, grandparent and so on up to the root."""
        scope = self._parent
        while scope is not None:
            yield scope
            scope = scope._parent

    def resolve(self, name: str) -> Any:
        if name == SCOPE_SERVICE_NAME:
            return self
        if name == ROOT_SCOPE_SERVICE_NAME:
            return self.root
        return self._injector.resolve(name)

    def has(self, name: str) -> bool:
        return name in (SCOPE_SERVICE_NAME, ROOT_SCOPE_SERVICE_NAME) or self._injector.has(name)

    def invoke(
        self,
        fn: Callable[..., Any],
        this: Any = None,
        /,
        *args: Any,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> Any:
        """Call ``fn`` through this scope's injector; see ``Injector.invoke``."""
        return self._injector.invoke(
            fn,
            this,
            *args,
            overrides={**self._builtins(), **(overrides or {})},
            **kwargs,
        )

    def new(
        self,
        constructor: Callable[..., Any] | None = None,
        /,
        *args: Any,
        **kwargs: Any,
    ) -> Self:
        """Create a child scope and run ``constructor`` on it.

        ``constructor`` is a plain function whose first parameter receives
        the new scope; its injected parameters come from this scope's
        injector (or from an isolated child injector under
        ``ChildCachePolicy.PRIVATE``) and ``args`` fill its free parameters.
        Classes, bound methods and other callables cannot take the new scope
        as their receiver and raise ``NamewireInvalidInvocationError``; wrap
        them in a function when a class should populate the scope.

        Example:
            def greeting(self, greeter_, name):
                self.message = greeter_.greet(name)

            child = root.new(greeting, "Alexandria")

        Returns:
            The new scope. The caller owns it; discarding it leaves cached
            services of a shared injector untouched.

        """
        injector = self._injector
        if injector.child_cache_policy is ChildCachePolicy.PRIVATE:
            injector = injector.create_child(isolated=True)

        child = type(self)(injector, parent=self)
        if constructor is not None:
            child.invoke(constructor, child, *args, **kwargs)
        return child

    def _builtins(self) -> dict[str, Any]:
        return {SCOPE_SERVICE_NAME: self, ROOT_SCOPE_SERVICE_NAME: self.root}

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails on this scope.
        if name.startswith("__"):
            raise AttributeError(name)
        parent = self.__dict__.get("_parent")
        if parent is None:
            msg = f"{type(self).__name__!r} object has no attribute {name!r}"
            raise AttributeError(msg)
        return getattr(parent, name)

    def __repr__(self) -> str:
        return f"Scope(depth={sum(1 for _ in self.ancestors())}, injector={self._injector!r})"


def create_root_scope(registry: Registry, **injector_options: Any) -> tuple[Scope, Injector]:
    """Create a fresh injector for ``registry`` and the root scope holding it.

    The injector starts with an empty cache and no parent; eager services
    are built before this function returns.

    Args:
        registry: Registrations the root injector resolves.
        **injector_options: Keyword options forwarded to ``Injector``
            (``lock_mode``, ``child_cache_policy``, ``inspector``).

    """
    injector = Injector(registry, **injector_options)
    return Scope(injector), injector
