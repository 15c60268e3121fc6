from __future__ import annotations

import inspect
import logging
import threading
import types
from collections.abc import Callable, Mapping
from contextlib import AbstractContextManager, nullcontext
from typing import TYPE_CHECKING, Any, TypeVar

from namewire import resolution_stack
from namewire.defaults import DEFAULT_CHILD_CACHE_POLICY, DEFAULT_LOCK_MODE, INJECTOR_SERVICE_NAME
from namewire.exceptions import (
    NamewireCircularDependencyError,
    NamewireInvalidInvocationError,
    NamewireUnknownServiceError,
)
from namewire.injection import SignatureInspector
from namewire.lock_mode import LockMode
from namewire.policies import ChildCachePolicy
from namewire.registry import Registration, Registry

if TYPE_CHECKING:
    from collections.abc import Sequence

T = TypeVar("T")

logger = logging.getLogger(__name__)


class Injector:
    """Resolve named services from a registry and call functions with them.

    Every service is built at most once per injector and cached (singleton
    per injector, never shared between injectors). Names missing from the
    injector's own registry are resolved through the parent injector, whose
    cache then owns the instance. An isolated injector instead builds
    ancestor registrations itself and keeps them in its own cache.
    """

    __slots__ = (
        "_cache",
        "_child_cache_policy",
        "_inspector",
        "_isolated",
        "_lock",
        "_lock_mode",
        "_parent",
        "_registry",
    )

    def __init__(
        self,
        registry: Registry,
        *,
        parent: Injector | None = None,
        lock_mode: LockMode = DEFAULT_LOCK_MODE,
        child_cache_policy: ChildCachePolicy = DEFAULT_CHILD_CACHE_POLICY,
        inspector: SignatureInspector | None = None,
        isolated: bool = False,
    ) -> None:
        """Create an injector and build its eager services.

        Args:
            registry: Registrations this injector owns the instances of.
            parent: Injector consulted for names missing from ``registry``.
            isolated: Build registrations found on ``parent``'s chain with
                this injector and cache them here instead of in the parent.
            lock_mode: ``LockMode.THREAD`` to make first construction
                thread-safe, ``LockMode.NONE`` for single-threaded use.
            child_cache_policy: Whether scopes created with ``Scope.new`` share
                this injector or get a child injector each.
            inspector: Signature inspector; a default one when omitted.

        Raises:
            NamewireUnknownServiceError: If an eager service depends on an
                unregistered name.
            NamewireCircularDependencyError: If an eager service is part of a
                dependency cycle.

        """
        self._registry = registry
        self._parent = parent
        self._lock_mode = LockMode(lock_mode)
        self._child_cache_policy = ChildCachePolicy(child_cache_policy)
        self._inspector = inspector or SignatureInspector()
        self._isolated = isolated and parent is not None
        self._cache: dict[str, Any] = {}
        self._lock: AbstractContextManager[Any] = (
            threading.RLock() if self._lock_mode is LockMode.THREAD else nullcontext()
        )

        self._instantiate_eager()

    @property
    def registry(self) -> Registry:
        return self._registry

    @property
    def parent(self) -> Injector | None:
        return self._parent

    @property
    def lock_mode(self) -> LockMode:
        return self._lock_mode

    @property
    def child_cache_policy(self) -> ChildCachePolicy:
        return self._child_cache_policy

    @property
    def inspector(self) -> SignatureInspector:
        return self._inspector

    @property
    def isolated(self) -> bool:
        return self._isolated

    def lookup(self, name: str) -> Registration | None:
        """Return the registration for ``name`` from this injector or the nearest ancestor."""
        injector: Injector | None = self
        while injector is not None:
            registration = injector._registry.lookup(name)
            if registration is not None:
                return registration
            injector = injector._parent
        return None

    def resolve(self, name: str) -> Any:
        """Return the instance of service ``name``, building it on first use.

        Raises:
            NamewireUnknownServiceError: If no injector on the chain has a
                registration for ``name``.
            NamewireCircularDependencyError: If building ``name`` requires
                ``name`` itself.

        Any exception raised by the factory propagates unchanged and nothing
        is cached, so the next ``resolve`` call retries the construction.

        """
        if name == INJECTOR_SERVICE_NAME:
            return self

        # Fast path: the cache is only ever written, so a hit needs no lock.
        if name in self._cache:
            return self._cache[name]

        registration = self._registry.lookup(name)
        if registration is None and self._parent is not None:
            if not self._isolated:
                return self._parent.resolve(name)
            registration = self._parent.lookup(name)
        if registration is None:
            raise NamewireUnknownServiceError(name, resolution_stack.requested_names())

        cycle = resolution_stack.find_cycle(self, name)
        if cycle is not None:
            raise NamewireCircularDependencyError(cycle)

        with self._lock:
            # Double-check: another thread may have built it while we waited.
            if name in self._cache:
                return self._cache[name]

            token = resolution_stack.push(self, name)
            try:
                instance = self._construct(registration)
            finally:
                resolution_stack.pop(token)

            self._cache[name] = instance
            return instance

    def invoke(
        self,
        fn: Callable[..., T],
        this: Any = None,
        /,
        *args: Any,
        overrides: Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> T:
        """Call ``fn`` with its dependencies injected and ``args`` curried in.

        Injected parameters are filled first, in declaration order; ``args``
        then fill the remaining positional slots and ``kwargs`` are passed
        through. The result is returned as is and never cached.

        Args:
            fn: Function, class or other callable.
            this: Receiver to bind ``fn`` to; ``fn`` must then be a plain
                function whose first parameter takes the receiver.
            *args: Caller-supplied positional arguments.
            overrides: Values to use instead of resolving the named
                dependencies, keyed by dependency name.
            **kwargs: Caller-supplied keyword arguments; they take precedence
                over injected keyword-only parameters of the same name.

        Raises:
            NamewireInvalidInvocationError: If ``this`` is given for a callable
                that cannot be bound.

        """
        target = self._bind(fn, this)
        return self._call(target, args, kwargs, inject=None, overrides=overrides)

    def instantiate(self, cls: Callable[..., T], /, *args: Any, **kwargs: Any) -> T:
        """Construct ``cls`` with injected constructor parameters."""
        return self.invoke(cls, None, *args, **kwargs)

    def annotate(self, fn: Callable[..., Any]) -> tuple[str, ...]:
        """Return the dependency names ``invoke`` would resolve for ``fn``."""
        return self._inspector.annotate(fn)

    def has(self, name: str) -> bool:
        """Return whether ``name`` can be resolved by this injector or an ancestor."""
        if name == INJECTOR_SERVICE_NAME or name in self._cache or name in self._registry:
            return True
        return self._parent is not None and self._parent.has(name)

    def is_resolved(self, name: str) -> bool:
        """Return whether this injector's own cache holds ``name``."""
        return name in self._cache

    def create_child(self, registry: Registry | None = None, *, isolated: bool = False) -> Injector:
        """Create an injector with its own cache that falls back to this one.

        Args:
            registry: Registrations owned by the child; an empty registry when
                omitted, so every name resolves through this injector.
            isolated: Let the child build and cache this injector's
                registrations itself rather than reuse this injector's
                instances.

        """
        return Injector(
            Registry() if registry is None else registry,
            parent=self,
            lock_mode=self._lock_mode,
            child_cache_policy=self._child_cache_policy,
            inspector=self._inspector,
            isolated=isolated,
        )

    def _instantiate_eager(self) -> None:
        eager = self._registry.eager_registrations()
        if not eager:
            return

        logger.info(
            "Instantiating %d eager service(s): %s",
            len(eager),
            ", ".join(registration.name for registration in eager),
        )
        for registration in eager:
            self.resolve(registration.name)

    def _construct(self, registration: Registration) -> Any:
        logger.debug("Constructing service %r with %r", registration.name, registration.factory)
        return self._call(
            registration.factory,
            (),
            {},
            inject=registration.inject,
            overrides=None,
        )

    def _call(
        self,
        fn: Callable[..., T],
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        *,
        inject: Sequence[str] | None,
        overrides: Mapping[str, Any] | None,
    ) -> T:
        inspection = self._inspector.inspect_callable(fn, inject=inject)

        positional: list[Any] = []
        keywords: dict[str, Any] = {}
        for spec in inspection.injected:
            if spec.keyword_only:
                if spec.parameter in kwargs:
                    continue
                keywords[spec.parameter] = self._dependency(spec.name, overrides)  # type: ignore[index]
            else:
                positional.append(self._dependency(spec.name, overrides))

        return fn(*positional, *args, **keywords, **kwargs)

    def _dependency(self, name: str, overrides: Mapping[str, Any] | None) -> Any:
        if overrides is not None and name in overrides:
            return overrides[name]
        return self.resolve(name)

    def _bind(self, fn: Callable[..., T], this: Any) -> Callable[..., T]:
        if this is None:
            return fn
        if inspect.isfunction(fn):
            return types.MethodType(fn, this)
        raise NamewireInvalidInvocationError(fn)

    def __repr__(self) -> str:
        return f"Injector(registry={self._registry!r}, parent={self._parent!r})"
