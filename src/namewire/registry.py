from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from namewire.exceptions import NamewireInvalidRegistrationError
from namewire.integrations.pydantic_settings import is_pydantic_settings_subclass
from namewire.markers import validate_names

logger = logging.getLogger(__name__)

_FACTORY_NAME_PREFIX = "make_"


@dataclass(frozen=True, slots=True)
class Registration:
    """A named service: the factory that builds it and how it is loaded.

    Attributes:
        name: Unique service name within its registry.
        factory: Callable producing the service instance.
        inject: Explicit dependency list overriding the factory's own
            annotation and inference, or ``None``.
        eager: Whether injectors build the service at creation time.

    """

    name: str
    factory: Callable[..., Any]
    inject: tuple[str, ...] | None = None
    eager: bool = False


class Registry:
    """Name-to-factory mapping shared by the injectors built from it.

    Registration is pure storage: nothing is inspected or constructed until
    an injector resolves the name. Registering an existing name replaces the
    previous entry.
    """

    def __init__(self) -> None:
        self._registrations: dict[str, Registration] = {}
        self._lock = threading.Lock()

    def register(
        self,
        name: str,
        factory: Callable[..., Any],
        *,
        inject: Sequence[str] | None = None,
        eager: bool = False,
    ) -> Registration:
        """Register a factory under ``name``.

        Args:
            name: Non-empty service name. Names starting with ``$`` are the
                built-in namespace by convention.
            factory: Callable invoked with the resolved dependencies.
            inject: Explicit dependency list; takes precedence over the
                factory's ``inject(...)`` annotation and parameter names.
            eager: Build the service as soon as an injector is created.

        Raises:
            NamewireInvalidRegistrationError: If ``name`` is empty or not a
                string, ``factory`` is not callable, or ``inject`` contains
                anything but non-empty strings.

        """
        if not isinstance(name, str) or not name:
            msg = f"Service name must be a non-empty string, got {name!r}"
            raise NamewireInvalidRegistrationError(msg)
        if not callable(factory):
            msg = f"Factory for service {name!r} must be callable, got {factory!r}"
            raise NamewireInvalidRegistrationError(msg)

        explicit = validate_names(inject) if inject is not None else None
        if explicit is None and is_pydantic_settings_subclass(factory):
            explicit = ()

        registration = Registration(name=name, factory=factory, inject=explicit, eager=eager)
        with self._lock:
            if name in self._registrations:
                logger.debug("Overwriting registration of service %r", name)
            self._registrations[name] = registration
        return registration

    def value(self, name: str, value: Any) -> Registration:
        """Register a ready-made value under ``name``."""
        return self.register(name, lambda: value, inject=())

    def provides(
        self,
        name: str | None = None,
        *,
        inject: Sequence[str] | None = None,
        eager: bool = False,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Decorator registering a function or class as a service factory.

        The service name defaults to the factory's ``__name__`` with a
        ``make_`` prefix removed.

        Example:
            @registry.provides(eager=True)
            def make_clock(_window):
                return Clock(_window)

        """

        def decorator(factory: Callable[..., Any]) -> Callable[..., Any]:
            self.register(
                name or _infer_name_from(factory),
                factory,
                inject=inject,
                eager=eager,
            )
            return factory

        return decorator

    def lookup(self, name: str) -> Registration | None:
        return self._registrations.get(name)

    def eager_registrations(self) -> list[Registration]:
        """Eager registrations in registration order."""
        with self._lock:
            return [registration for registration in self._registrations.values() if registration.eager]

    def __contains__(self, name: object) -> bool:
        return name in self._registrations

    def __iter__(self) -> Iterator[Registration]:
        with self._lock:
            registrations = list(self._registrations.values())
        return iter(registrations)

    def __len__(self) -> int:
        return len(self._registrations)

    def __repr__(self) -> str:
        return f"Registry({sorted(self._registrations)!r})"


def _infer_name_from(factory: Callable[..., Any]) -> str:
    name = getattr(factory, "__name__", None)
    if not name:
        msg = f"Cannot infer a service name from {factory!r}; pass name explicitly"
        raise NamewireInvalidRegistrationError(msg)
    if name.startswith(_FACTORY_NAME_PREFIX) and len(name) > len(_FACTORY_NAME_PREFIX):
        return name[len(_FACTORY_NAME_PREFIX) :]
    return name
