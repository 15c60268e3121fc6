from __future__ import annotations

import importlib
import warnings
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from namewire.registry import Registry

_PYDANTIC_V1_WARNING_PATTERN = (
    r"Core Pydantic V1 functionality isn't compatible with Python 3\.14 or greater\."
)


def _load_pydantic_settings_base() -> type[Any] | None:
    return _load_base_settings("pydantic_settings")


def _load_pydantic_v1_base() -> type[Any] | None:
    with warnings.catch_warnings():
        warnings.filterwarnings(
            "ignore",
            message=_PYDANTIC_V1_WARNING_PATTERN,
            category=UserWarning,
        )
        return _load_base_settings("pydantic.v1")


def _load_base_settings(module_name: str) -> type[Any] | None:
    try:
        module = importlib.import_module(module_name)
    except ImportError:
        return None
    base_settings = getattr(module, "BaseSettings", None)
    if isinstance(base_settings, type):
        return base_settings
    return None


def _build_settings_bases() -> tuple[type[Any], ...]:
    seen_ids: set[int] = set()
    bases: list[type[Any]] = []

    for candidate in (_load_pydantic_settings_base(), _load_pydantic_v1_base()):
        if candidate is None:
            continue
        candidate_id = id(candidate)
        if candidate_id in seen_ids:
            continue
        seen_ids.add(candidate_id)
        bases.append(candidate)

    return tuple(bases)


SETTINGS_BASES: tuple[type[Any], ...] = _build_settings_bases()


def is_pydantic_settings_subclass(candidate: object) -> bool:
    """Return whether a factory is a supported Pydantic settings model.

    Settings models are constructed from the environment, so the registry
    gives them an empty explicit dependency list: their underscore-prefixed
    keywords (``_env_file``, ``_case_sensitive``) must never be read as
    ``$``-service injections. If Pydantic is not installed, this function
    returns ``False`` for every candidate.

    Args:
        candidate: Object to test.

    Returns:
        ``True`` when ``candidate`` is a class and subclasses any discovered
        settings base; otherwise ``False``.

    """
    if not isinstance(candidate, type):
        return False
    try:
        return any(issubclass(candidate, base) for base in SETTINGS_BASES)
    except TypeError:
        return False


def register_settings(
    registry: Registry,
    name: str,
    settings_cls: type[Any],
    *,
    eager: bool = True,
) -> None:
    """Register a settings model as a service, loaded when the injector starts.

    Eager by default so that invalid environment configuration fails at
    startup instead of on first use.
    """
    registry.register(name, settings_cls, inject=(), eager=eager)


__all__ = [
    "SETTINGS_BASES",
    "is_pydantic_settings_subclass",
    "register_settings",
]
