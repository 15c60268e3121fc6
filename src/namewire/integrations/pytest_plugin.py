from __future__ import annotations

import inspect
from collections.abc import Callable, Iterator
from contextlib import contextmanager, suppress
from typing import Any, cast

import pytest

from namewire.injection import CallableInspection, SignatureInspector
from namewire.injector import Injector
from namewire.markers import explicit_dependencies
from namewire.registry import Registry

_NAMEWIRE_INJECTOR_ATTR = "_namewire_injector"
_NAMEWIRE_INSPECTION_ATTR = "__namewire_pytest_inspection__"
_SIGNATURE_INSPECTOR = SignatureInspector()


@pytest.fixture()
def namewire_registry() -> Registry:
    """Create the per-test registry the plugin's injector is built from.

    Override this fixture in a test module or ``conftest.py`` to register the
    services your tests inject.

    Returns:
        A new, empty ``Registry``.

    """
    return Registry()


@pytest.fixture()
def namewire_injector(namewire_registry: Registry) -> Injector:
    """Create a per-test root injector over ``namewire_registry``.

    Eager registrations are built when the fixture is set up, so broken
    wiring fails during setup rather than inside the test body.
    """
    return Injector(namewire_registry)


@pytest.fixture(autouse=True)
def _namewire_state(
    request: pytest.FixtureRequest,
    namewire_injector: Injector,
) -> None:
    """Store plugin state on the test node for hook access."""
    node = cast("Any", request.node)
    setattr(node, _NAMEWIRE_INJECTOR_ATTR, namewire_injector)


def pytest_pycollect_makeitem(
    collector: Any,
    name: str,
    obj: object,
) -> Any | None:
    """Hide injected parameters from pytest fixture name matching.

    Only test functions carrying an explicit ``inject(...)`` list are
    rewritten; their leading injected parameters are removed from the
    signature pytest sees, so they are not looked up as fixtures.

    Args:
        collector: Pytest collector instance.
        name: Collected object name.
        obj: Candidate object.

    Returns:
        ``None`` to continue default collection flow.

    """
    if not callable(obj):
        return None
    if not collector.istestfunction(obj, name):
        return None
    if not explicit_dependencies(obj):
        return None
    if _NAMEWIRE_INSPECTION_ATTR in getattr(obj, "__dict__", {}):
        return None

    callable_obj = cast("Callable[..., Any]", obj)
    inspection = _SIGNATURE_INSPECTOR.inspect_callable(callable_obj)
    hidden = {spec.parameter for spec in inspection.injected}
    public_signature = inspection.signature.replace(
        parameters=[
            parameter
            for parameter in inspection.signature.parameters.values()
            if parameter.name not in hidden
        ],
    )

    obj_as_any = cast("Any", obj)
    obj_as_any.__dict__[_NAMEWIRE_INSPECTION_ATTR] = inspection
    obj_as_any.__signature__ = public_signature
    return None


@pytest.hookimpl(hookwrapper=True, tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> Iterator[None]:
    """Wrap test function execution to resolve injected parameters.

    The test callable is swapped for a wrapper that runs it through
    ``Injector.invoke`` with the fixtures pytest collected passed as keyword
    arguments. If the test has no injected parameters or no injector state
    is attached to the node, this hook is a no-op.

    Args:
        pyfuncitem: Collected pytest function item.

    Yields:
        Control back to pytest around test execution.

    """
    original_callable = cast("Callable[..., Any]", pyfuncitem.obj)
    inspection = cast(
        "CallableInspection | None",
        getattr(original_callable, _NAMEWIRE_INSPECTION_ATTR, None),
    )
    if inspection is None or not inspection.injected:
        yield
        return

    injector = cast("Injector | None", getattr(pyfuncitem, _NAMEWIRE_INJECTOR_ATTR, None))
    if injector is None:
        yield
        return

    def injected_test(**funcargs: Any) -> Any:
        with _original_signature(original_callable, inspection.signature):
            return injector.invoke(original_callable, None, **funcargs)

    pyfuncitem.obj = injected_test
    try:
        yield
    finally:
        pyfuncitem.obj = original_callable


@contextmanager
def _original_signature(
    callable_obj: Callable[..., Any],
    signature: inspect.Signature,
) -> Iterator[None]:
    callable_as_any = cast("Any", callable_obj)
    had_override = "__signature__" in callable_as_any.__dict__
    override = callable_as_any.__dict__.get("__signature__")
    callable_as_any.__signature__ = signature
    try:
        yield
    finally:
        if had_override:
            callable_as_any.__signature__ = override
        else:
            with suppress(AttributeError):
                del callable_as_any.__signature__
