"""Tests for custom exception hierarchy."""

import pytest

from namewire import CircularDependencyError, UnknownServiceError
from namewire.exceptions import (
    NamewireCircularDependencyError,
    NamewireError,
    NamewireInvalidAnnotationError,
    NamewireInvalidInvocationError,
    NamewireInvalidRegistrationError,
    NamewireUnknownServiceError,
)
from namewire.injector import Injector
from namewire.registry import Registry


class TestNamewireUnknownServiceError:
    def test_message_without_chain(self) -> None:
        exc = NamewireUnknownServiceError("doesNotExist")

        assert exc.name == "doesNotExist"
        assert exc.requested_by == ()
        assert str(exc) == "Service 'doesNotExist' is not registered"

    def test_message_with_chain(self) -> None:
        exc = NamewireUnknownServiceError("store", ["app", "router"])

        assert "requested via app -> router -> store" in str(exc)


class TestNamewireCircularDependencyError:
    def test_message_lists_cycle(self) -> None:
        exc = NamewireCircularDependencyError(["A", "B", "A"])

        assert exc.cycle == ("A", "B", "A")
        assert str(exc) == "Circular dependency detected: A -> B -> A"


class TestNamewireInvalidAnnotationError:
    def test_attributes(self) -> None:
        def factory(a):
            return a

        exc = NamewireInvalidAnnotationError(factory, ["a", "b"], 1)

        assert exc.callable_obj is factory
        assert exc.names == ("a", "b")
        assert "accepts only 1 positional arguments" in str(exc)


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc",
        [
            NamewireUnknownServiceError("x"),
            NamewireCircularDependencyError(["x", "x"]),
            NamewireInvalidAnnotationError(print, ["x"], 0),
            NamewireInvalidInvocationError(print),
            NamewireInvalidRegistrationError("bad"),
        ],
    )
    def test_all_errors_are_namewire_errors(self, exc: Exception) -> None:
        assert isinstance(exc, NamewireError)
        assert isinstance(exc, Exception)

    def test_annotation_error_is_registration_error(self) -> None:
        assert issubclass(NamewireInvalidAnnotationError, NamewireInvalidRegistrationError)

    def test_short_aliases(self) -> None:
        assert UnknownServiceError is NamewireUnknownServiceError
        assert CircularDependencyError is NamewireCircularDependencyError

    def test_can_catch_all_with_namewire_error(self) -> None:
        registry = Registry()
        registry.register("A", lambda A_: A_)  # noqa: N803
        injector = Injector(registry)

        with pytest.raises(NamewireError):
            injector.resolve("missing")

        with pytest.raises(NamewireError):
            injector.resolve("A")

    def test_factory_errors_propagate_unwrapped(self) -> None:
        class CustomError(Exception):
            pass

        def factory() -> None:
            raise CustomError

        registry = Registry()
        registry.register("service", factory)

        with pytest.raises(CustomError):
            Injector(registry).resolve("service")
