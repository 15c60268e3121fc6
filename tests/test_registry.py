"""Tests for service registration."""

import pytest

from namewire.exceptions import NamewireInvalidRegistrationError
from namewire.registry import Registration, Registry


class TestRegister:
    def test_register_stores_registration(self, registry: Registry) -> None:
        def factory() -> object:
            return object()

        registration = registry.register("service", factory)

        assert registry.lookup("service") == registration
        assert registration == Registration(name="service", factory=factory)
        assert not registration.eager
        assert "service" in registry
        assert len(registry) == 1

    def test_lookup_missing_returns_none(self, registry: Registry) -> None:
        assert registry.lookup("doesNotExist") is None

    def test_last_registration_wins(self, registry: Registry) -> None:
        registry.register("service", lambda: "first")
        registry.register("service", lambda: "second")

        registration = registry.lookup("service")
        assert registration is not None
        assert registration.factory() == "second"
        assert len(registry) == 1

    def test_register_does_not_inspect_factory(self, registry: Registry) -> None:
        def factory(missing_):
            raise AssertionError("must not be called at registration time")

        registry.register("service", factory)

        assert "service" in registry

    def test_explicit_inject_is_stored_as_tuple(self, registry: Registry) -> None:
        registration = registry.register("service", lambda a, b: (a, b), inject=["a", "b"])

        assert registration.inject == ("a", "b")

    @pytest.mark.parametrize("name", ["", None, 42])
    def test_invalid_name_raises(self, registry: Registry, name: object) -> None:
        with pytest.raises(NamewireInvalidRegistrationError):
            registry.register(name, lambda: None)  # type: ignore[arg-type]

    def test_non_callable_factory_raises(self, registry: Registry) -> None:
        with pytest.raises(NamewireInvalidRegistrationError):
            registry.register("service", "not callable")  # type: ignore[arg-type]

    def test_string_inject_list_raises(self, registry: Registry) -> None:
        with pytest.raises(NamewireInvalidRegistrationError):
            registry.register("service", lambda a: a, inject="a")


class TestValueAndProvides:
    def test_value_registers_constant(self, registry: Registry) -> None:
        config = {"debug": True}
        registry.value("config", config)

        registration = registry.lookup("config")
        assert registration is not None
        assert registration.factory() is config
        assert registration.inject == ()

    def test_provides_infers_name_from_factory(self, registry: Registry) -> None:
        @registry.provides()
        def make_clock() -> str:
            return "clock"

        assert "clock" in registry
        assert make_clock() == "clock"

    def test_provides_with_explicit_name_and_eager(self, registry: Registry) -> None:
        @registry.provides("$timer", eager=True)
        def timer() -> str:
            return "timer"

        registration = registry.lookup("$timer")
        assert registration is not None
        assert registration.eager

    def test_eager_registrations_in_registration_order(self, registry: Registry) -> None:
        registry.register("b", lambda: "b", eager=True)
        registry.register("lazy", lambda: "lazy")
        registry.register("a", lambda: "a", eager=True)

        assert [r.name for r in registry.eager_registrations()] == ["b", "a"]
        assert [r.name for r in registry] == ["b", "lazy", "a"]
