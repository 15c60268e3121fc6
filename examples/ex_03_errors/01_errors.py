"""Errors: unknown services, cycles and factories that fail.

Failed constructions are never cached, so the next resolve tries again.
"""

from __future__ import annotations

from namewire import (
    CircularDependencyError,
    Injector,
    Registry,
    UnknownServiceError,
)


def main() -> None:
    registry = Registry()
    registry.register("a", lambda b_: b_)
    registry.register("b", lambda a_: a_)
    registry.register("app", lambda store_: store_)

    attempts: list[int] = []

    def flaky() -> str:
        attempts.append(1)
        if len(attempts) == 1:
            msg = "not yet"
            raise ConnectionError(msg)
        return "connected"

    registry.register("db", flaky)
    injector = Injector(registry)

    try:
        injector.resolve("app")
    except UnknownServiceError as error:
        print(error)  # => Service 'store' is not registered (requested via app -> store)

    try:
        injector.resolve("a")
    except CircularDependencyError as error:
        print(error)  # => Circular dependency detected: a -> b -> a

    try:
        injector.resolve("db")
    except ConnectionError as error:
        print(f"first={error}")  # => first=not yet
    print(f"second={injector.resolve('db')}")  # => second=connected


if __name__ == "__main__":
    main()
