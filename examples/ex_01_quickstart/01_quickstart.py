"""Quickstart: services wired by parameter name.

Register factories under names, let parameter names say what they need
(``greeter_`` asks for ``greeter``, ``_window`` for the built-in ``$window``)
and resolve only the top-level service.
"""

from __future__ import annotations

from namewire import Injector, Registry, inject


class Window:
    def __init__(self) -> None:
        self.title = "main"


class Greeter:
    def __init__(self, _window: Window) -> None:
        self.window = _window

    def greet(self, name: str) -> str:
        return f"Hello, {name} from {self.window.title}"


@inject("greeter")
def welcome(service: Greeter, name: str) -> str:
    return service.greet(name)


def main() -> None:
    registry = Registry()
    registry.register("$window", Window)
    registry.register("greeter", Greeter)

    injector = Injector(registry)
    greeter = injector.resolve("greeter")

    print(greeter.greet("Ada"))  # => Hello, Ada from main
    print(f"same_instance={injector.resolve('greeter') is greeter}")  # => same_instance=True
    print(injector.invoke(welcome, None, "Alexandria"))  # => Hello, Alexandria from main
    print(f"dependencies={list(injector.annotate(Greeter))}")  # => dependencies=['$window']


if __name__ == "__main__":
    main()
