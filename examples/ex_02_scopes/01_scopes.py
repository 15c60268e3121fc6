"""Scopes: a tree of objects that share one injector.

``Scope.new`` runs a constructor function on a fresh child scope. Attribute
reads fall through to the parent scope, writes stay local.
"""

from __future__ import annotations

from namewire import Registry, Scope, create_root_scope


def make_counter() -> list[int]:
    return []


def page(self: Scope, counter_: list[int], title: str) -> None:
    counter_.append(1)
    self.title = title


def main() -> None:
    registry = Registry()
    registry.register("counter", make_counter)

    root, injector = create_root_scope(registry)
    root.theme = "dark"

    home = root.new(page, "Home")
    about = home.new(page, "About")

    print(f"home={home.title} about={about.title}")  # => home=Home about=About
    print(f"inherited_theme={about.theme}")  # => inherited_theme=dark
    print(f"counter={injector.resolve('counter')}")  # => counter=[1, 1]
    print(f"root_of_about_is_root={about.root is root}")  # => root_of_about_is_root=True


if __name__ == "__main__":
    main()
