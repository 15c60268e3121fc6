from enum import Enum


class ChildCachePolicy(str, Enum):
    """Policy for the injector a child scope resolves its dependencies with."""

    SHARED = "shared"
    """Child scopes reuse the creating scope's injector and its cache chain."""

    PRIVATE = "private"
    """Every child scope gets an isolated child injector.

    The child builds every service it resolves, including those registered
    on ancestor registries, and caches them in its own cache.
    """
