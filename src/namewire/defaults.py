from namewire.lock_mode import LockMode
from namewire.policies import ChildCachePolicy

INJECT_ATTR = "__inject__"
"""Attribute holding an explicit, ordered dependency-name list on a callable."""

BUILTIN_PREFIX = "$"
"""Reserved prefix of built-in service names such as ``$injector``."""

PARAMETER_PREFIX_MARKER = "_"
"""Leading parameter marker standing in for ``$`` (``_window`` injects ``$window``)."""

PARAMETER_SUFFIX_MARKER = "_"
"""Trailing parameter marker (``greeter_`` injects ``greeter``)."""

INJECTOR_SERVICE_NAME = f"{BUILTIN_PREFIX}injector"
SCOPE_SERVICE_NAME = f"{BUILTIN_PREFIX}scope"
ROOT_SCOPE_SERVICE_NAME = f"{BUILTIN_PREFIX}rootScope"

DEFAULT_LOCK_MODE = LockMode.THREAD
DEFAULT_CHILD_CACHE_POLICY = ChildCachePolicy.SHARED
