from namewire.exceptions import (
    CircularDependencyError,
    NamewireCircularDependencyError,
    NamewireError,
    NamewireInvalidAnnotationError,
    NamewireInvalidInvocationError,
    NamewireInvalidRegistrationError,
    NamewireUnknownServiceError,
    UnknownServiceError,
)
from namewire.injection import CallableInspection, ParameterKind, ParameterSpec, SignatureInspector
from namewire.injector import Injector
from namewire.lock_mode import LockMode
from namewire.markers import inject
from namewire.policies import ChildCachePolicy
from namewire.registry import Registration, Registry
from namewire.scope import Scope, create_root_scope

__all__ = [
    "CallableInspection",
    "ChildCachePolicy",
    "CircularDependencyError",
    "Injector",
    "LockMode",
    "NamewireCircularDependencyError",
    "NamewireError",
    "NamewireInvalidAnnotationError",
    "NamewireInvalidInvocationError",
    "NamewireInvalidRegistrationError",
    "NamewireUnknownServiceError",
    "ParameterKind",
    "ParameterSpec",
    "Registration",
    "Registry",
    "Scope",
    "SignatureInspector",
    "UnknownServiceError",
    "create_root_scope",
    "inject",
]
