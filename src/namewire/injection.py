from __future__ import annotations

import inspect
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from namewire.defaults import BUILTIN_PREFIX, PARAMETER_PREFIX_MARKER, PARAMETER_SUFFIX_MARKER
from namewire.exceptions import NamewireInvalidAnnotationError
from namewire.markers import explicit_dependencies, validate_names

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


class ParameterKind(str, Enum):
    """How a parameter of an inspected callable receives its value."""

    INJECTED = "injected"
    """Resolved from the injector by dependency name."""

    CURRIED = "curried"
    """Supplied by the caller of ``invoke``."""


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One parameter of an inspected callable.

    ``name`` is the dependency name for injected parameters and the formal
    parameter name for curried ones. ``parameter`` is ``None`` only for
    explicit dependencies absorbed by ``*args``.
    """

    name: str
    kind: ParameterKind
    parameter: str | None = None
    keyword_only: bool = False
    variadic: bool = False


@dataclass(frozen=True, slots=True)
class CallableInspection:
    """Injection metadata derived from a callable's explicit list or signature."""

    signature: inspect.Signature
    parameters: tuple[ParameterSpec, ...]
    explicit: bool

    @property
    def injected(self) -> tuple[ParameterSpec, ...]:
        return tuple(spec for spec in self.parameters if spec.kind is ParameterKind.INJECTED)

    @property
    def dependencies(self) -> tuple[str, ...]:
        """Injected dependency names in binding order."""
        return tuple(spec.name for spec in self.injected)

    @property
    def curried_count(self) -> int:
        """Number of free positional slots following the injected ones."""
        return sum(
            1
            for spec in self.parameters
            if spec.kind is ParameterKind.CURRIED and not spec.keyword_only and not spec.variadic
        )


@dataclass(slots=True)
class SignatureInspector:
    """Split a callable's parameters into injected and curried ones.

    An explicit dependency list always wins over naming-convention inference.
    Inference treats ``_name`` as the built-in ``$name`` and ``name_`` as
    ``name``; the first parameter matching neither rule switches every
    following parameter to curried, whatever its shape.
    """

    prefix_marker: str = PARAMETER_PREFIX_MARKER
    suffix_marker: str = PARAMETER_SUFFIX_MARKER
    builtin_prefix: str = BUILTIN_PREFIX

    def inspect_callable(
        self,
        callable_obj: Callable[..., Any],
        *,
        inject: Sequence[str] | None = None,
    ) -> CallableInspection:
        """Build injection metadata for ``callable_obj``.

        Args:
            callable_obj: Function, bound method, class or other callable.
            inject: Registration-level explicit list; overrides any list
                attached to the callable.

        Raises:
            NamewireInvalidAnnotationError: If the explicit list is longer
                than the callable's positional parameters and it takes no
                ``*args``.

        """
        signature = self.signature_of(callable_obj)
        names = validate_names(inject) if inject is not None else explicit_dependencies(callable_obj)
        if names is not None:
            parameters = self._explicit_parameters(callable_obj, signature, names)
            return CallableInspection(signature=signature, parameters=parameters, explicit=True)

        return CallableInspection(
            signature=signature,
            parameters=self._inferred_parameters(signature),
            explicit=False,
        )

    def annotate(self, callable_obj: Callable[..., Any]) -> tuple[str, ...]:
        """Return the ordered dependency names of ``callable_obj``."""
        return self.inspect_callable(callable_obj).dependencies

    def dependency_name(self, parameter_name: str) -> str | None:
        """Map a formal parameter name to the dependency it requests, if any."""
        if parameter_name.startswith(self.prefix_marker) and len(parameter_name) > len(
            self.prefix_marker,
        ):
            return self.builtin_prefix + parameter_name[len(self.prefix_marker) :]
        if parameter_name.endswith(self.suffix_marker) and len(parameter_name) > len(
            self.suffix_marker,
        ):
            return parameter_name[: -len(self.suffix_marker)]
        return None

    def signature_of(self, callable_obj: Callable[..., Any]) -> inspect.Signature:
        # Some builtins (dict, object) expose no signature; they take no injections.
        try:
            return inspect.signature(callable_obj)
        except (TypeError, ValueError):
            return inspect.Signature()

    def _explicit_parameters(
        self,
        callable_obj: Callable[..., Any],
        signature: inspect.Signature,
        names: tuple[str, ...],
    ) -> tuple[ParameterSpec, ...]:
        formal = list(signature.parameters.values())
        positional = [parameter for parameter in formal if parameter.kind in _POSITIONAL_KINDS]
        accepts_varargs = any(
            parameter.kind is inspect.Parameter.VAR_POSITIONAL for parameter in formal
        )
        if len(names) > len(positional) and not accepts_varargs:
            raise NamewireInvalidAnnotationError(callable_obj, names, len(positional))

        specs = [
            ParameterSpec(
                name=name,
                kind=ParameterKind.INJECTED,
                parameter=positional[index].name if index < len(positional) else None,
            )
            for index, name in enumerate(names)
        ]
        specs.extend(self._curried(parameter) for parameter in positional[len(names) :])
        specs.extend(
            self._curried(parameter)
            for parameter in formal
            if parameter.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.KEYWORD_ONLY)
        )
        return tuple(specs)

    def _inferred_parameters(self, signature: inspect.Signature) -> tuple[ParameterSpec, ...]:
        specs: list[ParameterSpec] = []
        curried = False
        for parameter in signature.parameters.values():
            if parameter.kind is inspect.Parameter.VAR_KEYWORD:
                continue
            if parameter.kind is inspect.Parameter.VAR_POSITIONAL:
                curried = True
                specs.append(self._curried(parameter))
                continue

            dependency = None if curried else self.dependency_name(parameter.name)
            if dependency is None:
                # Everything after the first free parameter is free, marked or not.
                curried = True
                specs.append(self._curried(parameter))
                continue

            specs.append(
                ParameterSpec(
                    name=dependency,
                    kind=ParameterKind.INJECTED,
                    parameter=parameter.name,
                    keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
                ),
            )
        return tuple(specs)

    def _curried(self, parameter: inspect.Parameter) -> ParameterSpec:
        return ParameterSpec(
            name=parameter.name,
            kind=ParameterKind.CURRIED,
            parameter=parameter.name,
            keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
            variadic=parameter.kind is inspect.Parameter.VAR_POSITIONAL,
        )
