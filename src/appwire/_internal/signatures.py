from __future__ import annotations

import inspect
from collections.abc import Callable
from dataclasses import dataclass
from inspect import Parameter
from typing import Any

_IMPLICIT_FIRST_PARAMETER_NAMES = {"self", "cls"}
_VARIADIC_KINDS = (Parameter.VAR_POSITIONAL, Parameter.VAR_KEYWORD)


@dataclass(frozen=True, slots=True)
class ConstructorParameter:
    """A named constructor parameter considered for autowiring."""

    name: str
    """Parameter name, doubling as the abstract it autowires from."""
    keyword_only: bool
    """True when the parameter must be passed by keyword."""
    default: Any = Parameter.empty
    """Declared default value, ``Parameter.empty`` when required."""

    @property
    def has_default(self) -> bool:
        return self.default is not Parameter.empty


class ConstructorInspector:
    """Extract autowirable parameter names from constructors and factories.

    Results are cached per target, so repeated resolutions of the same class
    inspect its signature once.
    """

    def __init__(self) -> None:
        self._cache: dict[Any, tuple[ConstructorParameter, ...]] = {}

    def get_parameters(self, target: Callable[..., Any]) -> tuple[ConstructorParameter, ...]:
        """Return the autowirable parameters of ``target`` in declared order.

        Args:
            target: Class or callable whose signature drives autowiring.

        """
        try:
            return self._cache[target]
        except KeyError:
            pass
        except TypeError:
            # Unhashable callables are inspected on every call.
            return self._inspect(target)

        parameters = self._inspect(target)
        self._cache[target] = parameters
        return parameters

    def _inspect(self, target: Callable[..., Any]) -> tuple[ConstructorParameter, ...]:
        try:
            signature = inspect.signature(target)
        except (TypeError, ValueError):
            # Builtins without introspectable signatures are constructed bare.
            return ()

        parameters = tuple(
            parameter
            for parameter in signature.parameters.values()
            if parameter.kind not in _VARIADIC_KINDS
        )
        if (
            inspect.isfunction(target)
            and parameters
            and parameters[0].name in _IMPLICIT_FIRST_PARAMETER_NAMES
        ):
            # Plain functions written as ``def new(self, ...)`` receive no receiver.
            parameters = parameters[1:]

        return tuple(
            ConstructorParameter(
                name=parameter.name,
                keyword_only=parameter.kind is Parameter.KEYWORD_ONLY,
                default=parameter.default,
            )
            for parameter in parameters
        )


def accepts_arguments(factory: Callable[..., Any]) -> bool:
    """Return true when ``factory`` can be called with one positional argument."""
    try:
        signature = inspect.signature(factory)
    except (TypeError, ValueError):
        return True

    for parameter in signature.parameters.values():
        if parameter.kind in (
            Parameter.POSITIONAL_ONLY,
            Parameter.POSITIONAL_OR_KEYWORD,
            Parameter.VAR_POSITIONAL,
        ):
            return True
    return False


__all__ = ["ConstructorInspector", "ConstructorParameter", "accepts_arguments"]
