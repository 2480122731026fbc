from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from appwire.exceptions import AppwireAbstractNotFoundError

Factory: TypeAlias = Callable[[dict[str, Any]], Any]
"""A callable producing an instance from the argument bag of one resolution."""


@dataclass(frozen=True, slots=True)
class Binding:
    """A factory stored under an abstract identifier."""

    factory: Factory
    """Callable invoked with the argument bag on every resolution."""
    tags: frozenset[str] = field(default_factory=frozenset)
    """Lookup groups this binding belongs to."""


class Container:
    """Store bindings keyed by abstract identifier.

    The container holds no resolution logic. ``App`` decides how factories are
    built and invoked; the container only answers membership, lookup and tag
    queries. Enumeration follows first-registration order, overwriting a
    binding keeps its position.
    """

    def __init__(self) -> None:
        self._bindings: dict[str, Binding] = {}

    def has(self, abstract: str) -> bool:
        """Return true when ``abstract`` has a binding."""
        return abstract in self._bindings

    def set(
        self,
        abstract: str,
        factory: Factory,
        *,
        tags: Iterable[str] | None = None,
    ) -> None:
        """Store or overwrite the binding for ``abstract``."""
        self._bindings[abstract] = Binding(
            factory=factory,
            tags=frozenset(tags) if tags is not None else frozenset(),
        )

    def get(self, abstract: str) -> Factory:
        """Return the factory bound to ``abstract``.

        Raises:
            AppwireAbstractNotFoundError: If ``abstract`` is not bound.

        """
        return self.get_binding(abstract).factory

    def get_binding(self, abstract: str) -> Binding:
        """Return the full binding record for ``abstract``."""
        try:
            return self._bindings[abstract]
        except KeyError:
            raise AppwireAbstractNotFoundError(abstract) from None

    def by_tag(self, tag: str) -> list[str]:
        """Return every abstract tagged with ``tag``, in registration order."""
        return [abstract for abstract, binding in self._bindings.items() if tag in binding.tags]

    def __contains__(self, abstract: object) -> bool:
        return abstract in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._bindings))

    def __len__(self) -> int:
        return len(self._bindings)
