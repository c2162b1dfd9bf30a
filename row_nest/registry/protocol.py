"""Entity registry interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


@dataclass(frozen=True)
class EntityDescriptor:
    """Everything the hydration core needs to know about one entity kind."""

    kind: Any
    basename: str
    primary_key: str
    factory: Callable[[Mapping[str, Any]], Any] = field(repr=False, compare=False)
    attach: Callable[[Any, str, Any], None] = field(repr=False, compare=False)
    relations: frozenset[str] = frozenset()


class EntityRegistry(ABC):
    """Lookup of entity descriptors, declared relations and constructors."""

    @abstractmethod
    def describe(self, kind: Any) -> EntityDescriptor:
        """Return the descriptor of ``kind`` or raise ``UnknownEntityError``."""

    @abstractmethod
    def has_relation(self, parent_kind: Any, name: str) -> bool:
        """Return True when ``parent_kind`` declares a relation called ``name``."""

    @abstractmethod
    def create(self, kind: Any, attributes: Mapping[str, Any]) -> Any:
        """Build one entity of ``kind`` from unprefixed attributes."""

    @abstractmethod
    def attach(self, kind: Any, entity: Any, name: str, value: Any) -> None:
        """Set a hydrated relation value on an entity of ``kind``."""
