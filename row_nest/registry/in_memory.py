"""In-memory entity registry implementation."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar, override

import structlog

from row_nest.errors import UnknownEntityError
from row_nest.naming import basename as default_basename

from .protocol import EntityDescriptor, EntityRegistry


if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator, Mapping


logger = structlog.get_logger(__name__)

_K = TypeVar("_K")


def _class_factory(kind: type) -> Callable[[Mapping[str, Any]], Any]:
    def build(attributes: Mapping[str, Any]) -> Any:
        return kind(**attributes)

    return build


class InMemoryRegistry(EntityRegistry):
    """Registry populated explicitly by the application at startup."""

    def __init__(self) -> None:
        super().__init__()
        self._descriptors: dict[Any, EntityDescriptor] = {}

    def register(
        self,
        kind: Any,
        *,
        primary_key: str = "id",
        relations: Iterable[str] = (),
        factory: Callable[[Mapping[str, Any]], Any] | None = None,
        attach: Callable[[Any, str, Any], None] | None = None,
        basename: str | None = None,
    ) -> EntityDescriptor:
        """Register an entity kind.

        Parameters
        ----------
        kind
            Entity kind, normally the entity class. Any hashable is accepted.
        primary_key
            Unprefixed name of the identity column.
        relations
            Relation attribute names declared on this kind, e.g. ``("posts", "profile")``.
        factory
            Callable building an entity from an attribute mapping. Defaults to
            ``kind(**attributes)`` for classes and is required otherwise.
        attach
            Callable setting a relation on an entity. Defaults to ``setattr``.
        basename
            Short name used for prefix and relation-name derivation. Derived
            from ``kind`` when omitted.
        """
        if kind in self._descriptors:
            msg = f"entity kind is already registered: {kind!r}"
            raise ValueError(msg)
        if not primary_key:
            msg = "primary_key must not be empty"
            raise ValueError(msg)

        names = frozenset(relations)
        for name in names:
            if not name.isidentifier():
                msg = f"relation names must be valid identifiers: {name!r}"
                raise ValueError(msg)

        if factory is None:
            if not isinstance(kind, type):
                msg = f"factory is required for non-class entity kind: {kind!r}"
                raise ValueError(msg)
            factory = _class_factory(kind)

        descriptor = EntityDescriptor(
            kind=kind,
            basename=basename or default_basename(kind),
            primary_key=primary_key,
            factory=factory,
            attach=attach or setattr,
            relations=names,
        )
        self._descriptors[kind] = descriptor
        logger.debug(
            "entity_registered",
            kind=descriptor.basename,
            primary_key=primary_key,
            relations=sorted(names),
        )
        return descriptor

    def entity(
        self,
        *,
        primary_key: str = "id",
        relations: Iterable[str] = (),
        attach: Callable[[Any, str, Any], None] | None = None,
    ) -> Callable[[type[_K]], type[_K]]:
        """Class decorator form of :meth:`register`."""

        def decorator(cls: type[_K]) -> type[_K]:
            _ = self.register(cls, primary_key=primary_key, relations=relations, attach=attach)
            return cls

        return decorator

    @override
    def describe(self, kind: Any) -> EntityDescriptor:
        """Return the descriptor of ``kind`` or raise ``UnknownEntityError``."""
        try:
            return self._descriptors[kind]
        except KeyError:
            raise UnknownEntityError(kind) from None

    @override
    def has_relation(self, parent_kind: Any, name: str) -> bool:
        """Return True when ``parent_kind`` declares a relation called ``name``."""
        return name in self.describe(parent_kind).relations

    @override
    def create(self, kind: Any, attributes: Mapping[str, Any]) -> Any:
        """Build one entity of ``kind`` from unprefixed attributes."""
        return self.describe(kind).factory(attributes)

    @override
    def attach(self, kind: Any, entity: Any, name: str, value: Any) -> None:
        """Set a hydrated relation value on an entity of ``kind``."""
        self.describe(kind).attach(entity, name, value)

    def __contains__(self, kind: object) -> bool:
        return kind in self._descriptors

    def __iter__(self) -> Iterator[Any]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
