"""Lightweight entity base class for applications without their own models."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self, override

from row_nest.api import nest
from row_nest.hydrator import transform


if TYPE_CHECKING:
    from collections.abc import Iterable

    from row_nest.meta import EntityMeta
    from row_nest.registry import InMemoryRegistry


def _to_plain(value: Any) -> Any:
    if isinstance(value, Record):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_plain(item) for item in value]
    return value


class Record:
    """Attribute bag with named relations.

    Subclasses declare their identity column and relation names and register
    themselves by passing a registry in the class statement::

        class User(Record, registry=models):
            __relations__ = ("posts", "profile")

    Columns and relations are read as attributes. Class members such as
    ``nest``, ``hydrate`` or ``to_dict`` take precedence over a column of the
    same name, and a loaded relation takes precedence over a column named like
    it. Use :meth:`get_attributes` and :meth:`get_relations` to reach shadowed
    values.
    """

    __primary_key__: ClassVar[str] = "id"
    __relations__: ClassVar[tuple[str, ...]] = ()
    __registry__: ClassVar[InMemoryRegistry | None] = None

    def __init_subclass__(cls, *, registry: InMemoryRegistry | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if registry is None:
            return
        _ = registry.register(
            cls,
            primary_key=cls.__primary_key__,
            relations=cls.__relations__,
            attach=Record.set_relation,
        )
        cls.__registry__ = registry

    def __init__(self, **attributes: Any) -> None:
        super().__init__()
        self._attributes: dict[str, Any] = dict(attributes)
        self._relations: dict[str, Any] = {}

    def __getattr__(self, name: str) -> Any:
        state = self.__dict__
        if name in state.get("_relations", {}):
            return state["_relations"][name]
        if name in state.get("_attributes", {}):
            return state["_attributes"][name]
        msg = f"{type(self).__name__!r} object has no attribute or relation {name!r}"
        raise AttributeError(msg)

    def get_attributes(self) -> dict[str, Any]:
        """Return a copy of the hydrated column attributes."""
        return dict(self._attributes)

    def get_relations(self) -> dict[str, Any]:
        """Return a copy of the attached relations."""
        return dict(self._relations)

    def set_relation(self, name: str, value: Any) -> None:
        self._relations[name] = value

    def relation_loaded(self, name: str) -> bool:
        return name in self._relations

    def to_dict(self) -> dict[str, Any]:
        """Return attributes and relations as nested plain data."""
        return {
            **self._attributes,
            **{name: _to_plain(value) for name, value in self._relations.items()},
        }

    @classmethod
    def _registry(cls) -> InMemoryRegistry:
        if cls.__registry__ is None:
            msg = f"{cls.__name__} is not registered; declare it with `class {cls.__name__}(Record, registry=...)`"
            raise RuntimeError(msg)
        return cls.__registry__

    @classmethod
    def nest(cls, *relations: Any) -> EntityMeta:
        """Build a metadata node for this class with ``relations`` nested."""
        return nest(cls, *relations, registry=cls._registry())

    @classmethod
    def hydrate(cls, rows: Iterable[Any], relations: Iterable[Any] = ()) -> list[Self]:
        """Hydrate joined ``rows`` into instances of this class with ``relations`` nested."""
        return transform(rows, cls.nest(*relations).finalize())

    @override
    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._attributes == other._attributes and self._relations == other._relations  # type: ignore[attr-defined]

    __hash__ = None  # type: ignore[assignment]

    @override
    def __repr__(self) -> str:
        fields = ", ".join(f"{key}={value!r}" for key, value in self._attributes.items())
        return f"{type(self).__name__}({fields})"
