"""Metadata tree describing entity nesting and column prefixes for one query shape."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from row_nest.errors import (
    CircularRelationError,
    DuplicateRelationError,
    MetadataFrozenError,
    RelationNotFoundError,
)
from row_nest.naming import ColumnPrefix, pluralize, snake_case


if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from row_nest.registry import EntityDescriptor, EntityRegistry


logger = structlog.get_logger(__name__)


class EntityMeta:
    """One node of a metadata tree.

    A node is built detached with a relative prefix (``post_``), attached to a
    parent with :meth:`nest` and receives its absolute prefix
    (``post_comment_``) when the root of its tree is finalized.
    """

    def __init__(
        self,
        kind: Any,
        registry: EntityRegistry,
        *,
        prefix: str | None = None,
        strict: bool = False,
    ) -> None:
        super().__init__()
        if prefix is not None and not prefix:
            msg = "prefix must not be empty"
            raise ValueError(msg)

        self.registry = registry
        self.descriptor: EntityDescriptor = registry.describe(kind)
        self.strict = strict
        self.is_root = False
        self.is_many = False
        self._relative = ColumnPrefix(prefix) if prefix else ColumnPrefix.for_basename(self.basename)
        self._prefix = self._relative
        self._parent: EntityMeta | None = None
        self._children: dict[str, EntityMeta] = {}
        self._finalized = False

    @property
    def kind(self) -> Any:
        return self.descriptor.kind

    @property
    def basename(self) -> str:
        return self.descriptor.basename

    @property
    def prefix(self) -> str:
        return self._prefix.value

    @property
    def children(self) -> Mapping[str, EntityMeta]:
        """Relation name to child node, in nesting order."""
        return self._children

    @property
    def finalized(self) -> bool:
        return self._finalized

    @property
    def id_column(self) -> str:
        """Prefixed primary key column used to group rows of this entity."""
        return self._prefix.qualify(self.descriptor.primary_key)

    def _ensure_mutable(self) -> None:
        if self._finalized:
            msg = f"metadata for {self.basename} is finalized and can no longer change"
            raise MetadataFrozenError(msg)

    def _relation_name(self, child: EntityMeta) -> tuple[str, bool]:
        singular = snake_case(child.basename)
        plural = pluralize(singular)
        if self.registry.has_relation(self.kind, plural):
            return plural, True
        if self.registry.has_relation(self.kind, singular):
            return singular, False
        raise RelationNotFoundError(self.kind, child.kind, singular, plural)

    def nest(self, *children: EntityMeta) -> EntityMeta:
        """Attach child nodes under their resolved relation names and return self."""
        self._ensure_mutable()
        for child in children:
            child._ensure_mutable()
            if child._parent is not None:
                msg = f"metadata for {child.basename} is already nested under {child._parent.basename}"
                raise ValueError(msg)
            name, is_many = self._relation_name(child)
            replaced = self._children.get(name)
            if replaced is not None:
                if self.strict:
                    raise DuplicateRelationError(self.kind, name)
                logger.warning("relation_replaced", parent=self.basename, relation=name)
                replaced._parent = None
            child.is_many = is_many
            child._parent = self
            self._children[name] = child
            logger.debug("relation_nested", parent=self.basename, relation=name, many=is_many)
        return self

    def finalize(self) -> EntityMeta:
        """Mark this node as the root and compute absolute prefixes below it."""
        self._ensure_mutable()
        self._check_cycles(self, (self.kind,))
        if self._parent is not None:
            msg = f"metadata for {self.basename} is nested under {self._parent.basename}; finalize the root instead"
            raise ValueError(msg)
        self.is_root = True
        self._prefix = ColumnPrefix()
        self._prefix_children(self)
        for _, node in self.walk():
            node._finalized = True
        logger.debug("metadata_finalized", root=self.basename, nodes=sum(1 for _ in self.walk()))
        return self

    @classmethod
    def _check_cycles(cls, parent: EntityMeta, path: tuple[Any, ...]) -> None:
        for child in parent._children.values():
            if child.kind in path:
                raise CircularRelationError(child.kind, path)
            cls._check_cycles(child, (*path, child.kind))

    @classmethod
    def _prefix_children(cls, parent: EntityMeta) -> None:
        for child in parent._children.values():
            child._prefix = parent._prefix.compose(child._relative)
            cls._prefix_children(child)

    def walk(self, path: tuple[str, ...] = ()) -> Iterator[tuple[tuple[str, ...], EntityMeta]]:
        """Yield ``(relation path, node)`` pairs depth first, starting with self."""
        yield path, self
        for name, child in self._children.items():
            yield from child.walk((*path, name))

    def column_attribute(self, column: str) -> str | None:
        """Return the attribute name for a column of this entity, or None.

        A column belongs to the node when the node is the root or the column
        carries the node's prefix, unless a child prefix claims it first.
        """
        if not (self.is_root or self._prefix.matches(column)):
            return None
        if any(child._prefix.matches(column) for child in self._children.values()):
            return None
        return self._prefix.strip(column)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self.basename}, prefix={self.prefix!r}, "
            f"many={self.is_many}, children={list(self._children)})"
        )
