"""Exceptions raised while building metadata trees and resolving entities."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Sequence


class RowNestError(Exception):
    """Base class for every error raised by row-nest."""


class UnknownEntityError(RowNestError, LookupError):
    """Raised when an entity kind has not been registered."""

    def __init__(self, kind: Any) -> None:
        self.kind = kind
        msg = f"entity kind is not registered: {kind!r}"
        super().__init__(msg)


class RelationNotFoundError(RowNestError, LookupError):
    """Raised when a parent entity declares neither relation name for a child."""

    def __init__(self, parent_kind: Any, child_kind: Any, singular: str, plural: str) -> None:
        self.parent_kind = parent_kind
        self.child_kind = child_kind
        self.singular = singular
        self.plural = plural
        msg = (
            f"{parent_kind!r} has no relation to {child_kind!r}; "
            f"searched for '{plural}' and '{singular}'"
        )
        super().__init__(msg)


class CircularRelationError(RowNestError, ValueError):
    """Raised when an entity kind reappears along its own root-to-node path."""

    def __init__(self, kind: Any, path: Sequence[Any]) -> None:
        self.kind = kind
        self.path = tuple(path)
        chain = " -> ".join(repr(item) for item in (*self.path, kind))
        msg = f"circular relation detected for {kind!r}: {chain}"
        super().__init__(msg)


class DuplicateRelationError(RowNestError, ValueError):
    """Raised by strict metadata nodes when a relation name is nested twice."""

    def __init__(self, parent_kind: Any, name: str) -> None:
        self.parent_kind = parent_kind
        self.name = name
        msg = f"relation '{name}' is already nested on {parent_kind!r}"
        super().__init__(msg)


class MetadataFrozenError(RowNestError, RuntimeError):
    """Raised when a finalized metadata tree is modified."""


class MetadataNotFinalizedError(RowNestError, RuntimeError):
    """Raised when rows are transformed with a tree that was never finalized."""
