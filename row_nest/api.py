"""Entry points combining metadata construction and hydration."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from row_nest.hydrator import transform
from row_nest.meta import EntityMeta


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from row_nest.registry import EntityRegistry


__all__ = ["finalize", "nest", "reconstruct", "transform"]


def nest(
    parent: Any,
    *children: Any,
    registry: EntityRegistry,
    prefix: str | None = None,
    strict: bool = False,
) -> EntityMeta:
    """Build a metadata node for ``parent`` with ``children`` nested under it.

    ``parent`` and every child may be an entity kind or an existing
    :class:`EntityMeta`; kinds are wrapped in fresh nodes. ``prefix`` and
    ``strict`` configure a fresh parent node and cannot be combined with an
    existing one.
    """
    if isinstance(parent, EntityMeta):
        if prefix is not None or strict:
            msg = "prefix and strict apply only when parent is an entity kind, not an EntityMeta"
            raise ValueError(msg)
        meta = parent
    else:
        meta = EntityMeta(parent, registry, prefix=prefix, strict=strict)
    return meta.nest(*(_as_meta(child, registry) for child in children))


def finalize(meta: EntityMeta) -> EntityMeta:
    """Designate ``meta`` as the root of its tree and fix absolute prefixes."""
    return meta.finalize()


def reconstruct(
    rows: Iterable[Any],
    root: Any,
    relations: Sequence[Any] = (),
    *,
    registry: EntityRegistry,
) -> list[Any]:
    """Hydrate ``rows`` into ``root`` entities with ``relations`` nested."""
    return transform(rows, finalize(nest(root, *relations, registry=registry)))


def _as_meta(value: Any, registry: EntityRegistry) -> EntityMeta:
    if isinstance(value, EntityMeta):
        return value
    return EntityMeta(value, registry)
