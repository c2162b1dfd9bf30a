"""Reconstruction of nested entities from flat joined rows."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from row_nest.errors import MetadataNotFinalizedError
from row_nest.rows import as_row


if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from row_nest.meta import EntityMeta


logger = structlog.get_logger(__name__)


class Hydrator:
    """Walk flat rows into entities following a finalized metadata tree.

    Instances keep no state between calls, so one hydrator (and one tree)
    may serve concurrent transforms from several threads.
    """

    def transform(self, rows: Iterable[Any], meta: EntityMeta) -> list[Any]:
        """Return one hydrated entity per distinct identity of ``meta``, in row order."""
        if not (meta.is_root and meta.finalized):
            msg = f"metadata for {meta.basename} must be finalized before transforming rows"
            raise MetadataNotFinalizedError(msg)

        normalized = [as_row(row) for row in rows]
        columns: dict[EntityMeta, dict[str, str | None]] = {}
        entities = self._transform(normalized, meta, columns)
        logger.debug("rows_transformed", root=meta.basename, rows=len(normalized), entities=len(entities))
        return entities

    def _transform(
        self,
        rows: Sequence[Mapping[str, Any]],
        meta: EntityMeta,
        columns: dict[EntityMeta, dict[str, str | None]],
    ) -> list[Any]:
        entities: list[Any] = []
        for identity, group in self._group(rows, meta.id_column).items():
            entity = meta.registry.create(meta.kind, self._attributes(group, meta, identity, columns))
            for name, child in meta.children.items():
                related = self._transform(group, child, columns)
                meta.registry.attach(meta.kind, entity, name, related if child.is_many else next(iter(related), None))
            entities.append(entity)
        return entities

    @staticmethod
    def _group(rows: Sequence[Mapping[str, Any]], id_column: str) -> dict[Any, list[Mapping[str, Any]]]:
        # Rows without an identity at this level come from outer joins with no match.
        groups: dict[Any, list[Mapping[str, Any]]] = {}
        for row in rows:
            identity = row.get(id_column)
            if identity is None:
                continue
            groups.setdefault(identity, []).append(row)
        return groups

    @staticmethod
    def _attributes(
        group: Sequence[Mapping[str, Any]],
        meta: EntityMeta,
        identity: Any,
        columns: dict[EntityMeta, dict[str, str | None]],
    ) -> dict[str, Any]:
        owned = columns.setdefault(meta, {})
        attributes: dict[str, Any] = {}
        divergent: set[str] = set()
        for row in group:
            for column, value in row.items():
                if column not in owned:
                    owned[column] = meta.column_attribute(column)
                attribute = owned[column]
                if attribute is None:
                    continue
                if attribute in attributes and attributes[attribute] != value and attribute not in divergent:
                    divergent.add(attribute)
                    logger.warning(
                        "divergent_attribute",
                        entity=meta.basename,
                        identity=identity,
                        attribute=attribute,
                    )
                attributes[attribute] = value
        return attributes


def transform(rows: Iterable[Any], meta: EntityMeta) -> list[Any]:
    """Hydrate ``rows`` into root entities described by a finalized ``meta`` tree."""
    return Hydrator().transform(rows, meta)
