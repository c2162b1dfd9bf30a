"""row-nest - rebuild nested entity graphs from flat joined SQL rows"""

import importlib.metadata

from .api import finalize, nest, reconstruct, transform
from .errors import (
    CircularRelationError,
    DuplicateRelationError,
    MetadataFrozenError,
    MetadataNotFinalizedError,
    RelationNotFoundError,
    RowNestError,
    UnknownEntityError,
)
from .hydrator import Hydrator
from .logging import configure_logging
from .meta import EntityMeta
from .record import Record
from .registry import EntityDescriptor, EntityRegistry, InMemoryRegistry
from .rows import as_row, rows_from_tuples


try:
    __version__ = importlib.metadata.version("row-nest")
except importlib.metadata.PackageNotFoundError:  # pragma: no cover - running from an uninstalled checkout
    __version__ = "0.0.0"


__all__ = [
    "CircularRelationError",
    "DuplicateRelationError",
    "EntityDescriptor",
    "EntityMeta",
    "EntityRegistry",
    "Hydrator",
    "InMemoryRegistry",
    "MetadataFrozenError",
    "MetadataNotFinalizedError",
    "Record",
    "RelationNotFoundError",
    "RowNestError",
    "UnknownEntityError",
    "__version__",
    "as_row",
    "configure_logging",
    "finalize",
    "nest",
    "reconstruct",
    "rows_from_tuples",
    "transform",
]
