"""Entity registry contracts and implementations."""

from .in_memory import InMemoryRegistry
from .protocol import EntityDescriptor, EntityRegistry


__all__ = ["EntityDescriptor", "EntityRegistry", "InMemoryRegistry"]
