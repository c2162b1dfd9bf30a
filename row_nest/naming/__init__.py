"""Naming conventions and column prefix utilities."""

from .inflect import basename, camel_case, pluralize, snake_case
from .prefix import ColumnPrefix


__all__ = ["ColumnPrefix", "basename", "camel_case", "pluralize", "snake_case"]
