"""Column prefix utilities for prefix-disambiguated flat rows."""

from __future__ import annotations

from dataclasses import dataclass

from .inflect import snake_case


@dataclass(frozen=True)
class ColumnPrefix:
    """Map between prefixed row columns and unprefixed entity attributes."""

    value: str = ""

    @classmethod
    def for_basename(cls, name: str, sep: str = "_") -> ColumnPrefix:
        """Build the conventional relative prefix for a type basename."""
        if not sep:
            msg = "sep must not be empty"
            raise ValueError(msg)
        stem = snake_case(name)
        if not stem:
            msg = f"cannot derive a column prefix from basename: {name!r}"
            raise ValueError(msg)
        return cls(stem + sep)

    def compose(self, child: ColumnPrefix) -> ColumnPrefix:
        """Return ``child`` qualified by this prefix."""
        return ColumnPrefix(self.value + child.value)

    def qualify(self, attribute: str) -> str:
        """Build a row column name from an attribute name."""
        if not attribute:
            msg = "attribute name must not be empty"
            raise ValueError(msg)
        return self.value + attribute

    def matches(self, column: str) -> bool:
        """Return True when a column carries this prefix."""
        return column.startswith(self.value)

    def strip(self, column: str) -> str:
        """Remove this prefix from a column name."""
        if not self.matches(column):
            msg = f"column does not match prefix '{self.value}': {column}"
            raise ValueError(msg)
        return column.removeprefix(self.value)

    def __str__(self) -> str:
        return self.value
