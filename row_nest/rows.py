"""Normalization of driver result rows into flat column mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence


def as_row(row: Any) -> Mapping[str, Any]:
    """Return a column mapping for one result row.

    Accepts mappings, SQLAlchemy ``Row`` objects, ``sqlite3.Row`` and
    ``asyncpg.Record`` style objects exposing ``keys()``, named tuples and
    plain attribute objects.
    """
    if isinstance(row, Mapping):
        return row
    mapping = getattr(row, "_mapping", None)
    if isinstance(mapping, Mapping):
        return mapping
    if hasattr(row, "_asdict"):
        return row._asdict()
    if hasattr(row, "keys"):
        return {key: row[key] for key in row.keys()}  # noqa: SIM118
    if hasattr(row, "__dict__"):
        return vars(row)
    msg = f"unsupported row type: {type(row).__name__}"
    raise TypeError(msg)


def _column_name(column: Any) -> str:
    # DB-API cursor.description entries are sequences whose first item is the name.
    name = column if isinstance(column, str) else column[0]
    if not name:
        msg = "column names must not be empty"
        raise ValueError(msg)
    return name


def rows_from_tuples(columns: Sequence[Any], tuples: Iterable[Sequence[Any]]) -> list[dict[str, Any]]:
    """Zip positional rows with column names or a DB-API ``cursor.description``."""
    names = [_column_name(column) for column in columns]
    if len(set(names)) != len(names):
        msg = "column names must be unique; alias joined columns with entity prefixes"
        raise ValueError(msg)

    rows: list[dict[str, Any]] = []
    for values in tuples:
        if len(values) != len(names):
            msg = f"row has {len(values)} values but {len(names)} columns were given"
            raise ValueError(msg)
        rows.append(dict(zip(names, values, strict=True)))
    return rows
