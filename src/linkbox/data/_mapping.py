"""Rows to frozen dataclasses.

Columns are matched to fields by name; columns without a field are
dropped. Values are passed through as the driver returns them.
"""

import dataclasses
from typing import Any


def _field_names(cls: type) -> frozenset[str]:
    if not dataclasses.is_dataclass(cls):
        msg = f"{cls.__name__} is not a dataclass; rows map onto frozen dataclasses only"
        raise TypeError(msg)
    return frozenset(f.name for f in dataclasses.fields(cls))


def map_row[T](cls: type[T], row: dict[str, Any]) -> T:
    """One row as a *cls* instance."""
    return map_rows(cls, [row])[0]


def map_rows[T](cls: type[T], rows: list[dict[str, Any]]) -> list[T]:
    """Each row as a *cls* instance."""
    names = _field_names(cls)
    return [cls(**{k: v for k, v in row.items() if k in names}) for row in rows]
