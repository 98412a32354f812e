"""
Record — ordered field → text mapping with case-insensitive field names.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from retail_db.data.errors import SchemaMismatch


def fold_field(name: str) -> str:
    """Comparison key for a field name."""
    return str(name).strip().casefold()


def to_text(value: Any) -> str:
    """Cell value as stored text; blanks become ''."""
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


class Record(MutableMapping):
    """One row of a table.

    Field lookup ignores case, values do not. Iteration follows insertion
    order and yields the field names as first written. A *fixed* record
    (every record owned by a Table) can update existing fields but cannot
    gain or lose fields.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | Iterable[tuple[str, Any]] | None = None,
        *,
        fixed: bool = False,
    ) -> None:
        self._cells: dict[str, tuple[str, str]] = {}
        self._fixed = False
        if data is not None:
            items = data.items() if isinstance(data, Mapping) else data
            for field, value in items:
                self[field] = value
        self._fixed = fixed

    @property
    def is_fixed(self) -> bool:
        return self._fixed

    def __getitem__(self, field: str) -> str:
        try:
            return self._cells[fold_field(field)][1]
        except KeyError:
            raise KeyError(field) from None

    def __setitem__(self, field: str, value: Any) -> None:
        key = fold_field(field)
        if key in self._cells:
            name = self._cells[key][0]
        elif self._fixed:
            raise SchemaMismatch(f"unknown field '{field}'")
        else:
            name = str(field)
        self._cells[key] = (name, to_text(value))

    def __delitem__(self, field: str) -> None:
        if self._fixed:
            raise SchemaMismatch(f"cannot remove field '{field}' from a table record")
        try:
            del self._cells[fold_field(field)]
        except KeyError:
            raise KeyError(field) from None

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._cells.values())

    def __len__(self) -> int:
        return len(self._cells)

    def __contains__(self, field: object) -> bool:
        return isinstance(field, str) and fold_field(field) in self._cells

    def fields(self) -> list[str]:
        return list(self)

    def copy(self) -> Record:
        """Detached, non-fixed copy."""
        return Record(self.items())

    def to_dict(self) -> dict[str, str]:
        return dict(self.items())

    def __repr__(self) -> str:
        return f"Record({self.to_dict()!r})"
