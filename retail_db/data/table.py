"""
Table — named, ordered sequence of records sharing a fixed header.
"""
from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

import pandas as pd

from retail_db.data.errors import SchemaMismatch
from retail_db.data.record import Record, fold_field, to_text


class Table:
    """Records of one sheet. Lookups are linear scans."""

    def __init__(self, name: str, headers: Sequence[str]) -> None:
        names = [to_text(h) for h in headers]
        folded = [fold_field(h) for h in names]
        if len(set(folded)) != len(folded):
            dupes = sorted({h for h, f in zip(names, folded) if folded.count(f) > 1})
            raise SchemaMismatch(f"duplicate header fields {dupes}", table=name)
        self.name = name
        self._headers = tuple(names)
        self._by_folded = dict(zip(folded, names))
        self._records: list[Record] = []

    @classmethod
    def from_rows(
        cls,
        name: str,
        headers: Sequence[str],
        rows: Iterable[Sequence[Any]],
    ) -> Table:
        table = cls(name, headers)
        for row in rows:
            table.append_row(row)
        return table

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    def headers(self) -> list[str]:
        return list(self._headers)

    def resolve_field(self, field: str) -> str | None:
        """Header spelling of *field*, or None when the table lacks it."""
        return self._by_folded.get(fold_field(field))

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"Table({self.name!r}, {len(self._headers)} fields, {len(self)} rows)"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def all(self) -> Iterator[Record]:
        """Records in insertion order. Each call starts a fresh pass."""
        yield from self._records

    def __iter__(self) -> Iterator[Record]:
        return self.all()

    def find_first(self, field: str, value: str) -> Record | None:
        """First record whose *field* equals *value* exactly."""
        name = self.resolve_field(field)
        if name is None:
            return None
        return next((r for r in self._records if r[name] == value), None)

    def column(self, field: str) -> list[str]:
        """Values of *field* in row order; all blank when the field is absent."""
        name = self.resolve_field(field)
        if name is None:
            return [""] * len(self._records)
        return [r[name] for r in self._records]

    def to_frame(self) -> pd.DataFrame:
        """Text cells as a DataFrame (index = row position)."""
        return pd.DataFrame(
            [list(r.values()) for r in self._records],
            columns=list(self._headers),
            dtype=object,
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, record: Mapping[str, Any]) -> Record:
        """Copy *record* into the table. Its fields must match the header."""
        cells = {fold_field(k): v for k, v in record.items()}
        if len(cells) != len(record):
            raise SchemaMismatch("record repeats a field under different case", table=self.name)
        missing = [h for f, h in self._by_folded.items() if f not in cells]
        extra = [k for k in record if fold_field(k) not in self._by_folded]
        if missing or extra:
            raise SchemaMismatch(f"record fields differ from header (missing {missing}, extra {extra})",
                                 table=self.name)
        row = Record(((h, cells[fold_field(h)]) for h in self._headers), fixed=True)
        self._records.append(row)
        return row

    def append_row(self, values: Sequence[Any]) -> Record:
        """Append positional cell values; short rows are padded with ''."""
        if len(values) > len(self._headers):
            raise SchemaMismatch(
                f"row has {len(values)} cells for {len(self._headers)} header fields", table=self.name,
            )
        padded = list(values) + [""] * (len(self._headers) - len(values))
        row = Record(zip(self._headers, padded), fixed=True)
        self._records.append(row)
        return row

    def remove_where(self, field: str, value: str) -> int:
        """Remove every record whose *field* equals *value*. Returns the count."""
        name = self.resolve_field(field)
        if name is None:
            return 0
        kept = [r for r in self._records if r[name] != value]
        removed = len(self._records) - len(kept)
        self._records[:] = kept
        return removed
