"""
DataStore — the session's tables, held in memory.

Loaded once, then handed by reference to the CRUD and query functions.
A reload builds a fresh DataStore rather than refilling this one.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from retail_db.data.errors import MissingTable, StoreError
from retail_db.data.table import Table

TableSource = tuple[str, Sequence[str], Iterable[Sequence[Any]]]


class DataStore:
    """Ordered mapping of table name → Table."""

    def __init__(self) -> None:
        self._tables: dict[str, Table] = {}
        self._loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self, tables: Iterable[TableSource]) -> "DataStore":
        """Populate from (name, headers, rows) triples. Only once per store."""
        if self._loaded:
            raise StoreError("Store is already loaded; build a new DataStore to reload")

        staged: dict[str, Table] = {}
        for name, headers, rows in tables:
            if name in staged:
                raise StoreError(f"Duplicate table name: '{name}'")
            staged[name] = Table.from_rows(name, headers, rows)

        self._tables = staged
        self._loaded = True
        return self

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    # ------------------------------------------------------------------
    # Access
    # ------------------------------------------------------------------

    def table(self, name: str) -> Table:
        try:
            return self._tables[name]
        except KeyError:
            raise MissingTable(name) from None

    def __contains__(self, name: object) -> bool:
        return name in self._tables

    def table_names(self) -> list[str]:
        return list(self._tables)

    def row_count(self) -> int:
        return sum(len(t) for t in self._tables.values())

    def summary(self) -> list[dict]:
        """One {name, headers, rows} dict per table, in load order."""
        return [
            {"name": t.name, "headers": t.headers(), "rows": len(t)}
            for t in self._tables.values()
        ]
