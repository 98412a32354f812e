"""Unit tests for DataStore."""

from __future__ import annotations

import pytest

from retail_db.data.errors import MissingTable, StoreError
from retail_db.data.store import DataStore


class TestLoad:
    def test_tables_in_load_order(self, store: DataStore) -> None:
        assert store.table_names() == ["Sales", "Products"]
        assert store.is_loaded
        assert store.row_count() == 10

    def test_loads_only_once(self, store: DataStore) -> None:
        with pytest.raises(StoreError):
            store.load([("Other", ["A"], [])])
        assert store.table_names() == ["Sales", "Products"]

    def test_duplicate_table_names(self) -> None:
        fresh = DataStore()
        with pytest.raises(StoreError):
            fresh.load([("T", ["A"], []), ("T", ["B"], [])])
        assert not fresh.is_loaded
        assert fresh.table_names() == []

    def test_empty_load(self) -> None:
        empty = DataStore().load([])
        assert empty.is_loaded
        assert empty.row_count() == 0


class TestAccess:
    def test_missing_table(self, store: DataStore) -> None:
        with pytest.raises(MissingTable) as info:
            store.table("Customers")
        assert info.value.table == "Customers"

    def test_contains(self, store: DataStore) -> None:
        assert "Sales" in store
        assert "sales" not in store

    def test_same_table_object_every_time(self, store: DataStore) -> None:
        assert store.table("Sales") is store.table("Sales")

    def test_summary(self, store: DataStore) -> None:
        assert store.summary()[1] == {"name": "Products", "headers": ["SKU", "Name", "Category"], "rows": 5}
