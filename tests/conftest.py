"""Pytest configuration and fixtures for retail_db tests."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from retail_db.data.store import DataStore
from retail_db.session_log import SessionLog

SALES_HEADERS = ["ID", "Store", "SKU", "Name", "Packs", "Category", "Pack Price"]
SALES_ROWS = [
    ["1", "North", "A1", "Racer", "3", "RC Toys", "4"],
    ["2", "North", "B2", "Puzzle", "x", "RC Toys", "5"],
    ["3", "South", "A1", "Racer", "2", "Board", "10"],
    ["4", "", "C3", "Kite", "7", "Outdoor", "abc"],
    ["5", "South", "B2", "Puzzle", "1", "Board", "20"],
]

PRODUCTS_HEADERS = ["SKU", "Name", "Category"]
PRODUCTS_ROWS = [
    ["A1", "Racer", "RC Toys"],
    ["B2", "Puzzle", "Board"],
    ["C3", "Kite", "Outdoor"],
    ["D4", "Yo-yo", "Classic"],
    ["E5", "Drone", "RC Toys"],
]


@pytest.fixture
def store() -> DataStore:
    """Store with a Sales fact table and a Products dimension table."""
    return DataStore().load([
        ("Sales", SALES_HEADERS, SALES_ROWS),
        ("Products", PRODUCTS_HEADERS, PRODUCTS_ROWS),
    ])


@pytest.fixture
def fixed_clock():
    """Clock that always reads 2024-03-05 14:07:09."""
    return lambda: datetime(2024, 3, 5, 14, 7, 9)


@pytest.fixture
def session_log(tmp_path: Path, fixed_clock) -> SessionLog:
    return SessionLog(tmp_path / "log.txt", clock=fixed_clock)


@pytest.fixture
def workbook_path(tmp_path: Path) -> Path:
    """An .xlsx with the raw (untranslated) sales sheet plus a Products sheet."""
    from openpyxl import Workbook

    wb = Workbook()
    ws = wb.active
    ws.title = "Sales"
    ws.append(["Идентификатор", "Магазин", "Артикул", "Название", "Количество упаковок",
               "Категория", "Цена за упаковку"])
    ws.append([1, "North", "A1", "Racer", 3, "RC Toys", 4])
    ws.append([2, "North", "B2", "Puzzle", None, "RC Toys", 5])
    ws.append([3, "South", "A1", "Racer", 2, "Board", 10])

    products = wb.create_sheet("Products")
    products.append(PRODUCTS_HEADERS)
    for row in PRODUCTS_ROWS:
        products.append(row)

    path = tmp_path / "retail.xlsx"
    wb.save(path)
    return path


# Markers for test categories
def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests")
