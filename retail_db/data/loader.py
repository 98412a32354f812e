"""
Workbook / CSV discovery and loading into (name, headers, rows) triples.
"""
from __future__ import annotations

from pathlib import Path

import pandas as pd

from retail_db.config import COLUMN_MAP, DATA_FILE, SUPPORTED_EXTENSIONS
from retail_db.data.store import DataStore, TableSource


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------

def discover_sources(path: Path = DATA_FILE) -> list[Path]:
    """The file itself, or every supported file directly inside a directory."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data source not found: {path}")
    if path.is_file():
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise ValueError(f"Unsupported data file '{path.name}' (expected {sorted(SUPPORTED_EXTENSIONS)})")
        return [path]

    return sorted(
        p for p in path.iterdir()
        if p.is_file()
        and p.suffix.lower() in SUPPORTED_EXTENSIONS
        and not p.name.startswith("~$")  # Excel lock files
    )


# ---------------------------------------------------------------------------
# Reading
# ---------------------------------------------------------------------------

def normalize_headers(headers) -> list[str]:
    """Strip raw header text and map known workbook headers to field names."""
    cleaned = [str(h).strip() for h in headers]
    return [COLUMN_MAP.get(h, h) for h in cleaned]


def _frame_to_source(name: str, df: pd.DataFrame) -> TableSource:
    df = df.fillna("")
    rows = [[str(v) for v in row] for row in df.itertuples(index=False, name=None)]
    return name, normalize_headers(df.columns), rows


def read_workbook(path: Path) -> list[TableSource]:
    """One table per non-empty sheet, named after the sheet."""
    sheets = pd.read_excel(path, sheet_name=None, dtype=str, keep_default_na=False, engine="openpyxl")
    sources = []
    for sheet, df in sheets.items():
        if len(df.columns) == 0:
            print(f"  Skipping empty sheet '{sheet}'")
            continue
        sources.append(_frame_to_source(str(sheet), df))
    return sources


def read_csv(path: Path) -> list[TableSource]:
    """One table named after the file stem."""
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    return [_frame_to_source(path.stem, df)]


def load_sources(path: Path = DATA_FILE) -> list[TableSource]:
    """Read every table from a file or directory."""
    sources: list[TableSource] = []
    for f in discover_sources(path):
        if f.suffix.lower() == ".csv":
            found = read_csv(f)
        else:
            found = read_workbook(f)
        for name, headers, rows in found:
            print(f"  {f.name} → {name}: {len(rows):,} rows, {len(headers)} fields")
        sources.extend(found)
    return sources


def load_store(path: Path = DATA_FILE) -> DataStore:
    """Build and load a DataStore from *path*."""
    return DataStore().load(load_sources(path))
