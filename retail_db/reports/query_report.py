"""
Query Report — every preset query as JSON or as a styled workbook.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from retail_db.data.schemas import PresetOutcome, QueryKind, QueryPreset
from retail_db.data.store import DataStore
from retail_db.analytics.common import sanitize_for_json
from retail_db.analytics.presets import run_presets
from retail_db.excel.writer import ColSpec, ExcelWriter


def generate_json(store: DataStore, presets: Optional[list[QueryPreset]] = None) -> dict:
    outcomes = run_presets(store, presets)
    return sanitize_for_json({
        "tables": store.summary(),
        "queries": [
            {
                "name": o.preset.name,
                "kind": o.preset.kind.value,
                "label": o.preset.label,
                "ok": o.ok,
                "error": o.error,
                "result": o.result,
            }
            for o in outcomes
        ],
    })


def _table_layout(store: DataStore, outcome: PresetOutcome) -> tuple[list[ColSpec], list[tuple], tuple | None]:
    """Columns, rows and optional total row for a list-valued outcome."""
    preset = outcome.preset
    result = outcome.result

    if preset.kind == QueryKind.GROUP_COUNTS:
        columns = [(preset.params["group_field"], "text"), ("Rows", "number")]
        rows = [tuple(g) for g in result]
        return columns, rows, ("TOTAL", sum(g.count for g in result))

    if preset.kind == QueryKind.TOP_GROUPS:
        columns = [("#", "number"), (preset.params["group_field"], "text"),
                   (preset.params["dim_name_field"], "text"), (preset.params["value_field"], "decimal")]
        rows = [(i, g.key, g.name, g.total) for i, g in enumerate(result, 1)]
        return columns, rows, None

    if preset.kind == QueryKind.RANKED_ROWS:
        headers = store.table(preset.params["table"]).headers()
        columns = [("#", "number")] + [(h, "text") for h in headers] + [(preset.params["rank_field"], "decimal")]
        rows = [(i, *r.values, r.rank_value) for i, r in enumerate(result, 1)]
        return columns, rows, None

    headers = store.table(preset.params["dim_table"]).headers()
    return [(h, "text") for h in headers], list(result), None


def generate_excel(
    store: DataStore,
    output_path: str | Path,
    presets: Optional[list[QueryPreset]] = None,
) -> Path:
    outcomes = run_presets(store, presets)
    ew = ExcelWriter()

    ws = ew.add_sheet("Summary")
    row = ew.write_title(
        ws, "RETAIL DB",
        f"Query Report  |  {len(store.table_names())} tables, {store.row_count():,} rows"
        f"  |  Generated {pd.Timestamp.now():%B %d, %Y}",
    )

    for outcome in outcomes:
        row = ew.write_section(ws, row, outcome.preset.label)
        if not outcome.ok:
            row = ew.write_note(ws, row, f"Skipped: {outcome.error}") + 1
            continue

        kind = outcome.preset.kind
        if kind == QueryKind.FILTERED_TOTAL:
            row = ew.write_kpi(ws, row, outcome.result.total, f"{outcome.result.matched} MATCHING ROWS")
        elif kind == QueryKind.PARSEABLE_AVERAGE:
            avg = outcome.result.average
            row = ew.write_kpi(ws, row, "N/A" if avg is None else avg,
                               f"AVERAGE OVER {outcome.result.counted} ROWS")
        else:
            detail = ew.add_sheet(outcome.preset.label)
            columns, rows, total = _table_layout(store, outcome)
            ew.write_table(detail, 1, columns, rows, total=total)
            row = ew.write_note(ws, row, f"{len(rows)} row(s) — see sheet '{detail.title}'") + 1

    ws.column_dimensions["A"].width = 48
    return ew.save(output_path)
