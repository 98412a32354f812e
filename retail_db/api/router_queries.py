"""
Query endpoints — one per query shape, plus presets and the Excel report.
"""
from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import FileResponse, JSONResponse

from retail_db import config
from retail_db.data.errors import StoreError
from retail_db.data.store import DataStore
from retail_db.analytics import queries
from retail_db.analytics.common import sanitize_for_json
from retail_db.api.dependencies import get_log, get_store, http_error
from retail_db.reports import query_report
from retail_db.session_log import SessionLog

router = APIRouter(prefix="/api/queries", tags=["queries"])


def _safe_json(data) -> JSONResponse:
    return JSONResponse(content=sanitize_for_json(data))


def _run(fn, *args, **kwargs):
    try:
        return fn(*args, **kwargs)
    except StoreError as exc:
        raise http_error(exc)


@router.get("/filtered-total")
def filtered_total(
    table: str,
    filter_field: str,
    filter_value: str,
    factor: list[str] = Query(..., description="Fields multiplied per row"),
    store: DataStore = Depends(get_store),
):
    """Sum of the product of the factor fields over rows matching the filter."""
    return _safe_json(_run(queries.filtered_total, store, table, filter_field, filter_value, factor))


@router.get("/average")
def average(table: str, field: str, store: DataStore = Depends(get_store)):
    """Average of a field over the rows where it parses."""
    return _safe_json(_run(queries.parseable_average, store, table, field))


@router.get("/group-counts")
def group_counts(table: str, group_field: str, store: DataStore = Depends(get_store)):
    return _safe_json({"groups": _run(queries.group_counts, store, table, group_field)})


@router.get("/top-groups")
def top_groups(
    fact_table: str,
    group_field: str,
    value_field: str,
    dim_table: str,
    dim_id_field: str,
    dim_name_field: str,
    n: Optional[int] = Query(None, ge=0),
    store: DataStore = Depends(get_store),
):
    """Top-N groups by summed value, named from the dimension table."""
    result = _run(queries.top_groups, store, fact_table, group_field, value_field,
                  dim_table, dim_id_field, dim_name_field, n)
    return _safe_json({"groups": result})


@router.get("/ranked")
def ranked(
    table: str,
    rank_field: str,
    other_field: str,
    n: Optional[int] = Query(None, ge=0),
    store: DataStore = Depends(get_store),
):
    result = _run(queries.ranked_rows, store, table, rank_field, other_field, n)
    return _safe_json({"headers": store.table(table).headers(), "rows": result})


@router.get("/anti-join")
def anti_join(
    dim_table: str,
    dim_id_field: str,
    fact_table: str,
    fact_fk_field: str,
    store: DataStore = Depends(get_store),
):
    """Dimension rows never referenced by the fact table."""
    rows = _run(queries.anti_join, store, dim_table, dim_id_field, fact_table, fact_fk_field)
    return _safe_json({"headers": store.table(dim_table).headers(), "rows": rows})


@router.get("/presets")
def presets(store: DataStore = Depends(get_store), log: SessionLog = Depends(get_log)):
    """Every configured preset query."""
    data = query_report.generate_json(store)
    log.log(f"Ran {len(data['queries'])} preset queries")
    return _safe_json(data)


@router.get("/report/excel")
def report_excel(store: DataStore = Depends(get_store), log: SessionLog = Depends(get_log)):
    """Preset query results as an Excel download."""
    out_path = query_report.generate_excel(store, config.REPORTS_FOLDER / "Query_Report.xlsx")
    log.log(f"Wrote query report to {out_path}")
    return FileResponse(
        path=str(out_path),
        filename=out_path.name,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    )
