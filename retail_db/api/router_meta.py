"""
Meta endpoints: health, table listing, reload.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from retail_db import config
from retail_db.data.errors import StoreError
from retail_db.data.loader import load_store
from retail_db.data.store import DataStore
from retail_db.api.dependencies import get_log, get_store, set_store
from retail_db.api.response_models import HealthResponse, TablesResponse
from retail_db.session_log import SessionLog

router = APIRouter(prefix="/api", tags=["meta"])


@router.get("/health", response_model=HealthResponse)
def health(store: DataStore = Depends(get_store)):
    return HealthResponse(status="ok", tables=len(store.table_names()), rows=store.row_count())


@router.get("/tables", response_model=TablesResponse)
def list_tables(store: DataStore = Depends(get_store)):
    return TablesResponse(tables=store.summary())


@router.post("/reload")
async def reload_data(log: SessionLog = Depends(get_log)):
    """Rebuild the store from the data source; the old store is kept on failure."""
    try:
        store = load_store(config.DATA_FILE)
    except (OSError, ValueError, StoreError) as exc:
        log.log(f"Reload from {config.DATA_FILE} failed: {exc}")
        raise HTTPException(500, f"Reload failed: {exc}")
    set_store(store)
    log.log(f"Reloaded {store.row_count()} rows from {config.DATA_FILE}")
    return {"status": "reloaded", "tables": store.summary()}
