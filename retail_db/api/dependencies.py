"""
FastAPI dependencies — session store and log singletons, error mapping.
"""
from __future__ import annotations

from fastapi import HTTPException

from retail_db.data.errors import DuplicateId, MissingTable, NotFound, SchemaMismatch, StoreError
from retail_db.data.store import DataStore
from retail_db.session_log import SessionLog

# ---------------------------------------------------------------------------
# Session singletons (set during startup / reload)
# ---------------------------------------------------------------------------
_store: DataStore | None = None
_log: SessionLog | None = None


def set_store(store: DataStore) -> None:
    global _store
    _store = store


def get_store() -> DataStore:
    if _store is None or not _store.is_loaded:
        raise HTTPException(503, "Data not loaded yet")
    return _store


def set_log(log: SessionLog) -> None:
    global _log
    _log = log


def get_log() -> SessionLog:
    if _log is None:
        raise HTTPException(503, "Server not initialized yet")
    return _log


# ---------------------------------------------------------------------------
# Store errors → HTTP
# ---------------------------------------------------------------------------
_STATUS = {
    MissingTable: 404,
    NotFound: 404,
    SchemaMismatch: 422,
    DuplicateId: 409,
}


def http_error(exc: StoreError) -> HTTPException:
    return HTTPException(_STATUS.get(type(exc), 400), str(exc))
