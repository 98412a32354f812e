"""
Record endpoints — list, find, add, edit, delete by identifier.

Mutating routes are async so they run one at a time on the event loop;
the store has a single writer.
"""
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from retail_db import config
from retail_db.data import crud
from retail_db.data.errors import StoreError
from retail_db.data.store import DataStore
from retail_db.api.dependencies import get_log, get_store, http_error
from retail_db.api.response_models import (
    DeleteResponse, EditResponse, RecordCreate, RecordResponse, RecordUpdate, RecordsResponse,
)
from retail_db.session_log import SessionLog

router = APIRouter(prefix="/api/tables", tags=["records"])


@router.get("/{table}/records", response_model=RecordsResponse)
def list_records(table: str, store: DataStore = Depends(get_store)):
    try:
        t = store.table(table)
    except StoreError as exc:
        raise http_error(exc)
    return RecordsResponse(table=t.name, headers=t.headers(), records=[r.to_dict() for r in t.all()])


@router.get("/{table}/records/{id_value}", response_model=RecordResponse)
def get_record(
    table: str,
    id_value: str,
    id_field: str = Query(config.ID_FIELD),
    store: DataStore = Depends(get_store),
):
    try:
        record = crud.find_by_id(store, table, id_field, id_value)
    except StoreError as exc:
        raise http_error(exc)
    if record is None:
        raise HTTPException(404, f"No record in '{table}' with {id_field} = '{id_value}'")
    return RecordResponse(table=table, record=record.to_dict())


@router.post("/{table}/records", response_model=RecordResponse, status_code=201)
async def add_record(
    table: str,
    body: RecordCreate,
    store: DataStore = Depends(get_store),
    log: SessionLog = Depends(get_log),
):
    id_field = body.id_field or config.ID_FIELD
    try:
        stored = crud.add(store, table, body.values, id_field=id_field,
                          reject_duplicate_ids=body.reject_duplicate_ids)
    except StoreError as exc:
        log.log(f"Add to '{table}' failed: {exc}")
        raise http_error(exc)
    log.log(f"Added record to '{table}' with {id_field} {stored.get(id_field, '')}")
    return RecordResponse(table=table, record=stored.to_dict())


@router.patch("/{table}/records/{id_value}", response_model=EditResponse)
async def edit_record(
    table: str,
    id_value: str,
    body: RecordUpdate,
    id_field: str = Query(config.ID_FIELD),
    store: DataStore = Depends(get_store),
    log: SessionLog = Depends(get_log),
):
    try:
        changes = crud.edit(store, table, id_field, id_value, body.values)
    except StoreError as exc:
        log.log(f"Edit of {id_field} {id_value} in '{table}' failed: {exc}")
        raise http_error(exc)
    for change in changes:
        log.log(f"Changed {change.field} from '{change.old}' to '{change.new}' ({table} {id_field} {id_value})")
    return EditResponse(table=table, changes=[c._asdict() for c in changes])


@router.delete("/{table}/records/{id_value}", response_model=DeleteResponse)
async def delete_record(
    table: str,
    id_value: str,
    id_field: str = Query(config.ID_FIELD),
    store: DataStore = Depends(get_store),
    log: SessionLog = Depends(get_log),
):
    try:
        removed = crud.delete_by_id(store, table, id_field, id_value)
    except StoreError as exc:
        log.log(f"Delete of {id_field} {id_value} in '{table}' failed: {exc}")
        raise http_error(exc)
    log.log(f"Deleted {removed} record(s) from '{table}' with {id_field} {id_value}")
    return DeleteResponse(table=table, removed=removed)
