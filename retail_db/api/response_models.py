"""
Pydantic request/response schemas for the API.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    tables: int
    rows: int


class TableInfo(BaseModel):
    name: str
    headers: list[str]
    rows: int


class TablesResponse(BaseModel):
    tables: list[TableInfo]


class RecordsResponse(BaseModel):
    table: str
    headers: list[str]
    records: list[dict[str, str]]


class RecordResponse(BaseModel):
    table: str
    record: dict[str, str]


class RecordCreate(BaseModel):
    values: dict[str, str]
    id_field: Optional[str] = None
    reject_duplicate_ids: Optional[bool] = None


class RecordUpdate(BaseModel):
    values: dict[str, Optional[str]]


class FieldChangeModel(BaseModel):
    field: str
    old: str
    new: str


class EditResponse(BaseModel):
    table: str
    changes: list[FieldChangeModel]


class DeleteResponse(BaseModel):
    table: str
    removed: int
