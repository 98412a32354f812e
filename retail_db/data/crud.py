"""
Identifier-keyed add / find / edit / delete on a store table.

The identifier field is chosen per call; tables may use different ones.
Policies carried over from the retail workbook tool:
  - add accepts duplicate identifiers unless uniqueness is switched on
    (config.REJECT_DUPLICATE_IDS or reject_duplicate_ids=True)
  - delete removes every record with the identifier, not just the first
  - edit only applies values that are non-empty and actually different
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from retail_db import config
from retail_db.data.errors import DuplicateId, NotFound, SchemaMismatch
from retail_db.data.record import Record, to_text
from retail_db.data.schemas import FieldChange
from retail_db.data.store import DataStore


def add(
    store: DataStore,
    table: str,
    record: Mapping[str, Any],
    id_field: Optional[str] = None,
    reject_duplicate_ids: Optional[bool] = None,
) -> Record:
    """Append *record* to *table* and return the stored copy."""
    t = store.table(table)
    if reject_duplicate_ids is None:
        reject_duplicate_ids = config.REJECT_DUPLICATE_IDS

    if reject_duplicate_ids and id_field:
        id_value = to_text(Record(record).get(id_field, ""))
        if t.find_first(id_field, id_value) is not None:
            raise DuplicateId(table, id_field, id_value)

    return t.append(record)


def find_by_id(store: DataStore, table: str, id_field: str, id_value: str) -> Record | None:
    """First record whose *id_field* equals *id_value* (exact match)."""
    return store.table(table).find_first(id_field, id_value)


def edit(
    store: DataStore,
    table: str,
    id_field: str,
    id_value: str,
    updates: Mapping[str, Optional[str]],
) -> list[FieldChange]:
    """Apply *updates* to the first record with the identifier.

    Blank, None and unchanged values are skipped per field. Returns the
    changes actually made, in update order.
    """
    t = store.table(table)
    target = t.find_first(id_field, id_value)
    if target is None:
        raise NotFound(table, id_field, id_value)

    unknown = [f for f in updates if t.resolve_field(f) is None]
    if unknown:
        raise SchemaMismatch(f"cannot edit unknown fields {unknown}", table=table)

    changes: list[FieldChange] = []
    for field, new_value in updates.items():
        name = t.resolve_field(field)
        new_text = to_text(new_value)
        current = target[name]
        if not new_text or new_text == current:
            continue
        target[name] = new_text
        changes.append(FieldChange(name, current, new_text))
    return changes


def delete_by_id(store: DataStore, table: str, id_field: str, id_value: str) -> int:
    """Remove all records with the identifier; returns how many went."""
    removed = store.table(table).remove_where(id_field, id_value)
    if removed == 0:
        raise NotFound(table, id_field, id_value)
    return removed
