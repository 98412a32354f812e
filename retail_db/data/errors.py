"""
Store error hierarchy. Raised by the store, CRUD and query layers; callers
report and continue.
"""
from __future__ import annotations


class StoreError(Exception):
    """Base class for every data store error."""


class MissingTable(StoreError):
    """A referenced table is not in the store."""

    def __init__(self, table: str) -> None:
        self.table = table
        super().__init__(f"Table not found: '{table}'")


class NotFound(StoreError):
    """No record carries the requested identifier."""

    def __init__(self, table: str, id_field: str, id_value: str) -> None:
        self.table = table
        self.id_field = id_field
        self.id_value = id_value
        super().__init__(f"No record in '{table}' with {id_field} = '{id_value}'")


class SchemaMismatch(StoreError):
    """A record's fields disagree with its table header."""

    def __init__(self, message: str, table: str | None = None) -> None:
        self.table = table
        super().__init__(f"{table}: {message}" if table else message)


class DuplicateId(StoreError):
    """Raised on add when identifier uniqueness is enforced and already taken."""

    def __init__(self, table: str, id_field: str, id_value: str) -> None:
        self.table = table
        self.id_field = id_field
        self.id_value = id_value
        super().__init__(f"'{table}' already has a record with {id_field} = '{id_value}'")
