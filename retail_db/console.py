"""
Interactive console menu over a loaded store.

Drives the CRUD and query layers and writes the session log around every
operation. Store errors are reported and the loop carries on.
"""
from __future__ import annotations

from typing import Callable, Optional

from retail_db import config
from retail_db.data import crud
from retail_db.data.errors import NotFound, StoreError
from retail_db.data.store import DataStore
from retail_db.analytics.presets import describe, run_presets
from retail_db.session_log import SessionLog

MENU = [
    ("1", "View table"),
    ("2", "Delete record"),
    ("3", "Edit record"),
    ("4", "Add record"),
    ("5", "Run queries"),
    ("6", "Switch table"),
    ("0", "Exit"),
]


class ConsoleSession:
    """One user's menu loop. ``input_fn``/``output_fn`` are swappable for tests."""

    def __init__(
        self,
        store: DataStore,
        log: SessionLog,
        table: Optional[str] = None,
        id_field: str = config.ID_FIELD,
        input_fn: Optional[Callable[[str], str]] = None,
        output_fn: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.store = store
        self.log = log
        self.id_field = id_field
        self._input = input_fn or input
        self._out = output_fn or print
        names = store.table_names()
        if table is None:
            table = config.SALES_TABLE if config.SALES_TABLE in store else (names[0] if names else None)
        self.table = table
        self._actions = {
            "1": self.view,
            "2": self.delete,
            "3": self.edit,
            "4": self.add,
            "5": self.queries,
            "6": self.switch_table,
        }

    # ------------------------------------------------------------------
    # Loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        while True:
            self._out("")
            self._out(f"=== Retail DB — table: {self.table or '(none)'} ===")
            for key, label in MENU:
                self._out(f"  {key}. {label}")
            try:
                choice = self._input("Select an option: ").strip()
            except EOFError:
                choice = "0"

            if choice == "0":
                self.log.log("Session finished")
                self._out("Goodbye.")
                return

            action = self._actions.get(choice)
            if action is None:
                self._out("Unknown option, try again.")
                continue
            try:
                action()
            except StoreError as exc:
                self.log.log(f"Error: {exc}")
                self._out(f"Error: {exc}")

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def view(self) -> None:
        table = self.store.table(self.table)
        self.log.log(f"Viewing table '{table.name}'")
        self._out(f"\nContents of '{table.name}':")
        if len(table) == 0:
            self._out("Table is empty.")
            return
        self._out("\t".join(table.headers()))
        for record in table.all():
            self._out("\t".join(record.values()))

    def delete(self) -> None:
        id_value = self._input(f"{self.id_field} of the record to delete: ")
        try:
            removed = crud.delete_by_id(self.store, self.table, self.id_field, id_value)
        except NotFound:
            self.log.log(f"Delete of {self.id_field} {id_value}: not found")
            self._out("No record with that identifier.")
            return
        self.log.log(f"Deleted {removed} record(s) with {self.id_field} {id_value}")
        self._out(f"Deleted {removed} record(s).")

    def edit(self) -> None:
        id_value = self._input(f"{self.id_field} of the record to edit: ")
        record = crud.find_by_id(self.store, self.table, self.id_field, id_value)
        if record is None:
            self.log.log(f"Edit of {self.id_field} {id_value}: not found")
            self._out("No record with that identifier.")
            return

        self.log.log(f"Editing record {self.id_field} {id_value}")
        self._out("Press Enter to keep the current value.")
        updates = {
            field: self._input(f"{field} (current: {value}): ")
            for field, value in record.items()
        }
        changes = crud.edit(self.store, self.table, self.id_field, id_value, updates)
        for change in changes:
            self.log.log(f"Changed {change.field} from '{change.old}' to '{change.new}'")
        self.log.log(f"Finished editing {self.id_field} {id_value} ({len(changes)} change(s))")
        self._out(f"Record updated ({len(changes)} field(s) changed).")

    def add(self) -> None:
        table = self.store.table(self.table)
        self.log.log(f"Adding a record to '{table.name}'")
        values = {field: self._input(f"{field}: ") for field in table.headers()}
        stored = crud.add(self.store, table.name, values, id_field=self.id_field)
        self.log.log(f"Added record with {self.id_field} {stored.get(self.id_field, '')}")
        self._out("Record added.")

    def queries(self) -> None:
        self.log.log("Running queries")
        for outcome in run_presets(self.store):
            lines = describe(outcome)
            for line in lines:
                self._out(line)
            self.log.log(f"Query: {lines[0]}")

    def switch_table(self) -> None:
        names = self.store.table_names()
        for i, name in enumerate(names, 1):
            self._out(f"  {i}. {name}")
        answer = self._input("Table number or name: ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(names):
            answer = names[int(answer) - 1]
        self.store.table(answer)
        self.table = answer
        self.log.log(f"Switched to table '{answer}'")
        self._out(f"Now using '{answer}'.")
