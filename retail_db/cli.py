#!/usr/bin/env python3
"""
Retail DB CLI — interactive menu, one-shot queries, Excel report, API server.

USAGE:
  retail-db menu                                   # Interactive console (default)
  retail-db --data shop.xlsx menu --table Sales    # Pick the source and table
  retail-db tables                                 # List loaded tables
  retail-db view Sales                             # Print a table
  retail-db query                                  # Run every preset query
  retail-db query --name top_products              # Run one preset
  retail-db report --output reports/q.xlsx         # Preset results as Excel
  retail-db serve --port 8000                      # Start API server
"""
from __future__ import annotations

import argparse
import os
import sys
from datetime import datetime
from pathlib import Path

from retail_db import config
from retail_db.data.errors import StoreError
from retail_db.data.loader import load_store
from retail_db.data.store import DataStore
from retail_db.analytics.presets import describe, load_presets, run_presets
from retail_db.session_log import SessionLog


def _load() -> DataStore:
    print(f"Loading {config.DATA_FILE}...")
    return load_store(config.DATA_FILE)


def cmd_menu(args, log: SessionLog):
    """Interactive console session."""
    from retail_db.console import ConsoleSession

    store = _load()
    log.log(f"Loaded {store.row_count()} rows from {config.DATA_FILE}")
    ConsoleSession(store, log, table=args.table, id_field=args.id_field).run()


def cmd_tables(args, log: SessionLog):
    store = _load()
    print(f"\nTABLES ({len(store.table_names())}):\n")
    for info in store.summary():
        print(f"  {info['name']:<24}{info['rows']:>8,} rows   {', '.join(info['headers'])}")


def cmd_view(args, log: SessionLog):
    store = _load()
    table = store.table(args.table)
    log.log(f"Viewing table '{table.name}'")
    print("\t".join(table.headers()))
    for record in table.all():
        print("\t".join(record.values()))


def cmd_query(args, log: SessionLog):
    store = _load()
    presets = load_presets()
    if args.name:
        presets = [p for p in presets if p.name in args.name]
        if not presets:
            print(f"  No preset named {args.name}")
            return

    log.log("Running queries")
    print()
    for outcome in run_presets(store, presets):
        lines = describe(outcome)
        print("\n".join(lines))
        log.log(f"Query: {lines[0]}")


def cmd_report(args, log: SessionLog):
    from retail_db.reports.query_report import generate_excel

    store = _load()
    output = Path(args.output) if args.output else (
        config.REPORTS_FOLDER / f"Query_Report_{datetime.now():%Y%m%d_%H%M%S}.xlsx"
    )
    path = generate_excel(store, output)
    log.log(f"Wrote query report to {path}")
    print(f"\nReport saved to: {path}\n")


def cmd_serve(args, log: SessionLog):
    """Start the API server."""
    import uvicorn

    os.environ["RETAIL_DB_DATA_FILE"] = str(config.DATA_FILE)
    print(f"\nStarting Retail DB API on port {args.port}...")
    uvicorn.run("retail_db.main:app", host="0.0.0.0", port=args.port, reload=args.reload,
                timeout_keep_alive=65)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="retail-db",
        description="Retail DB — in-memory retail tables with CRUD and queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", help=f"Workbook, CSV or directory (default {config.DATA_FILE})")
    parser.add_argument("--log", help=f"Session log file (default {config.LOG_FILE})")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    menu_parser = subparsers.add_parser("menu", help="Interactive console menu")
    menu_parser.add_argument("--table", help="Table to start on")
    menu_parser.add_argument("--id-field", default=config.ID_FIELD, help="Identifier field")
    menu_parser.set_defaults(func=cmd_menu)

    tables_parser = subparsers.add_parser("tables", help="List tables")
    tables_parser.set_defaults(func=cmd_tables)

    view_parser = subparsers.add_parser("view", help="Print a table")
    view_parser.add_argument("table", help="Table name")
    view_parser.set_defaults(func=cmd_view)

    query_parser = subparsers.add_parser("query", help="Run preset queries")
    query_parser.add_argument("--name", nargs="*", help="Preset name(s); default all")
    query_parser.set_defaults(func=cmd_query)

    report_parser = subparsers.add_parser("report", help="Write preset results to Excel")
    report_parser.add_argument("--output", help="Output .xlsx path")
    report_parser.set_defaults(func=cmd_report)

    serve_parser = subparsers.add_parser("serve", help="Start API server")
    serve_parser.add_argument("--port", type=int, default=int(os.environ.get("PORT", "8000")), help="Port (default 8000)")
    serve_parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    serve_parser.set_defaults(func=cmd_serve)

    argv = sys.argv[1:] if argv is None else argv
    args = parser.parse_args(argv)
    if not args.command:
        args = parser.parse_args([*argv, "menu"])

    if args.data:
        config.DATA_FILE = Path(args.data)
    if args.log:
        config.LOG_FILE = Path(args.log)

    log = SessionLog(config.LOG_FILE)
    try:
        args.func(args, log)
    except (FileNotFoundError, ValueError, StoreError) as exc:
        log.log(f"Error: {exc}")
        print(f"Error: {exc}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
