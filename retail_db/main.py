"""
Retail DB — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from retail_db import __version__, config
from retail_db.data.errors import StoreError
from retail_db.data.loader import load_store
from retail_db.data.store import DataStore
from retail_db.api.dependencies import set_log, set_store
from retail_db.api.router_meta import router as meta_router
from retail_db.api.router_tables import router as tables_router
from retail_db.api.router_queries import router as queries_router
from retail_db.session_log import SessionLog


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load the data source once at startup."""
    log = SessionLog(config.LOG_FILE)
    set_log(log)

    print(f"  RETAIL_DB_DATA_FILE = {config.DATA_FILE}")
    try:
        store = load_store(config.DATA_FILE)
        log.log(f"Loaded {store.row_count()} rows from {config.DATA_FILE}")
    except (OSError, ValueError, StoreError) as exc:
        print(f"  Could not load data: {exc} (starting with an empty store)")
        log.log(f"Load from {config.DATA_FILE} failed: {exc}")
        store = DataStore().load([])
    set_store(store)

    print(f"\nRetail DB ready — {len(store.table_names())} tables, {store.row_count():,} rows\n")
    yield
    log.log("Session finished")


def create_app() -> FastAPI:
    app = FastAPI(
        title="Retail DB API",
        description="In-memory retail tables — record CRUD and analytical queries",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(tables_router)
    app.include_router(queries_router)
    return app


app = create_app()
