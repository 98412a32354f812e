"""Retail DB: in-memory multi-table store with CRUD and analytical queries."""

__version__ = "1.0.0"
