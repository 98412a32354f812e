"""Tables, records, the in-memory store, CRUD and loading."""
from .errors import StoreError, MissingTable, NotFound, SchemaMismatch, DuplicateId
from .record import Record
from .table import Table
from .store import DataStore
from .loader import load_sources, load_store
