from safespace.store.errors import RowNotFound, StoreError
from safespace.store.tables import TABLES, Table, TableStore

__all__ = ["RowNotFound", "StoreError", "TABLES", "Table", "TableStore"]
