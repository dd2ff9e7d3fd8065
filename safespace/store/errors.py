# safespace/store/errors.py


class StoreError(Exception):
    """A CRUD call against the data store failed."""

    def __init__(self, table: str, message: str):
        super().__init__(f"{table}: {message}")
        self.table = table
        self.message = message


class RowNotFound(StoreError):
    pass
