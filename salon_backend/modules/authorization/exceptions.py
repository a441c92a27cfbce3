from typing import Any


class DataAccessError(Exception):
    """Raised when an ownership read against the data store fails or times out."""

    def __init__(self, table: str, instance_id: Any, message: str = ""):
        self.table = table
        self.instance_id = instance_id
        super().__init__(message or f"Failed to read {table} {instance_id}")
