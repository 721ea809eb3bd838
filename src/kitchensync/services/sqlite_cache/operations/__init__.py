"""Cache table operations."""

from kitchensync.services.sqlite_cache.operations.base import BaseOperation
from kitchensync.services.sqlite_cache.operations.insert import InsertOperations
from kitchensync.services.sqlite_cache.operations.query import QueryOperations
from kitchensync.services.sqlite_cache.operations.update import UpdateOperations

__all__ = [
    "BaseOperation",
    "InsertOperations",
    "QueryOperations",
    "UpdateOperations",
]
