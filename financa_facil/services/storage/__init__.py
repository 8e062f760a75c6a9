"""
Storage Services Package

Provides the abstract key-value interface and its implementations.
The JSON file store is the default backend; the in-memory store is
used for tests and ephemeral sessions.
"""

from financa_facil.services.storage.interface import (
    KeyValueStore,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)
from financa_facil.services.storage.json_file import JsonFileKeyValueStore
from financa_facil.services.storage.memory import InMemoryKeyValueStore

__all__ = [
    # Interface
    "KeyValueStore",
    # Exceptions
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
]
