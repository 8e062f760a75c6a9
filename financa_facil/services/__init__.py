"""Services package."""

from financa_facil.services.chart import figure_to_png, render_expense_pie
from financa_facil.services.storage import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    QuotaExceededError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Chart services
    "figure_to_png",
    "render_expense_pie",
    # Storage services
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "QuotaExceededError",
    "StorageError",
    "StorageUnavailableError",
]
