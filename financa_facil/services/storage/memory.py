"""
In-Memory Storage Implementation

Used by the tests and by the 'memory' backend (a session that
forgets everything when the process exits).
"""

from typing import Optional

from financa_facil.services.storage.interface import (
    KeyValueStore,
    QuotaExceededError,
    serialized_size,
)


class InMemoryKeyValueStore(KeyValueStore):
    """Dictionary-backed store with an optional size quota."""

    def __init__(
        self,
        initial: Optional[dict[str, str]] = None,
        quota_bytes: Optional[int] = None,
    ):
        self._items: dict[str, str] = dict(initial or {})
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            candidate = {**self._items, key: value}
            required = serialized_size(candidate)
            if required > self._quota_bytes:
                raise QuotaExceededError(required, self._quota_bytes)
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)
