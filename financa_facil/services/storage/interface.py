"""
Abstract Key-Value Storage Interface

DESIGN DECISION: The ledger talks to a tiny synchronous, string-keyed
store modelled on browser localStorage. This allows us to:
1. Keep the whole ledger in one named slot
2. Use in-memory storage for testing
3. Swap the JSON file for something else later
4. Keep ledger logic decoupled from where the bytes live

Values are opaque strings. Serialization is the caller's job.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStore(ABC):
    """
    Abstract interface for local key-value storage.

    Implementations must be synchronous: a read always observes
    the most recently completed write.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under a key.

        Args:
            key: Slot name

        Returns:
            The stored string, or None if the slot is empty

        Raises:
            StorageUnavailableError: If the backing storage cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store a value, replacing whatever the slot held.

        Args:
            key: Slot name
            value: String to store

        Raises:
            QuotaExceededError: If the store would grow past its quota
            StorageUnavailableError: If the backing storage cannot be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Empty a slot. Removing a missing key is not an error.

        Raises:
            StorageUnavailableError: If the backing storage cannot be written
        """
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List the occupied slots."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The backing storage could not be read or written."""
    pass


class QuotaExceededError(StorageError):
    """The write would take the store past its size quota."""

    def __init__(self, required_bytes: int, quota_bytes: int):
        self.required_bytes = required_bytes
        self.quota_bytes = quota_bytes
        super().__init__(
            f"Storage quota exceeded: {required_bytes} bytes needed, "
            f"{quota_bytes} allowed"
        )


def serialized_size(items: dict[str, str]) -> int:
    """Size in bytes of a store's contents, counted as UTF-8 keys plus values."""
    return sum(
        len(key.encode("utf-8")) + len(value.encode("utf-8"))
        for key, value in items.items()
    )
