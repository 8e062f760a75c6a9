"""
JSON File Storage Implementation

DESIGN DECISION: The on-device store is a single JSON object file
mapping slot names to strings, the same shape as localStorage.

TRADEOFFS:
- The whole file is rewritten on every write (fine at personal scale)
- No locking: one process, one user
- Writes go through a temporary file and an atomic replace, so a crash
  mid-write leaves the previous file intact

The file is read on every get_item so that a read always observes the
latest completed write, even one made by another store instance.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Optional

from financa_facil.services.storage.interface import (
    KeyValueStore,
    QuotaExceededError,
    StorageUnavailableError,
    serialized_size,
)


class JsonFileKeyValueStore(KeyValueStore):
    """
    File-backed implementation of the key-value store.

    The file is created lazily on the first write.
    """

    def __init__(self, path: Path, quota_bytes: Optional[int] = None):
        self._path = Path(path)
        self._quota_bytes = quota_bytes

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        """Read the whole file. A missing file is an empty store."""
        if not self._path.exists():
            return {}

        try:
            raw = self._path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Failed to read {self._path}: {e}")

        if not raw.strip():
            return {}

        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, RecursionError) as e:
            raise StorageUnavailableError(f"Storage file {self._path} is corrupt: {e}")

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in data.items()
        ):
            raise StorageUnavailableError(
                f"Storage file {self._path} does not hold a string map"
            )

        return data

    def _write_all(self, items: dict[str, str]) -> None:
        """Atomically replace the file contents."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                    json.dump(items, tmp, ensure_ascii=False)
                os.replace(tmp_name, self._path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {self._path}: {e}")

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        items = self._read_all()
        items[key] = value

        if self._quota_bytes is not None:
            required = serialized_size(items)
            if required > self._quota_bytes:
                raise QuotaExceededError(required, self._quota_bytes)

        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key in items:
            del items[key]
            self._write_all(items)

    def keys(self) -> list[str]:
        return list(self._read_all())
