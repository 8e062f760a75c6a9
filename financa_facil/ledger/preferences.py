"""
UI Preferences

The only preference today is whether the user has already left the
landing page. It lives in its own slot, next to the ledger, and is
read and written with the same fail-soft rules.
"""

from financa_facil.logs import get_logger
from financa_facil.services.storage import KeyValueStore, StorageError

logger = get_logger(__name__)

DEFAULT_INTRO_KEY = "financa_facil_intro_seen"


class IntroPreference:
    """The 'intro seen' flag, stored as the string "true"."""

    def __init__(self, storage: KeyValueStore, key: str = DEFAULT_INTRO_KEY):
        self._storage = storage
        self._key = key

    def is_seen(self) -> bool:
        try:
            return self._storage.get_item(self._key) == "true"
        except StorageError as e:
            logger.warning("intro_flag_read_failed", key=self._key, error=str(e))
            return False

    def mark_seen(self) -> bool:
        try:
            self._storage.set_item(self._key, "true")
        except StorageError as e:
            logger.warning("intro_flag_write_failed", key=self._key, error=str(e))
            return False
        return True
