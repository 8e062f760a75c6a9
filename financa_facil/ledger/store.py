"""
Ledger Store

Holds the contract between the in-memory transaction list and the single
persisted slot in local storage.

DESIGN DECISION: Persistence is best-effort.
- load() never raises: absent, unreadable or malformed data is an empty ledger
- save() never raises: failures are logged and reported as False
- There is no rollback. The caller's in-memory list is the source of truth;
  if a save fails, the change lives until the next reload and is then lost.

The slot holds a versioned envelope:
    {"version": 1, "transactions": [...]}
Older data written as a bare JSON array is still read.
"""

import json
from decimal import Decimal
from typing import Iterable, Optional, Sequence
from uuid import uuid4

from pydantic import ValidationError

from financa_facil.logs import get_logger
from financa_facil.models.transaction import (
    LEDGER_FORMAT_VERSION,
    UNCATEGORIZED,
    LedgerEnvelope,
    Transaction,
    TransactionDraft,
    is_known_category,
)
from financa_facil.services.storage import KeyValueStore, StorageError

logger = get_logger(__name__)

DEFAULT_TRANSACTIONS_KEY = "financa_facil_transactions_v1"


class LedgerStore:
    """
    Load/save the ledger and mint new transactions.

    The store itself keeps no transaction state; it only knows how
    to read and write the slot.
    """

    def __init__(
        self,
        storage: KeyValueStore,
        key: str = DEFAULT_TRANSACTIONS_KEY,
        strict_categories: bool = False,
    ):
        """
        Args:
            storage: Key-value store holding the slot.
            key: Name of the slot.
            strict_categories: When True, append() files unknown
                categories under 'uncategorized'.
        """
        self._storage = storage
        self._key = key
        self._strict_categories = strict_categories

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> list[Transaction]:
        """
        Read the persisted ledger.

        Returns an empty list if the slot is absent, unreadable or
        malformed. Records that fail validation are skipped; a repeated
        id keeps its first occurrence.
        """
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            logger.error("ledger_load_failed", key=self._key, error=str(e))
            return []

        if raw is None:
            return []

        records = self._parse_records(raw)
        if records is None:
            return []

        transactions = []
        seen_ids = set()
        for index, record in enumerate(records):
            try:
                transaction = Transaction.model_validate(record)
            except ValidationError as e:
                logger.warning(
                    "ledger_record_skipped",
                    key=self._key,
                    index=index,
                    error_count=e.error_count(),
                )
                continue

            if transaction.id in seen_ids:
                logger.warning(
                    "ledger_duplicate_id_skipped",
                    key=self._key,
                    transaction_id=transaction.id,
                )
                continue

            seen_ids.add(transaction.id)
            transactions.append(transaction)

        logger.debug("ledger_loaded", key=self._key, count=len(transactions))
        return transactions

    def _parse_records(self, raw: str) -> Optional[list]:
        """Decode the slot into a list of raw records, or None if unusable."""
        try:
            data = json.loads(raw, parse_float=Decimal)
        except (json.JSONDecodeError, TypeError, RecursionError) as e:
            logger.error("ledger_malformed", key=self._key, error=str(e))
            return None

        # Legacy layout: bare array, no version
        if isinstance(data, list):
            return data

        try:
            envelope = LedgerEnvelope.model_validate(data)
        except ValidationError as e:
            logger.error(
                "ledger_malformed",
                key=self._key,
                error=f"invalid envelope ({e.error_count()} errors)",
            )
            return None

        if envelope.version > LEDGER_FORMAT_VERSION:
            logger.error(
                "ledger_version_unsupported",
                key=self._key,
                version=envelope.version,
                supported=LEDGER_FORMAT_VERSION,
            )
            return None

        return envelope.transactions

    def save(self, transactions: Iterable[Transaction]) -> bool:
        """
        Overwrite the slot with the full collection.

        Returns True if the write went through. Never raises.
        """
        try:
            envelope = {
                "version": LEDGER_FORMAT_VERSION,
                "transactions": [t.model_dump(mode="json") for t in transactions],
            }
            payload = json.dumps(envelope, ensure_ascii=False)
            self._storage.set_item(self._key, payload)
        except (StorageError, TypeError, ValueError) as e:
            logger.error("ledger_save_failed", key=self._key, error=str(e))
            return False

        logger.debug("ledger_saved", key=self._key, count=len(envelope["transactions"]))
        return True

    def append(self, draft: TransactionDraft) -> Transaction:
        """
        Turn a draft into a transaction with a fresh id.

        The caller adds the result to its collection and calls save().
        """
        if self._strict_categories and not is_known_category(draft.category):
            logger.info(
                "ledger_category_uncategorized",
                category=draft.category,
            )
            draft = draft.model_copy(update={"category": UNCATEGORIZED.id})

        return Transaction.from_draft(draft, str(uuid4()))

    @staticmethod
    def remove(
        transactions: Sequence[Transaction],
        transaction_id: str,
    ) -> list[Transaction]:
        """
        Return a new list without the matching transaction.

        A missing id is not an error: the result equals the input.
        """
        return [t for t in transactions if t.id != transaction_id]
