"""Ledger persistence package."""

from financa_facil.ledger.preferences import DEFAULT_INTRO_KEY, IntroPreference
from financa_facil.ledger.store import DEFAULT_TRANSACTIONS_KEY, LedgerStore

__all__ = [
    "DEFAULT_INTRO_KEY",
    "DEFAULT_TRANSACTIONS_KEY",
    "IntroPreference",
    "LedgerStore",
]
