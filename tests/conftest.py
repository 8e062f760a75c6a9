"""Shared fixtures: in-memory stores, ledgers and sample transactions."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from financa_facil.config import get_settings
from financa_facil.ledger import IntroPreference, LedgerStore
from financa_facil.models import Transaction, TransactionDraft, TransactionType
from financa_facil.services.storage import InMemoryKeyValueStore


def make_transaction(
    id: str,
    amount,
    type: TransactionType,
    category: str = "other",
    when: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
    description: str = "Teste",
) -> Transaction:
    return Transaction(
        id=id,
        amount=Decimal(str(amount)),
        date=when,
        description=description,
        category=category,
        type=type,
    )


def make_draft(
    amount,
    type: TransactionType = TransactionType.EXPENSE,
    category: str = "food",
    when: datetime = datetime(2024, 1, 1, tzinfo=timezone.utc),
    description: str = "Teste",
) -> TransactionDraft:
    return TransactionDraft(
        amount=Decimal(str(amount)),
        date=when,
        description=description,
        category=category,
        type=type,
    )


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch):
    """Each test reads settings from a clean environment."""
    for name in ("GEMINI_API_KEY", "FINANCA_STRICT_CATEGORIES", "FINANCA_STORAGE_BACKEND"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def storage():
    return InMemoryKeyValueStore()


@pytest.fixture
def store(storage):
    return LedgerStore(storage)


@pytest.fixture
def intro(storage):
    return IntroPreference(storage)


@pytest.fixture
def sample_transactions():
    """Salary, groceries and a bus ticket on three different days."""
    return [
        make_transaction(
            "t1", 3000, TransactionType.INCOME, "income",
            datetime(2024, 3, 1, tzinfo=timezone.utc), "Salário",
        ),
        make_transaction(
            "t2", "250.40", TransactionType.EXPENSE, "food",
            datetime(2024, 3, 5, tzinfo=timezone.utc), "Mercado",
        ),
        make_transaction(
            "t3", "4.40", TransactionType.EXPENSE, "transport",
            datetime(2024, 3, 3, tzinfo=timezone.utc), "Ônibus",
        ),
    ]
