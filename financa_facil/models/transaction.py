"""
Core Data Models for Finança Fácil

These models define the strict schemas for all data flowing through the ledger.
They are designed to:
1. Enforce type safety at runtime
2. Keep transactions immutable once created
3. Be serializable to the persisted JSON layout
4. Keep the category catalog in one place

DESIGN DECISION: Amounts are Decimal magnitudes. The direction of money
(in or out) is carried by the transaction type, never by the sign.
"""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
)


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class TransactionType(str, Enum):
    """Which aggregate bucket a transaction contributes to."""
    INCOME = "income"
    EXPENSE = "expense"


# =============================================================================
# CATEGORY CATALOG
# =============================================================================

class Category(BaseModel):
    """
    A spending/income category.

    Static configuration: only the id is stored on transactions.
    The icon is a glyph name understood by the presentation layer.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    icon: str
    color: str = Field(pattern="^#[0-9a-fA-F]{6}$")


DEFAULT_CATEGORIES: tuple[Category, ...] = (
    Category(id="food", name="Alimentação", icon="Utensils", color="#f59e0b"),
    Category(id="transport", name="Transporte", icon="Car", color="#3b82f6"),
    Category(id="bills", name="Contas", icon="Zap", color="#ef4444"),
    Category(id="leisure", name="Lazer", icon="Gamepad2", color="#8b5cf6"),
    Category(id="health", name="Saúde", icon="Heart", color="#ec4899"),
    Category(id="income", name="Renda", icon="Wallet", color="#10b981"),
    Category(id="other", name="Outros", icon="Circle", color="#64748b"),
)

# Not part of the catalog: only produced by strict-category mode
UNCATEGORIZED = Category(
    id="uncategorized", name="Sem categoria", icon="HelpCircle", color="#94a3b8"
)

FALLBACK_COLOR = "#94a3b8"

_CATEGORIES_BY_ID = {c.id: c for c in DEFAULT_CATEGORIES + (UNCATEGORIZED,)}
_CATEGORIES_BY_NAME = {c.name: c for c in DEFAULT_CATEGORIES + (UNCATEGORIZED,)}


def find_category(category_id: str) -> Optional[Category]:
    """Look up a category by id, including the uncategorized bucket."""
    return _CATEGORIES_BY_ID.get(category_id)


def find_category_by_name(name: str) -> Optional[Category]:
    """Look up a category by display name."""
    return _CATEGORIES_BY_NAME.get(name)


def is_known_category(category_id: str) -> bool:
    """True only for the seven catalog entries."""
    return any(c.id == category_id for c in DEFAULT_CATEGORIES)


# =============================================================================
# TRANSACTIONS
# =============================================================================

# A float holds any decimal of up to 15 significant digits exactly
MAX_AMOUNT_DIGITS = 15


def amount_digits(value: Decimal) -> int:
    """Significant digits of an amount, counted the way max_digits counts them."""
    _, digits, exponent = value.normalize().as_tuple()
    if exponent >= 0:
        return len(digits) + exponent
    return max(len(digits), -exponent)


class TransactionDraft(BaseModel):
    """
    A transaction as supplied by the form, before an id is assigned.

    The ledger accepts any category string; validation against the
    catalog is the form's (or strict mode's) business.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    amount: Decimal = Field(
        ...,
        ge=0,
        max_digits=MAX_AMOUNT_DIGITS,
        description="Magnitude of the transaction, currency agnostic"
    )
    date: datetime = Field(
        ...,
        description="When the transaction happened (timezone aware, UTC if naive)"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="Free-text label"
    )
    category: str = Field(
        ...,
        description="Category id (not validated against the catalog)"
    )
    type: TransactionType = Field(
        ...,
        description="income or expense"
    )

    @field_validator('date')
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        """Naive timestamps (e.g. '2024-01-01') are read as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @field_serializer('amount', when_used='json')
    def amount_as_number(self, v: Decimal) -> float:
        """The persisted layout stores amounts as JSON numbers."""
        return float(v)

    @property
    def is_income(self) -> bool:
        return self.type == TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == TransactionType.EXPENSE


class Transaction(TransactionDraft):
    """
    A recorded transaction.

    Immutable once created; the only lifecycle event after creation
    is deletion by id.
    """

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque unique identifier, never reused"
    )

    @classmethod
    def from_draft(cls, draft: TransactionDraft, transaction_id: str) -> "Transaction":
        """Attach an id to a draft."""
        return cls(id=transaction_id, **draft.model_dump(exclude={"id"}))

    def __str__(self) -> str:
        sign = "+" if self.is_income else "-"
        return f"{sign}{self.amount:.2f} | {self.category} | {self.date.date().isoformat()}"


# =============================================================================
# PERSISTED ENVELOPE
# =============================================================================

LEDGER_FORMAT_VERSION = 1


class LedgerEnvelope(BaseModel):
    """
    The JSON document stored in the ledger slot.

    Transactions are kept as raw values here so that one bad record
    does not invalidate the whole envelope; the store validates them
    one by one.
    """

    version: int = Field(
        default=LEDGER_FORMAT_VERSION,
        ge=1,
        description="Format version for future migrations"
    )
    transactions: list[Any] = Field(default_factory=list)
