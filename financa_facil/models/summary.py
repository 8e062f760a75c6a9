"""
Derived Models

Aggregates computed from the ledger. These are never persisted -
they are rebuilt from the transaction list every time they are needed.
"""

from decimal import Decimal
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict, Field

from financa_facil.models.transaction import Transaction


class Totals(BaseModel):
    """Sum of amounts per transaction type."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = Field(default=Decimal("0"))
    expenses: Decimal = Field(default=Decimal("0"))

    @property
    def balance(self) -> Decimal:
        """Net balance. May be negative."""
        return self.income - self.expenses


class CategoryTotal(NamedTuple):
    """One slice of the expenses-by-category breakdown."""
    label: str
    total: Decimal


class DashboardSummary(BaseModel):
    """Everything the dashboard shows, computed in one pass over the ledger."""
    model_config = ConfigDict(frozen=True)

    totals: Totals
    balance: Decimal
    expenses_by_category: list[CategoryTotal] = Field(default_factory=list)
    recent: list[Transaction] = Field(default_factory=list)
    transaction_count: int = Field(default=0, ge=0)

    @property
    def has_expenses(self) -> bool:
        return len(self.expenses_by_category) > 0
