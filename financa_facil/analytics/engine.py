"""
Analytics Engine

DESIGN DECISION: Every aggregate is a pure function of the transaction list.
Nothing is cached or persisted. Views call these functions again whenever
the ledger changes.

None of these functions mutate their input.
"""

from decimal import Decimal
from typing import Iterable, Sequence

from financa_facil.models.summary import CategoryTotal, DashboardSummary, Totals
from financa_facil.models.transaction import (
    FALLBACK_COLOR,
    Transaction,
    TransactionType,
    find_category,
    find_category_by_name,
)


def totals(transactions: Iterable[Transaction]) -> Totals:
    """Sum amounts into the income and expenses buckets."""
    income = Decimal("0")
    expenses = Decimal("0")

    for t in transactions:
        if t.type == TransactionType.INCOME:
            income += t.amount
        elif t.type == TransactionType.EXPENSE:
            expenses += t.amount

    return Totals(income=income, expenses=expenses)


def balance(t: Totals) -> Decimal:
    """Income minus expenses. May be negative."""
    return t.income - t.expenses


def category_label(category_id: str) -> str:
    """Display name for a category id, or the raw id if unknown."""
    category = find_category(category_id)
    return category.name if category else category_id


def category_color(label: str) -> str:
    """Chart color for a display label; unknown labels get the fallback gray."""
    category = find_category_by_name(label)
    return category.color if category else FALLBACK_COLOR


def expenses_by_category(transactions: Iterable[Transaction]) -> list[CategoryTotal]:
    """
    Sum expenses per category label.

    Groups appear in the order their first expense was seen, which is
    deterministic for a given input order. Consumers should not rely on
    any other ordering.
    """
    groups: dict[str, Decimal] = {}

    for t in transactions:
        if t.type != TransactionType.EXPENSE:
            continue
        label = category_label(t.category)
        groups[label] = groups.get(label, Decimal("0")) + t.amount

    return [CategoryTotal(label, total) for label, total in groups.items()]


def sorted_by_date_descending(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Newest first. Transactions with equal dates keep their input order."""
    return sorted(transactions, key=lambda t: t.date, reverse=True)


def recent_transactions(transactions: Iterable[Transaction], n: int) -> list[Transaction]:
    """The n newest transactions."""
    if n <= 0:
        return []
    return sorted_by_date_descending(transactions)[:n]


def build_dashboard_summary(
    transactions: Sequence[Transaction],
    recent_limit: int = 5,
) -> DashboardSummary:
    """Recompute everything the dashboard shows from the current ledger."""
    t = totals(transactions)
    return DashboardSummary(
        totals=t,
        balance=balance(t),
        expenses_by_category=expenses_by_category(transactions),
        recent=recent_transactions(transactions, recent_limit),
        transaction_count=len(transactions),
    )
