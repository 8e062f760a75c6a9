"""Tests for the analytics engine."""

from datetime import datetime, timezone
from decimal import Decimal

from financa_facil.analytics import (
    balance,
    build_dashboard_summary,
    category_color,
    category_label,
    expenses_by_category,
    recent_transactions,
    sorted_by_date_descending,
    totals,
)
from financa_facil.models import FALLBACK_COLOR, Totals, TransactionType

from tests.conftest import make_transaction


def day(n: int) -> datetime:
    return datetime(2024, 1, n, tzinfo=timezone.utc)


def three_entry_ledger():
    return [
        make_transaction("a", 100, TransactionType.INCOME, "income", day(1)),
        make_transaction("b", 30, TransactionType.EXPENSE, "food", day(2)),
        make_transaction("c", 20, TransactionType.EXPENSE, "food", day(3)),
    ]


class TestThreeEntryLedger:
    """One income and two food expenses on consecutive days."""

    def test_totals(self):
        assert totals(three_entry_ledger()) == Totals(
            income=Decimal("100"), expenses=Decimal("50")
        )

    def test_balance(self):
        assert balance(totals(three_entry_ledger())) == Decimal("50")

    def test_expenses_by_category(self):
        assert expenses_by_category(three_entry_ledger()) == [("Alimentação", 50)]

    def test_recent_transactions(self):
        recent = recent_transactions(three_entry_ledger(), 2)
        assert [t.id for t in recent] == ["c", "b"]


class TestEmptyLedger:
    """Every aggregate of an empty ledger is zero or empty."""

    def test_totals(self):
        assert totals([]) == Totals(income=Decimal("0"), expenses=Decimal("0"))

    def test_balance(self):
        assert balance(totals([])) == 0

    def test_expenses_by_category(self):
        assert expenses_by_category([]) == []

    def test_recent_transactions(self):
        assert recent_transactions([], 5) == []


class TestAggregateProperties:
    """Identities that hold for any ledger."""

    def test_balance_is_income_minus_expenses(self, sample_transactions):
        t = totals(sample_transactions)
        assert balance(t) == t.income - t.expenses
        assert balance(t) == Decimal("2745.20")

    def test_bucket_sums(self, sample_transactions):
        t = totals(sample_transactions)
        assert t.income == sum(
            (x.amount for x in sample_transactions if x.is_income), Decimal("0")
        )
        assert t.expenses == sum(
            (x.amount for x in sample_transactions if x.is_expense), Decimal("0")
        )

    def test_category_sums_equal_expenses(self, sample_transactions):
        groups = expenses_by_category(sample_transactions)
        assert sum((g.total for g in groups), Decimal("0")) == totals(sample_transactions).expenses

    def test_unknown_category_uses_raw_id(self):
        ledger = [make_transaction("x", 5, TransactionType.EXPENSE, "pets")]
        assert expenses_by_category(ledger) == [("pets", Decimal("5"))]

    def test_income_never_appears_in_categories(self):
        ledger = [make_transaction("x", 5, TransactionType.INCOME, "income")]
        assert expenses_by_category(ledger) == []

    def test_groups_in_first_seen_order(self):
        ledger = [
            make_transaction("1", 1, TransactionType.EXPENSE, "transport"),
            make_transaction("2", 1, TransactionType.EXPENSE, "food"),
            make_transaction("3", 1, TransactionType.EXPENSE, "transport"),
        ]
        assert [g.label for g in expenses_by_category(ledger)] == ["Transporte", "Alimentação"]

    def test_inputs_are_not_mutated(self):
        ledger = three_entry_ledger()
        before = list(ledger)
        sorted_by_date_descending(ledger)
        recent_transactions(ledger, 1)
        expenses_by_category(ledger)
        assert ledger == before


class TestSorting:
    """Newest-first ordering."""

    def test_sorted_newest_first(self):
        ordered = sorted_by_date_descending(three_entry_ledger())
        assert [t.id for t in ordered] == ["c", "b", "a"]

    def test_sort_is_stable_for_equal_dates(self):
        ledger = [
            make_transaction("first", 1, TransactionType.EXPENSE, when=day(5)),
            make_transaction("older", 1, TransactionType.EXPENSE, when=day(1)),
            make_transaction("second", 1, TransactionType.EXPENSE, when=day(5)),
        ]
        ordered = sorted_by_date_descending(ledger)
        assert [t.id for t in ordered] == ["first", "second", "older"]

    def test_recent_is_a_prefix_of_sorted(self, sample_transactions):
        ordered = sorted_by_date_descending(sample_transactions)
        assert recent_transactions(sample_transactions, 2) == ordered[:2]

    def test_recent_larger_than_ledger(self, sample_transactions):
        assert len(recent_transactions(sample_transactions, 50)) == 3

    def test_recent_non_positive(self, sample_transactions):
        assert recent_transactions(sample_transactions, 0) == []
        assert recent_transactions(sample_transactions, -1) == []


class TestCategoryLookups:
    """Labels and chart colors."""

    def test_label(self):
        assert category_label("health") == "Saúde"
        assert category_label("mystery") == "mystery"

    def test_color(self):
        assert category_color("Alimentação") == "#f59e0b"
        assert category_color("mystery") == FALLBACK_COLOR


class TestDashboardSummary:
    """The bundle the dashboard renders."""

    def test_summary(self):
        summary = build_dashboard_summary(three_entry_ledger(), recent_limit=1)

        assert summary.balance == Decimal("50")
        assert summary.totals.expenses == Decimal("50")
        assert summary.expenses_by_category == [("Alimentação", 50)]
        assert [t.id for t in summary.recent] == ["c"]
        assert summary.transaction_count == 3
        assert summary.has_expenses

    def test_empty_summary(self):
        summary = build_dashboard_summary([])
        assert summary.balance == 0
        assert summary.recent == []
        assert not summary.has_expenses
