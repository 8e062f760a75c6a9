"""
Tests for Finança Fácil models

Test strategy:
1. Unit tests for individual components (models, ledger, analytics)
2. Flow tests through the orchestrator with in-memory storage
3. No real API calls in tests (use mocks)
"""

import pytest
from datetime import datetime, timezone
from decimal import Decimal

from pydantic import ValidationError

from financa_facil.models import (
    DEFAULT_CATEGORIES,
    FALLBACK_COLOR,
    UNCATEGORIZED,
    Category,
    CategoryTotal,
    DashboardSummary,
    LedgerEnvelope,
    Totals,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    find_category,
    amount_digits,
    find_category_by_name,
    is_known_category,
)


class TestTransactionModels:
    """Tests for transaction-related Pydantic models."""

    def test_draft_creation(self):
        """Test TransactionDraft creation."""
        draft = TransactionDraft(
            amount=Decimal("49.90"),
            date=datetime(2024, 5, 2, tzinfo=timezone.utc),
            description="Farmácia",
            category="health",
            type=TransactionType.EXPENSE,
        )
        assert draft.amount == Decimal("49.90")
        assert draft.is_expense
        assert not draft.is_income

    def test_description_whitespace_is_stripped(self):
        """Test that whitespace is stripped from the description."""
        draft = TransactionDraft(
            amount=1,
            date=datetime(2024, 5, 2, tzinfo=timezone.utc),
            description="  Padaria  ",
            category="food",
            type="expense",
        )
        assert draft.description == "Padaria"

    def test_rejects_negative_amount(self):
        """Amounts are magnitudes; direction comes from the type."""
        with pytest.raises(ValidationError):
            TransactionDraft(
                amount=Decimal("-10"),
                date=datetime(2024, 5, 2, tzinfo=timezone.utc),
                description="X",
                category="food",
                type="expense",
            )

    def test_rejects_amount_beyond_float_precision(self):
        """Amounts that a JSON number cannot hold exactly are refused."""
        with pytest.raises(ValidationError):
            TransactionDraft(
                amount=Decimal("12345678901234567.89"),
                date=datetime(2024, 5, 2, tzinfo=timezone.utc),
                description="X",
                category="food",
                type="expense",
            )

    @pytest.mark.parametrize("value, expected", [
        (Decimal("1234.50"), 5),
        (Decimal("0.001"), 3),
        (Decimal("1E+20"), 21),
        (Decimal("9999999999999.99"), 15),
    ])
    def test_amount_digits(self, value, expected):
        assert amount_digits(value) == expected

    def test_rejects_unknown_type(self):
        """Only income and expense exist."""
        with pytest.raises(ValidationError):
            TransactionDraft(
                amount=1,
                date=datetime(2024, 5, 2, tzinfo=timezone.utc),
                description="X",
                category="food",
                type="transfer",
            )

    def test_naive_date_is_utc(self):
        """A date without timezone is read as UTC."""
        draft = TransactionDraft(
            amount=1,
            date="2024-01-01",
            description="X",
            category="food",
            type="expense",
        )
        assert draft.date == datetime(2024, 1, 1, tzinfo=timezone.utc)

    def test_any_category_string_is_accepted(self):
        """The model does not check the catalog."""
        draft = TransactionDraft(
            amount=1,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            description="X",
            category="pets",
            type="expense",
        )
        assert draft.category == "pets"

    def test_transaction_from_draft(self):
        """from_draft keeps every field and attaches the id."""
        draft = TransactionDraft(
            amount=Decimal("10"),
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            description="Cinema",
            category="leisure",
            type="expense",
        )
        transaction = Transaction.from_draft(draft, "abc")

        assert transaction.id == "abc"
        assert transaction.description == "Cinema"
        assert transaction.amount == Decimal("10")

    def test_transaction_is_immutable(self):
        """Transactions cannot be edited after creation."""
        transaction = Transaction(
            id="a",
            amount=1,
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            description="X",
            category="food",
            type="expense",
        )
        with pytest.raises(ValidationError):
            transaction.amount = Decimal("2")

    def test_json_dump_uses_numbers_and_iso_dates(self):
        """The persisted layout has numeric amounts and ISO dates."""
        transaction = Transaction(
            id="a",
            amount=Decimal("12.5"),
            date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            description="X",
            category="food",
            type="expense",
        )
        data = transaction.model_dump(mode="json")

        assert data["amount"] == 12.5
        assert data["date"].startswith("2024-01-01T00:00:00")
        assert data["type"] == "expense"


class TestCategoryCatalog:
    """Tests for the static category catalog."""

    def test_catalog_has_seven_entries(self):
        ids = [c.id for c in DEFAULT_CATEGORIES]
        assert ids == ["food", "transport", "bills", "leisure", "health", "income", "other"]

    def test_find_category(self):
        assert find_category("food").name == "Alimentação"
        assert find_category("unknown") is None

    def test_find_category_by_name(self):
        assert find_category_by_name("Transporte").id == "transport"
        assert find_category_by_name("Pets") is None

    def test_uncategorized_is_not_in_catalog(self):
        """The uncategorized bucket is findable but not a known category."""
        assert find_category(UNCATEGORIZED.id) == UNCATEGORIZED
        assert not is_known_category(UNCATEGORIZED.id)
        assert UNCATEGORIZED.color == FALLBACK_COLOR

    def test_color_must_be_hex(self):
        with pytest.raises(ValidationError):
            Category(id="x", name="X", icon="Circle", color="red")


class TestEnvelopeAndSummaryModels:
    """Tests for the persisted envelope and derived models."""

    def test_envelope_defaults(self):
        envelope = LedgerEnvelope()
        assert envelope.version == 1
        assert envelope.transactions == []

    def test_envelope_keeps_raw_records(self):
        """A broken record does not invalidate the envelope."""
        envelope = LedgerEnvelope.model_validate(
            {"version": 1, "transactions": [{"id": "a"}, 42]}
        )
        assert len(envelope.transactions) == 2

    def test_totals_balance(self):
        totals = Totals(income=Decimal("100"), expenses=Decimal("150"))
        assert totals.balance == Decimal("-50")

    def test_category_total_compares_as_tuple(self):
        assert CategoryTotal("Alimentação", Decimal("50")) == ("Alimentação", 50)

    def test_summary_has_expenses(self):
        summary = DashboardSummary(
            totals=Totals(),
            balance=Decimal("0"),
        )
        assert not summary.has_expenses
        assert summary.transaction_count == 0


class TestValidationModels:
    """Tests for validation models."""

    def test_validation_issue_creation(self):
        """Test ValidationIssue creation."""
        issue = ValidationIssue(
            field="amount",
            issue_type="missing",
            message="Informe um valor",
            severity="error",
        )
        assert issue.severity == "error"

    def test_validation_issue_rejects_bad_severity(self):
        with pytest.raises(ValidationError):
            ValidationIssue(
                field="amount",
                issue_type="missing",
                message="x",
                severity="fatal",
            )

    def test_validation_result_has_errors(self):
        """Test ValidationResult error detection."""
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(
                    field="amount",
                    issue_type="missing",
                    message="Informe um valor",
                    severity="error",
                ),
                ValidationIssue(
                    field="category",
                    issue_type="unknown_category",
                    message="Categoria desconhecida",
                    severity="warning",
                ),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1
        assert len(result.issues_for("category")) == 1
