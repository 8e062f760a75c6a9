"""
Data Models Package

This package contains all Pydantic models used in Finança Fácil.
All data flowing through the ledger must conform to these schemas.
"""

from financa_facil.models.transaction import (
    DEFAULT_CATEGORIES,
    FALLBACK_COLOR,
    LEDGER_FORMAT_VERSION,
    MAX_AMOUNT_DIGITS,
    UNCATEGORIZED,
    Category,
    LedgerEnvelope,
    Transaction,
    TransactionDraft,
    TransactionType,
    amount_digits,
    find_category,
    find_category_by_name,
    is_known_category,
)
from financa_facil.models.summary import (
    CategoryTotal,
    DashboardSummary,
    Totals,
)
from financa_facil.models.validation import (
    ValidationIssue,
    ValidationResult,
)

__all__ = [
    # Transaction models
    "Category",
    "DEFAULT_CATEGORIES",
    "FALLBACK_COLOR",
    "LEDGER_FORMAT_VERSION",
    "MAX_AMOUNT_DIGITS",
    "LedgerEnvelope",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "UNCATEGORIZED",
    "amount_digits",
    "find_category",
    "find_category_by_name",
    "is_known_category",
    # Derived models
    "CategoryTotal",
    "DashboardSummary",
    "Totals",
    # Validation models
    "ValidationIssue",
    "ValidationResult",
]
