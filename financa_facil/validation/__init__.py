"""Form validation package."""

from financa_facil.validation.validator import (
    TransactionFormValidator,
    TransactionValidationError,
    parse_amount,
    parse_form_date,
)

__all__ = [
    "TransactionFormValidator",
    "TransactionValidationError",
    "parse_amount",
    "parse_form_date",
]
