"""
Two-Stage Form Validation

DESIGN DECISION: Raw form input goes through two stages before it may
become a TransactionDraft:

STAGE 1 - SCHEMA VALIDATION:
- Required field presence
- Amount parsing (accepts "12.50", "12,50" and "1.234,56")
- Transaction type and date format

STAGE 2 - SEMANTIC VALIDATION:
- Dates too far in the future
- Unusually large amounts
- Categories outside the catalog

Stage 2 only runs when stage 1 passes. Errors block the append, warnings
are shown to the user but never block.

IMPORTANT: Validation NEVER silently fixes issues.
"""

from datetime import date, datetime, time, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Union

from financa_facil.config import AppSettings, get_settings
from financa_facil.logs import get_logger
from financa_facil.models import (
    MAX_AMOUNT_DIGITS,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
    amount_digits,
    is_known_category,
)

logger = get_logger(__name__)


class TransactionValidationError(ValueError):
    """Raised by build_draft when the form has error-level issues."""

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(messages or "Invalid transaction")


def parse_amount(raw: Any) -> Optional[Decimal]:
    """
    Parse an amount typed by the user.

    Returns None when the value cannot be read as a finite number.
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, (int, float)):
        value = Decimal(str(raw))
    else:
        text = str(raw).strip().replace("R$", "").replace(" ", "")
        if not text:
            return None
        if "," in text:
            # pt-BR: '.' groups thousands, ',' marks decimals
            text = text.replace(".", "").replace(",", ".")
        try:
            value = Decimal(text)
        except InvalidOperation:
            return None

    if not value.is_finite():
        return None
    return value


def parse_form_date(raw: Union[date, datetime, str, None]) -> Optional[datetime]:
    """
    Turn the form's date into a timezone-aware datetime.

    A bare calendar date ('YYYY-MM-DD') becomes midnight UTC of that day.
    None means today.
    """
    if raw is None:
        raw = datetime.now(timezone.utc).date()

    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=timezone.utc)

    if isinstance(raw, date):
        return datetime.combine(raw, time.min, tzinfo=timezone.utc)

    text = str(raw).strip()
    try:
        parsed = date.fromisoformat(text)
    except ValueError:
        return None
    return datetime.combine(parsed, time.min, tzinfo=timezone.utc)


class TransactionFormValidator:
    """
    Validates the add-transaction form.

    Stage 1: Schema validation
    Stage 2: Semantic validation
    """

    def __init__(self, settings: Optional[AppSettings] = None):
        self._settings = settings or get_settings().app

    def _validate_schema(
        self,
        amount: Any,
        description: Optional[str],
        type: Any,
        date: Any,
    ) -> list[ValidationIssue]:
        """Stage 1: presence and format checks."""
        issues = []

        if amount is None or (isinstance(amount, str) and not amount.strip()):
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing",
                message="Informe um valor",
                severity="error",
            ))
        else:
            value = parse_amount(amount)
            if value is None:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_format",
                    message=f"Valor inválido: {amount!r}",
                    severity="error",
                    suggested_fix="Use apenas números, por exemplo 49,90",
                ))
            elif value <= 0:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="invalid_value",
                    message="O valor deve ser maior que zero",
                    severity="error",
                ))
            elif amount_digits(value) > MAX_AMOUNT_DIGITS:
                issues.append(ValidationIssue(
                    field="amount",
                    issue_type="too_precise",
                    message=f"O valor tem mais de {MAX_AMOUNT_DIGITS} dígitos",
                    severity="error",
                    suggested_fix="Use no máximo duas casas decimais",
                ))

        if not description or not description.strip():
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Informe uma descrição",
                severity="error",
                suggested_fix="Ex: Mercado, Salário, Uber",
            ))

        try:
            TransactionType(type)
        except ValueError:
            issues.append(ValidationIssue(
                field="type",
                issue_type="invalid_value",
                message=f"Tipo de transação inválido: {type!r}",
                severity="error",
                suggested_fix="Escolha Entrada ou Saída",
            ))

        if parse_form_date(date) is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Data inválida: {date!r}",
                severity="error",
                suggested_fix="Use o formato AAAA-MM-DD",
            ))

        return issues

    def _validate_semantic(
        self,
        amount: Decimal,
        category: Optional[str],
        when: datetime,
    ) -> list[ValidationIssue]:
        """Stage 2: plausibility checks. Only warnings."""
        issues = []

        tolerance = timedelta(days=self._settings.future_date_tolerance_days)
        if when > datetime.now(timezone.utc) + tolerance:
            issues.append(ValidationIssue(
                field="date",
                issue_type="future_date",
                message=f"A data ({when.date().isoformat()}) está no futuro",
                severity="warning",
                suggested_fix="Confira se a data está correta",
            ))

        max_amount = Decimal(str(self._settings.max_transaction_amount))
        if amount > max_amount:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"O valor ({amount:,.2f}) parece muito alto",
                severity="warning",
                suggested_fix="Confira se o valor está correto",
            ))

        if not category or not is_known_category(category):
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Categoria desconhecida: {category!r}",
                severity="warning",
                suggested_fix="Escolha uma das categorias da lista",
            ))

        return issues

    def validate(
        self,
        amount: Any,
        description: Optional[str],
        type: Any,
        category: Optional[str],
        date: Any = None,
    ) -> ValidationResult:
        """
        Run both stages over raw form values.

        Args:
            amount: Number or text typed by the user
            description: Free-text label
            type: "income" or "expense" (or a TransactionType)
            category: Category id
            date: date, datetime, 'YYYY-MM-DD' string, or None for today

        Returns:
            ValidationResult with all issues found
        """
        issues = self._validate_schema(amount, description, type, date)

        if not any(issue.severity == "error" for issue in issues):
            issues.extend(self._validate_semantic(
                parse_amount(amount),
                category,
                parse_form_date(date),
            ))

        warnings = [issue.message for issue in issues if issue.severity == "warning"]
        is_valid = not any(issue.severity == "error" for issue in issues)

        if not is_valid:
            logger.info(
                "transaction_form_rejected",
                fields=sorted({i.field for i in issues if i.severity == "error"}),
            )

        return ValidationResult(is_valid=is_valid, issues=issues, warnings=warnings)

    def build_draft(
        self,
        amount: Any,
        description: Optional[str],
        type: Any,
        category: Optional[str],
        date: Any = None,
    ) -> TransactionDraft:
        """
        Validate and build a draft ready for the ledger.

        Raises:
            TransactionValidationError: if any error-level issue was found
        """
        result = self.validate(amount, description, type, category, date)
        if not result.is_valid:
            raise TransactionValidationError(result)

        return TransactionDraft(
            amount=parse_amount(amount),
            date=parse_form_date(date),
            description=description,
            category=category or "",
            type=TransactionType(type),
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Text shown under the form."""
        if result.is_valid and not result.warnings:
            return "✅ Tudo certo!"

        lines = []

        if not result.is_valid:
            lines.append("❌ Corrija os campos abaixo:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"   • {issue.message}")
                    if issue.suggested_fix:
                        lines.append(f"     💡 {issue.suggested_fix}")

        if result.warnings:
            if lines:
                lines.append("")
            lines.append("⚠️ Confira:")
            for warning in result.warnings:
                lines.append(f"   • {warning}")

        return "\n".join(lines)
