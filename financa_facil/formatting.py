"""
Display formatting (pt-BR).

Amounts are shown as Brazilian reais ("R$ 1.234,56") and dates in the
short "dd/mm" form used on the dashboard and history lists.
"""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Union


def format_currency(value: Union[Decimal, int, float]) -> str:
    """Format an amount as BRL, e.g. R$ 1.234,56 or -R$ 50,00."""
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""

    # 1,234.56 -> 1.234,56
    text = f"{abs(amount):,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")

    return f"{sign}R$ {text}"


def format_short_date(value: datetime) -> str:
    """Day and month, e.g. 05/03."""
    return value.strftime("%d/%m")


def format_signed_amount(value: Decimal, is_income: bool) -> str:
    """History rows: '+ R$ 10,00' for income, '- R$ 10,00' for expenses."""
    return f"{'+' if is_income else '-'} {format_currency(value)}"
