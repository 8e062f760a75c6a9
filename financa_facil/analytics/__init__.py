"""Analytics package."""

from financa_facil.analytics.engine import (
    balance,
    build_dashboard_summary,
    category_color,
    category_label,
    expenses_by_category,
    recent_transactions,
    sorted_by_date_descending,
    totals,
)

__all__ = [
    "balance",
    "build_dashboard_summary",
    "category_color",
    "category_label",
    "expenses_by_category",
    "recent_transactions",
    "sorted_by_date_descending",
    "totals",
]
