"""
Expense pie chart.

Renders expenses_by_category output as a donut chart. Colors come from
the category catalog, looked up by display label; labels that are not
in the catalog get the fallback gray.
"""

import io
from decimal import Decimal
from typing import Optional, Sequence

import matplotlib
matplotlib.use("Agg")  # Non-interactive backend, Streamlit renders the figure
from matplotlib.figure import Figure

from financa_facil.analytics import category_color
from financa_facil.formatting import format_currency
from financa_facil.logs import get_logger
from financa_facil.models import CategoryTotal

logger = get_logger(__name__)


def render_expense_pie(
    category_totals: Sequence[CategoryTotal],
    title: Optional[str] = None,
) -> Optional[Figure]:
    """
    Build a donut chart of expenses per category.

    Returns:
        A matplotlib Figure, or None if there are no expenses to draw.
    """
    slices = [(label, total) for label, total in category_totals if total > 0]
    if not slices:
        return None

    labels = [label for label, _ in slices]
    values = [float(total) for _, total in slices]
    colors = [category_color(label) for label in labels]
    total = sum((t for _, t in slices), Decimal("0"))

    fig = Figure(figsize=(6, 4))
    ax = fig.add_subplot()

    wedges, _, autotexts = ax.pie(
        values,
        labels=None,
        autopct=lambda pct: f"{pct:.0f}%",
        colors=colors,
        startangle=90,
        pctdistance=0.78,
        wedgeprops=dict(width=0.45, edgecolor="white", linewidth=2),
    )

    for autotext in autotexts:
        autotext.set_color("white")
        autotext.set_fontsize(9)
        autotext.set_fontweight("bold")

    ax.legend(
        wedges,
        [f"{label}: {format_currency(t)}" for label, t in slices],
        loc="center left",
        bbox_to_anchor=(1, 0, 0.5, 1),
        fontsize=9,
        frameon=False,
    )
    ax.set_title(title or f"Gastos: {format_currency(total)}", fontsize=12, pad=12)
    ax.axis("equal")
    fig.tight_layout()

    logger.debug("expense_chart_rendered", categories=len(slices))
    return fig


def figure_to_png(fig: Figure) -> bytes:
    """PNG bytes of a rendered figure."""
    buf = io.BytesIO()
    fig.savefig(buf, format="png", dpi=150, bbox_inches="tight")
    return buf.getvalue()
