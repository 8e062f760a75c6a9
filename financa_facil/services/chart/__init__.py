"""Chart rendering."""

from financa_facil.services.chart.pie_chart import figure_to_png, render_expense_pie

__all__ = ["figure_to_png", "render_expense_pie"]
