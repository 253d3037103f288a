"""Weekly query package."""

from expense_review.queries.weekly import aggregate, filter_week, format_currency, grand_total

__all__ = ["aggregate", "filter_week", "format_currency", "grand_total"]
