"""Week calendar and window package."""

from expense_review.weeks.calendar import (
    add_days,
    as_date,
    date_only_compare,
    format_short_date,
    parse_iso_date,
    to_iso_date,
    week_end,
    week_start,
)
from expense_review.weeks.window import WeekNavigator, WeekWindow, window_for

__all__ = [
    # Calendar utilities
    "add_days",
    "as_date",
    "date_only_compare",
    "format_short_date",
    "parse_iso_date",
    "to_iso_date",
    "week_end",
    "week_start",
    # Window
    "WeekNavigator",
    "WeekWindow",
    "window_for",
]
