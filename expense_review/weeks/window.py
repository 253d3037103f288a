"""
Week Window Calculator

The weekly view is driven by a single piece of state: the anchor date.
The window (Monday..Sunday around the anchor) is derived from it on
every access and never stored.
"""

from datetime import date
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator

from expense_review.weeks.calendar import (
    DAYS_IN_WEEK,
    DateLike,
    add_days,
    as_date,
    date_only_compare,
    format_short_date,
    parse_iso_date,
    week_end,
    week_start,
)


class WeekWindow(BaseModel):
    """
    Inclusive seven-day span, Monday to Sunday.
    
    Derived from an anchor date; never persisted.
    """
    model_config = ConfigDict(frozen=True)
    
    start: date = Field(
        ...,
        description="Monday on or before the anchor"
    )
    end: date = Field(
        ...,
        description="Sunday on or after the anchor"
    )
    
    @model_validator(mode='after')
    def validate_span(self) -> 'WeekWindow':
        if self.start.weekday() != 0:
            raise ValueError("Week window must start on a Monday")
        if (self.end - self.start).days != DAYS_IN_WEEK - 1:
            raise ValueError("Week window must span exactly seven days")
        return self
    
    def contains(self, value: DateLike) -> bool:
        """Inclusive at both ends."""
        return (
            date_only_compare(value, self.start) >= 0
            and date_only_compare(value, self.end) <= 0
        )
    
    def days(self) -> list[date]:
        return [add_days(self.start, offset) for offset in range(DAYS_IN_WEEK)]
    
    def label(self) -> str:
        """Display label, e.g. 'Mar 11 - Mar 17, 2024'."""
        return f"{format_short_date(self.start)} - {format_short_date(self.end)}, {self.end.year}"


def window_for(anchor: DateLike) -> WeekWindow:
    """Compute the week window containing ``anchor``."""
    return WeekWindow(start=week_start(anchor), end=week_end(anchor))


class WeekNavigator:
    """
    Holds the anchor date and moves it around.
    
    Only the anchor is state. Every move re-derives the full window
    from the new anchor.
    """
    
    ALLOWED_SHIFTS = (DAYS_IN_WEEK, -DAYS_IN_WEEK)
    
    def __init__(self, anchor: Optional[DateLike] = None):
        self._anchor = as_date(anchor) if anchor is not None else date.today()
    
    @property
    def anchor(self) -> date:
        return self._anchor
    
    @property
    def window(self) -> WeekWindow:
        return window_for(self._anchor)
    
    def shift(self, days: int) -> WeekWindow:
        """
        Move the anchor one week forward or back.
        
        Args:
            days: +7 or -7
        
        Raises:
            ValueError: for any other step
        """
        if days not in self.ALLOWED_SHIFTS:
            raise ValueError(f"Anchor can only move by +7 or -7 days, got {days}")
        self._anchor = add_days(self._anchor, days)
        return self.window
    
    def next_week(self) -> WeekWindow:
        return self.shift(DAYS_IN_WEEK)
    
    def previous_week(self) -> WeekWindow:
        return self.shift(-DAYS_IN_WEEK)
    
    def jump_to(self, value: Union[DateLike, str]) -> bool:
        """
        Set the anchor directly.
        
        Accepts a date, a datetime, or a YYYY-MM-DD string. An unparseable
        string leaves the anchor where it was.
        
        Returns:
            True if the anchor was changed
        """
        if isinstance(value, str):
            parsed = parse_iso_date(value)
            if parsed is None:
                return False
            self._anchor = parsed
            return True
        
        self._anchor = as_date(value)
        return True
