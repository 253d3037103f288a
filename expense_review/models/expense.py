"""
Core Data Models for Weekly Expense Review

These models define the strict schemas for all data flowing through the system.
They are designed to:
1. Enforce the record invariants at construction time
2. Provide clear validation error messages
3. Serialize to the persisted JSON layout without extra glue

DESIGN DECISION: ExpenseRecord is frozen. There is no edit operation;
a record is either in the ledger as created or deleted from it.
"""

import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any, Optional, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from expense_review.weeks.calendar import parse_iso_date, to_iso_date
from expense_review.weeks.window import WeekWindow


CENT = Decimal("0.01")
ZERO = Decimal("0.00")
# Largest amount a record may hold. Keeps cent rounding inside the default
# decimal context and keeps the stored JSON number exact as a double.
MAX_AMOUNT = Decimal("999999999999.99")


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class ExpenseCategory(str, Enum):
    """
    Supported expense categories.
    
    DESIGN DECISION: Declaration order is meaningful. Aggregation and
    chart series iterate in exactly this order, so do not sort or
    reorder these members.
    """
    FOOD = "Food"
    TRANSPORT = "Transport"
    HOUSING = "Housing"
    ENTERTAINMENT = "Entertainment"
    UTILITIES = "Utilities"
    HEALTH = "Health"
    SHOPPING = "Shopping"
    OTHER = "Other"
    
    @classmethod
    def ordered(cls) -> list["ExpenseCategory"]:
        return list(cls)
    
    @classmethod
    def from_value(cls, value: Any) -> Optional["ExpenseCategory"]:
        """Look up a category by its value; None if it is not one of ours."""
        try:
            return cls(value)
        except ValueError:
            return None
    
    @classmethod
    def fallback(cls, value: Any) -> "ExpenseCategory":
        """Unknown categories (e.g. from stale stored data) land in OTHER."""
        return cls.from_value(value) or cls.OTHER


# =============================================================================
# AMOUNT HELPERS
# =============================================================================

def parse_amount(value: Any) -> Optional[Decimal]:
    """
    Parse raw amount input into a finite Decimal.
    
    Accepts Decimal, int, float or numeric text (surrounding whitespace is
    ignored). Returns None for anything else, including booleans, empty
    text, trailing garbage, NaN and infinities.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, Decimal):
        parsed = value
    elif isinstance(value, (int, float)):
        # str() keeps floats like 4.5 from becoming 4.4999999...
        parsed = Decimal(str(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            parsed = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None
    
    if not parsed.is_finite():
        return None
    return parsed


def round_to_cents(amount: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero (ROUND_HALF_UP)."""
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def new_expense_id() -> str:
    """Opaque, practically collision-free record id."""
    return str(uuid4())


# =============================================================================
# CORE EXPENSE MODEL
# =============================================================================

class ExpenseRecord(BaseModel):
    """
    A single expense in the ledger.
    
    CRITICAL: Every ExpenseRecord that exists satisfies the invariants:
    positive amount in whole cents, non-blank description, known category,
    real calendar date. Raw user input goes through ExpenseValidator first.
    """
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)
    
    id: str = Field(
        default_factory=new_expense_id,
        min_length=1,
        description="Opaque unique record id"
    )
    description: str = Field(
        ...,
        min_length=1,
        description="What the money was spent on"
    )
    amount: Decimal = Field(
        ...,
        gt=0,
        le=MAX_AMOUNT,
        description="Amount spent, rounded to cents"
    )
    category: ExpenseCategory = Field(
        ...,
        description="Expense category"
    )
    date: datetime.date = Field(
        ...,
        description="Calendar date of the expense (no time-of-day)"
    )
    
    @field_validator('amount', mode='before')
    @classmethod
    def parse_raw_amount(cls, v: Any) -> Decimal:
        parsed = parse_amount(v)
        if parsed is None:
            raise ValueError(f"Amount must be a finite number, got {v!r}")
        return parsed
    
    @field_validator('amount')
    @classmethod
    def quantize_amount(cls, v: Decimal) -> Decimal:
        if v > MAX_AMOUNT:
            raise ValueError(f"Amount must not exceed {MAX_AMOUNT}")
        rounded = round_to_cents(v)
        if rounded <= 0:
            raise ValueError("Amount must be at least 0.01 after rounding")
        return rounded
    
    @field_validator('category', mode='before')
    @classmethod
    def coerce_category(cls, v: Any) -> ExpenseCategory:
        return ExpenseCategory.fallback(v)
    
    @field_validator('date', mode='before')
    @classmethod
    def parse_date(cls, v: Any) -> datetime.date:
        if isinstance(v, datetime.datetime):
            raise ValueError("Expense date must be a calendar date, not a datetime")
        if isinstance(v, datetime.date):
            return v
        parsed = parse_iso_date(v)
        if parsed is None:
            raise ValueError(f"Expense date must be YYYY-MM-DD, got {v!r}")
        return parsed
    
    @field_serializer('amount', when_used='json')
    def serialize_amount(self, v: Decimal) -> float:
        return float(v)
    
    def to_storage_dict(self) -> dict:
        """Convert to the persisted JSON object layout."""
        return self.model_dump(mode="json")


class ExpenseDraft(BaseModel):
    """
    Raw, unvalidated add-expense input.
    
    This is what the user typed. Nothing here is trusted until it has
    been through ExpenseValidator.
    """
    
    description: Any = ""
    amount: Any = ""
    category: Any = ExpenseCategory.FOOD.value
    date: Any = ""
    
    @classmethod
    def blank(cls, today: datetime.date) -> "ExpenseDraft":
        """The reset form: nothing typed, Food selected, dated today."""
        return cls(
            description="",
            amount="",
            category=ExpenseCategory.FOOD.value,
            date=to_iso_date(today),
        )


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""
    
    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_format', 'invalid_value')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        default="error",
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """
    Result of validating one ExpenseDraft.
    
    Issues are listed in the order the checks ran.
    """
    
    validated_at: datetime.datetime = Field(
        default_factory=datetime.datetime.utcnow
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )
    
    @property
    def is_valid(self) -> bool:
        return not self.has_errors
    
    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)
    
    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")
    
    @property
    def first_error(self) -> Optional[ValidationIssue]:
        return next((i for i in self.issues if i.severity == "error"), None)


# =============================================================================
# AGGREGATION MODELS
# =============================================================================

class CategoryTotals(BaseModel):
    """
    Per-category sums for one week, plus the grand total.
    
    Every category is present, in ExpenseCategory declaration order,
    whether or not anything was spent on it.
    """
    model_config = ConfigDict(frozen=True)
    
    totals: dict[ExpenseCategory, Decimal] = Field(
        default_factory=dict,
        description="Sum of amounts per category"
    )
    grand_total: Decimal = Field(
        default=ZERO,
        description="Sum over all categories"
    )
    
    @model_validator(mode='before')
    @classmethod
    def fill_all_categories(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        given = data.get("totals") or {}
        ordered = {}
        for category in ExpenseCategory:
            value = given.get(category, given.get(category.value, ZERO))
            ordered[category] = value
        return {**data, "totals": ordered}
    
    def __getitem__(self, category: Union[ExpenseCategory, str]) -> Decimal:
        key = ExpenseCategory.from_value(category)
        if key is None:
            raise KeyError(category)
        return self.totals[key]
    
    def items(self) -> list[tuple[ExpenseCategory, Decimal]]:
        return list(self.totals.items())
    
    def as_chart_series(self) -> tuple[list[str], list[float]]:
        """
        Labels and values for a pie or bar chart.
        
        Both lists follow category declaration order.
        """
        labels = [category.value for category in self.totals]
        values = [float(amount) for amount in self.totals.values()]
        return labels, values


class WeeklySummary(BaseModel):
    """Everything a presentation layer needs to draw one week."""
    
    window: WeekWindow
    window_label: str
    expenses: list[ExpenseRecord] = Field(default_factory=list)
    totals: CategoryTotals
    formatted_total: str
    
    @property
    def expense_count(self) -> int:
        return len(self.expenses)
    
    @property
    def is_empty(self) -> bool:
        return not self.expenses
