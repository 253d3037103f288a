"""
Expense Validation and Building

DESIGN DECISION: Raw add-form input goes through one gate before it can
become an ExpenseRecord. The checks run in a fixed order:

1. Description is not blank (after trimming)
2. Amount parses to a finite number
3. Amount is positive, at most MAX_AMOUNT, and still positive once
   rounded to cents
4. Date is present and a real YYYY-MM-DD date
5. Category is one of the fixed categories

Normalization is limited to what the record needs: the description is
trimmed, the amount is rounded to cents with ROUND_HALF_UP (9.999 -> 10.00,
2.675 -> 2.68) and the date string is kept as typed.

IMPORTANT: Validation has no side effects. A refused draft leaves the
caller's input untouched; clearing the form is the caller's decision.
"""

from typing import Optional

from expense_review.models.expense import (
    MAX_AMOUNT,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
    new_expense_id,
    parse_amount,
    round_to_cents,
)
from expense_review.weeks.calendar import parse_iso_date


class ExpenseValidationError(Exception):
    """Draft could not be turned into an expense record."""
    
    def __init__(self, result: ValidationResult):
        self.result = result
        first = result.first_error
        message = first.message if first else "Expense is not valid"
        super().__init__(message)


class ExpenseValidator:
    """
    Validates expense drafts and builds records from valid ones.
    """
    
    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        """
        Run every check against the draft.
        
        Never raises; all problems are reported in the result.
        """
        issues = []
        
        description = draft.description.strip() if isinstance(draft.description, str) else ""
        if not description:
            issues.append(ValidationIssue(
                field="description",
                issue_type="missing",
                message="Description is required",
            ))
        
        amount = parse_amount(draft.amount)
        if amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_format",
                message=f"Amount must be a number, got {draft.amount!r}",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
            ))
        elif amount > MAX_AMOUNT:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="out_of_range",
                message=f"Amount must not exceed {MAX_AMOUNT}",
            ))
        elif round_to_cents(amount) <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="rounds_to_zero",
                message=f"Amount {amount} is less than one cent",
            ))
        
        if draft.date is None or (isinstance(draft.date, str) and not draft.date.strip()):
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing",
                message="Date is required",
            ))
        elif parse_iso_date(draft.date) is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="invalid_format",
                message=f"Date must be a real date in YYYY-MM-DD form, got {draft.date!r}",
            ))
        
        if ExpenseCategory.from_value(draft.category) is None:
            issues.append(ValidationIssue(
                field="category",
                issue_type="invalid_value",
                message=f"Unknown category: {draft.category!r}",
            ))
        
        return ValidationResult(issues=issues)
    
    def build(
        self,
        draft: ExpenseDraft,
        expense_id: Optional[str] = None,
    ) -> ExpenseRecord:
        """
        Build a record from a draft.
        
        Args:
            draft: Raw form input
            expense_id: Id to use instead of a freshly generated one
        
        Returns:
            A new ExpenseRecord
        
        Raises:
            ExpenseValidationError: If any check fails
        """
        result = self.validate(draft)
        if not result.is_valid:
            raise ExpenseValidationError(result)
        
        return ExpenseRecord(
            id=expense_id or new_expense_id(),
            description=draft.description.strip(),
            amount=round_to_cents(parse_amount(draft.amount)),
            category=ExpenseCategory(draft.category),
            date=parse_iso_date(draft.date),
        )
    
    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """One line per problem, for showing next to the add form."""
        if result.is_valid:
            return "Looks good."
        return "\n".join(f"• {issue.message}" for issue in result.issues)
