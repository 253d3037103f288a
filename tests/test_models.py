"""
Tests for Weekly Expense Review models

Test strategy:
1. Unit tests for individual components (models, validator, queries)
2. Integration tests for the session (with in-memory storage)
3. No real clock or filesystem outside tmp_path
"""

import pytest
from datetime import date, datetime
from decimal import Decimal

from expense_review.models import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
    CategoryTotals,
    ExpenseCategory,
    ExpenseDraft,
    ExpenseRecord,
    ValidationIssue,
    ValidationResult,
    parse_amount,
    round_to_cents,
)


class TestExpenseRecord:
    """Tests for the ExpenseRecord model."""
    
    def test_record_creation(self):
        record = ExpenseRecord(
            description="Coffee",
            amount="4.5",
            category="Food",
            date="2024-03-12",
        )
        assert record.description == "Coffee"
        assert record.amount == Decimal("4.50")
        assert record.category == ExpenseCategory.FOOD
        assert record.date == date(2024, 3, 12)
        assert record.id
    
    def test_record_ids_are_unique(self):
        ids = {
            ExpenseRecord(description="x", amount=1, category="Food", date="2024-03-12").id
            for _ in range(200)
        }
        assert len(ids) == 200
    
    def test_description_is_trimmed(self):
        record = ExpenseRecord(description="  Bus  ", amount=2, category="Transport", date="2024-03-12")
        assert record.description == "Bus"
    
    def test_blank_description_rejected(self):
        with pytest.raises(ValueError):
            ExpenseRecord(description="   ", amount=2, category="Transport", date="2024-03-12")
    
    @pytest.mark.parametrize("amount", [0, -1, "0", "abc", "NaN", "Infinity", True, None, "0.004", "1e30", "1000000000000"])
    def test_bad_amounts_rejected(self, amount):
        with pytest.raises(ValueError):
            ExpenseRecord(description="x", amount=amount, category="Food", date="2024-03-12")
    
    def test_amount_rounded_half_up(self):
        record = ExpenseRecord(description="x", amount="9.999", category="Food", date="2024-03-12")
        assert record.amount == Decimal("10.00")
        record = ExpenseRecord(description="x", amount="2.675", category="Food", date="2024-03-12")
        assert record.amount == Decimal("2.68")
    
    def test_unknown_category_falls_back_to_other(self):
        record = ExpenseRecord(description="x", amount=1, category="Groceries", date="2024-03-12")
        assert record.category == ExpenseCategory.OTHER
    
    @pytest.mark.parametrize("bad_date", ["", "2024-02-30", "12/03/2024", datetime(2024, 3, 12, 8)])
    def test_bad_dates_rejected(self, bad_date):
        with pytest.raises(ValueError):
            ExpenseRecord(description="x", amount=1, category="Food", date=bad_date)
    
    def test_record_is_immutable(self):
        record = ExpenseRecord(description="x", amount=1, category="Food", date="2024-03-12")
        with pytest.raises(ValueError):
            record.amount = Decimal("2")
    
    def test_storage_dict_layout(self):
        record = ExpenseRecord(
            id="abc",
            description="Coffee",
            amount="4.5",
            category="Food",
            date="2024-03-12",
        )
        assert record.to_storage_dict() == {
            "id": "abc",
            "description": "Coffee",
            "amount": 4.5,
            "category": "Food",
            "date": "2024-03-12",
        }
    
    def test_storage_dict_reloads_equal(self):
        record = ExpenseRecord(description="Rent", amount="1200.10", category="Housing", date="2024-03-01")
        assert ExpenseRecord.model_validate(record.to_storage_dict()) == record


class TestAmountHelpers:
    """Tests for parse_amount / round_to_cents."""
    
    def test_parse_amount_accepts_text_and_numbers(self):
        assert parse_amount(" 4.5 ") == Decimal("4.5")
        assert parse_amount(4.5) == Decimal("4.5")
        assert parse_amount(3) == Decimal("3")
        assert parse_amount(Decimal("1.25")) == Decimal("1.25")
    
    @pytest.mark.parametrize("value", ["", "4.5abc", "nan", "-inf", float("nan"), float("inf"), False, None, [1]])
    def test_parse_amount_rejects(self, value):
        assert parse_amount(value) is None
    
    def test_round_to_cents(self):
        assert round_to_cents(Decimal("0.005")) == Decimal("0.01")
        assert round_to_cents(Decimal("1.234")) == Decimal("1.23")


class TestExpenseCategory:
    """Tests for the category enum."""
    
    def test_declaration_order(self):
        assert [c.value for c in ExpenseCategory] == [
            "Food", "Transport", "Housing", "Entertainment",
            "Utilities", "Health", "Shopping", "Other",
        ]
    
    def test_from_value(self):
        assert ExpenseCategory.from_value("Health") == ExpenseCategory.HEALTH
        assert ExpenseCategory.from_value("health") is None
        assert ExpenseCategory.fallback("health") == ExpenseCategory.OTHER


class TestExpenseDraft:
    """Tests for the add-form draft."""
    
    def test_blank_draft(self):
        draft = ExpenseDraft.blank(date(2024, 3, 14))
        assert draft.description == ""
        assert draft.amount == ""
        assert draft.category == "Food"
        assert draft.date == "2024-03-14"


class TestCategoryTotals:
    """Tests for CategoryTotals."""
    
    def test_missing_categories_default_to_zero_in_order(self):
        totals = CategoryTotals(totals={ExpenseCategory.HEALTH: Decimal("3.00")})
        assert list(totals.totals) == list(ExpenseCategory)
        assert totals["Health"] == Decimal("3.00")
        assert totals[ExpenseCategory.FOOD] == Decimal("0")
    
    def test_lookup_of_unknown_category_raises_key_error(self):
        with pytest.raises(KeyError):
            CategoryTotals()["Groceries"]
    
    def test_chart_series(self):
        totals = CategoryTotals(totals={"Food": Decimal("4.50")}, grand_total=Decimal("4.50"))
        labels, values = totals.as_chart_series()
        assert labels[0] == "Food"
        assert labels[-1] == "Other"
        assert values == [4.5, 0, 0, 0, 0, 0, 0, 0]


class TestValidationResult:
    """Tests for ValidationResult model."""
    
    def test_validation_result_has_errors(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="amount", issue_type="missing", message="Amount required"),
        ])
        assert result.has_errors is True
        assert result.is_valid is False
        assert result.error_count == 1
        assert result.first_error.field == "amount"
    
    def test_validation_result_warnings_only(self):
        result = ValidationResult(issues=[
            ValidationIssue(field="date", issue_type="old", message="Old date", severity="warning"),
        ])
        assert result.has_errors is False
        assert result.is_valid is True
        assert result.first_error is None


class TestAuditModels:
    """Tests for audit-related models."""
    
    def test_audit_event_creation(self):
        event = AuditEvent(
            event_type=AuditEventType.EXPENSE_ADDED,
            description="Expense added",
        )
        assert event.severity == AuditSeverity.INFO
    
    def test_audit_event_to_log_dict(self):
        event = AuditEventBuilder.expense_added(
            expense_id="abc",
            description="Coffee",
            amount="4.50",
            category="Food",
            expense_date="2024-03-12",
        )
        log_dict = event.to_log_dict()
        assert log_dict["event_type"] == "expense_added"
        assert log_dict["entity_id"] == "abc"
        assert log_dict["details"]["amount"] == "4.50"
        assert log_dict["is_user_action"] is True
    
    def test_save_failure_is_error_severity(self):
        event = AuditEventBuilder.ledger_save_failed(key="expenses", error_message="disk full")
        assert event.severity == AuditSeverity.ERROR
        assert event.error_message == "disk full"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
