"""Tests for the ledger storage port and its implementations."""

import json
import pytest
from decimal import Decimal

from expense_review.models import MAX_AMOUNT, ExpenseCategory, ExpenseRecord
from expense_review.services.storage import (
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerFormatError,
    dump_ledger,
    parse_ledger,
)


def make_record(**overrides) -> ExpenseRecord:
    fields = {
        "description": "Coffee",
        "amount": "4.50",
        "category": "Food",
        "date": "2024-03-12",
    }
    fields.update(overrides)
    return ExpenseRecord(**fields)


class TestLedgerCodec:
    """Tests for dump_ledger / parse_ledger."""
    
    def test_round_trip_preserves_records_and_order(self):
        ledger = [
            make_record(description="Bus", amount="2.75", category="Transport", date="2024-03-20"),
            make_record(),
            make_record(description="Rent", amount="1200", category="Housing", date="2024-03-01"),
        ]
        assert parse_ledger(dump_ledger(ledger)) == ledger
    
    def test_dump_is_a_json_array_of_objects(self):
        data = json.loads(dump_ledger([make_record(id="a1")]))
        assert data == [{
            "id": "a1",
            "description": "Coffee",
            "amount": 4.5,
            "category": "Food",
            "date": "2024-03-12",
        }]
    
    def test_dump_keeps_non_ascii_text(self):
        assert "Café" in dump_ledger([make_record(description="Café")])
    
    @pytest.mark.parametrize("raw", ["", "not json", "{\"id\": 1}", "42", "null"])
    def test_non_array_raises_format_error(self, raw):
        with pytest.raises(LedgerFormatError):
            parse_ledger(raw)
    
    def test_invalid_elements_are_skipped(self):
        raw = json.dumps([
            {"id": "ok", "description": "Tea", "amount": 3, "category": "Food", "date": "2024-03-12"},
            {"id": "neg", "description": "Bad", "amount": -1, "category": "Food", "date": "2024-03-12"},
            {"id": "nodate", "description": "Bad", "amount": 1, "category": "Food"},
            "a string",
        ])
        records = parse_ledger(raw)
        assert [r.id for r in records] == ["ok"]
    
    def test_out_of_range_element_is_skipped(self):
        """An oversized stored amount drops that element, not the ledger."""
        raw = json.dumps([
            {"id": "ok", "description": "Tea", "amount": 3, "category": "Food", "date": "2024-03-12"},
            {"id": "big", "description": "Yacht", "amount": 1e30, "category": "Shopping", "date": "2024-03-12"},
        ])
        records = parse_ledger(raw)
        assert [r.id for r in records] == ["ok"]
    
    def test_round_trip_at_maximum_amount(self):
        ledger = [make_record(amount=str(MAX_AMOUNT)), make_record(amount="123456789012.34")]
        reloaded = parse_ledger(dump_ledger(ledger))
        assert reloaded == ledger
        assert reloaded[0].amount == MAX_AMOUNT
    
    def test_stale_category_is_kept_as_other(self):
        raw = json.dumps([
            {"id": "old", "description": "Gym", "amount": 30, "category": "Fitness", "date": "2024-03-12"},
        ])
        records = parse_ledger(raw)
        assert records[0].category == ExpenseCategory.OTHER
        assert records[0].amount == Decimal("30.00")


class TestInMemoryLedgerStorage:
    """Tests for InMemoryLedgerStorage."""
    
    def test_absent_key_loads_none(self):
        storage = InMemoryLedgerStorage()
        assert storage.load() is None
        assert storage.last_error is None
    
    def test_save_then_load(self):
        storage = InMemoryLedgerStorage()
        ledger = [make_record()]
        assert storage.save(ledger) is True
        assert storage.load() == ledger
        assert storage.write_count == 1
    
    def test_malformed_blob_loads_none(self):
        storage = InMemoryLedgerStorage(blobs={"expenses": "{broken"})
        assert storage.load() is None
        assert "not valid JSON" in storage.last_error
    
    def test_read_failure_loads_none(self):
        storage = InMemoryLedgerStorage()
        storage.fail_reads = True
        assert storage.load() is None
        assert storage.last_error
    
    def test_write_failure_returns_false(self):
        storage = InMemoryLedgerStorage()
        storage.fail_writes = True
        assert storage.save([make_record()]) is False
        assert "Quota exceeded" in storage.last_error
        assert "expenses" not in storage.blobs
    
    def test_custom_key(self):
        storage = InMemoryLedgerStorage(key="ledger-2024")
        storage.save([make_record()])
        assert "ledger-2024" in storage.blobs


class TestJsonFileLedgerStorage:
    """Tests for JsonFileLedgerStorage."""
    
    def test_missing_file_loads_none(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path / "data")
        assert storage.load() is None
        assert storage.last_error is None
    
    def test_save_creates_directory_and_file(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path / "data")
        ledger = [make_record(), make_record(description="Lunch", amount="12.30")]
        assert storage.save(ledger) is True
        assert storage.path == tmp_path / "data" / "expenses.json"
        assert storage.load() == ledger
    
    def test_save_replaces_previous_contents(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        storage.save([make_record(), make_record()])
        storage.save([])
        assert storage.load() == []
        assert json.loads(storage.path.read_text(encoding="utf-8")) == []
    
    def test_no_temp_files_left_behind(self, tmp_path):
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        storage.save([make_record()])
        assert [p.name for p in tmp_path.iterdir()] == ["expenses.json"]
    
    def test_corrupt_file_loads_none(self, tmp_path):
        (tmp_path / "expenses.json").write_text("[{", encoding="utf-8")
        storage = JsonFileLedgerStorage(data_dir=tmp_path)
        assert storage.load() is None
        assert storage.last_error
    
    def test_unwritable_location_returns_false(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("", encoding="utf-8")
        storage = JsonFileLedgerStorage(data_dir=blocker, write_attempts=2)
        assert storage.save([make_record()]) is False
        assert "Failed to write ledger file" in storage.last_error


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
