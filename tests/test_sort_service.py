"""Tests for multi-key record sorting."""

from datetime import datetime, timezone

from core.services.sort_service import SortService

from conftest import make_record


class TestSortService:
    def setup_method(self):
        self.service = SortService()

    def test_no_keys_keeps_order(self):
        records = [make_record("b"), make_record("a")]
        assert self.service.sort(records, []) == records

    def test_descending_with_none_last(self):
        early = make_record("early", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
        late = make_record("late", created_at=datetime(2024, 2, 1, tzinfo=timezone.utc))
        unknown = make_record("unknown", created_at=None)
        result = self.service.sort([unknown, early, late], [("created_at", False)])
        assert [r.id for r in result] == ["late", "early", "unknown"]

    def test_strings_case_insensitive(self):
        records = [make_record("1", title="bob"), make_record("2", title="Alice")]
        result = self.service.sort(records, [("title", True)])
        assert [r.title for r in result] == ["Alice", "bob"]

    def test_secondary_key_breaks_ties(self):
        records = [
            make_record("2", title="Same"),
            make_record("1", title="Same"),
            make_record("3", title="Other"),
        ]
        result = self.service.sort(records, [("title", True), ("id", True)])
        assert [r.id for r in result] == ["3", "1", "2"]

    def test_input_not_mutated(self):
        records = [make_record("b"), make_record("a")]
        self.service.sort(records, [("id", True)])
        assert [r.id for r in records] == ["b", "a"]
