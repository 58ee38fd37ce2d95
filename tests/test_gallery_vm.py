"""Tests for the gallery view-model using an in-memory store."""

from datetime import timedelta
from unittest.mock import MagicMock

from core.models import ViewMode
from core.services.interfaces import IRecordStore, StoreError
from app.viewmodels.gallery_vm import (
    NO_CATEGORIES_MESSAGE,
    NO_MATCHING_CATEGORIES_MESSAGE,
    SHELF_ERROR_MESSAGE,
    GalleryVM,
)

from conftest import image, make_record


class FakeStore(IRecordStore):
    def __init__(self, records=None, error: str | None = None):
        self.records = list(records or [])
        self.error = error
        self.calls = 0

    def select_all(self):
        self.calls += 1
        if self.error:
            raise StoreError(self.error)
        return list(self.records)


def _sample_records(now):
    return [
        make_record(
            "1",
            title="Tom",
            categories=["Orange", "Sleepy"],
            media=[image(), image()],
            is_featured=True,
            created_at=now - timedelta(days=1),
        ),
        make_record(
            "2",
            title="Luna",
            categories=["Black"],
            media=[image()],
            created_at=now - timedelta(days=30),
        ),
        make_record("3", title="Ghost", categories=["Orange"], media=[]),
    ]


class TestLoading:
    """Fetch/apply split and error handling."""

    def test_load_success(self, fixed_now):
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)))
        result = vm.load()
        assert result.ok
        assert vm.record_count == 3
        assert [c.name for c in vm.categories] == ["Orange", "Black", "Sleepy"]

    def test_load_failure_becomes_result(self):
        vm = GalleryVM(FakeStore(error="boom"))
        result = vm.load()
        assert not result.ok
        assert result.error == "boom"
        assert vm.records == []

    def test_fetch_does_not_touch_state(self, fixed_now):
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)))
        vm.fetch()
        assert vm.record_count == 0

    def test_reload_drops_vanished_selections(self, fixed_now):
        store = FakeStore(_sample_records(fixed_now))
        vm = GalleryVM(store)
        vm.load()
        vm.set_category_selected("Black", True)
        vm.set_category_selected("Orange", True)
        store.records = [r for r in store.records if r.id != "2"]
        vm.load()
        assert vm.filter_state.selected_categories == {"Orange"}

    def test_find_record(self, fixed_now):
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)))
        vm.load()
        assert vm.find_record("2").title == "Luna"
        assert vm.find_record("missing") is None


class TestGalleryView:
    """Main grid projection."""

    def setup_method(self):
        self.store = FakeStore()

    def _vm(self, now):
        self.store.records = _sample_records(now)
        vm = GalleryVM(self.store)
        vm.load()
        return vm

    def test_grouped_and_per_item_counts(self, fixed_now):
        vm = self._vm(fixed_now)
        view = vm.gallery_view()
        assert (view.count, view.label, view.message) == (3, "3 cats", None)

        vm.set_view_mode(ViewMode.PER_ITEM)
        view = vm.gallery_view()
        assert (view.count, view.label) == (3, "3 photos")

    def test_category_and_search_filters(self, fixed_now):
        vm = self._vm(fixed_now)
        vm.set_category_selected("Orange", True)
        assert vm.gallery_view().count == 2
        vm.set_search_term("gho")
        assert [c.record_id for c in vm.gallery_view().cards] == ["3"]
        vm.set_category_selected("Orange", False)
        vm.set_search_term("")
        assert vm.gallery_view().count == 3

    def test_empty_result_message(self, fixed_now):
        vm = self._vm(fixed_now)
        vm.set_search_term("nobody")
        view = vm.gallery_view()
        assert view.cards == []
        assert view.message == "No cats found"
        vm.set_view_mode(ViewMode.PER_ITEM)
        assert vm.gallery_view().message == "No photos found"

    def test_error_message(self):
        vm = GalleryVM(FakeStore(error="timeout"))
        vm.load()
        view = vm.gallery_view()
        assert view.message == "Failed to load cats: timeout"
        assert view.label == "0 cats"


class TestCategories:
    def test_no_categories(self):
        vm = GalleryVM(FakeStore([make_record()]))
        vm.load()
        assert vm.visible_categories("") == ([], NO_CATEGORIES_MESSAGE)

    def test_no_matching_categories(self, fixed_now):
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)))
        vm.load()
        assert vm.visible_categories("zzz") == ([], NO_MATCHING_CATEGORIES_MESSAGE)
        entries, message = vm.visible_categories("ora")
        assert [e.name for e in entries] == ["Orange"]
        assert message is None

    def test_selection_flags(self):
        vm = GalleryVM(FakeStore())
        vm.set_category_selected("A", True)
        assert vm.is_category_selected("A")
        vm.set_category_selected("A", False)
        assert not vm.is_category_selected("A")


class TestShelves:
    def test_recent_and_popular(self, fixed_now):
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)), clock=lambda: fixed_now)
        vm.load()
        recent = vm.recent_shelf()
        popular = vm.popular_shelf()
        assert [c.record_id for c in recent.cards] == ["1"]
        assert [c.record_id for c in popular.cards] == ["1"]
        assert recent.is_visible and popular.is_visible

    def test_empty_shelves_hidden(self, fixed_now):
        records = [make_record("x", created_at=fixed_now - timedelta(days=90))]
        vm = GalleryVM(FakeStore(records), clock=lambda: fixed_now)
        vm.load()
        assert not vm.recent_shelf().is_visible
        assert not vm.popular_shelf().is_visible

    def test_shelves_report_errors(self):
        vm = GalleryVM(FakeStore(error="down"))
        vm.load()
        assert vm.recent_shelf().error == SHELF_ERROR_MESSAGE
        assert vm.popular_shelf().is_visible

    def test_clock_is_used(self, fixed_now):
        clock = MagicMock(return_value=fixed_now)
        vm = GalleryVM(FakeStore(_sample_records(fixed_now)), clock=clock)
        vm.load()
        vm.recent_shelf()
        clock.assert_called_once()
