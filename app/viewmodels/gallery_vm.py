"""ViewModel orchestrating record loading, filtering and card projection."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from loguru import logger

from app.viewmodels.card_vm import CardVM, build_grouped_cards, build_item_cards
from app.viewmodels.shelf_vm import ShelfVM
from core.models import CatRecord, CategoryEntry, FilterState, ViewMode
from core.services.category_service import build_category_index, filter_categories
from core.services.filter_service import filter_records
from core.services.interfaces import IRecordStore, LoadResult, StoreError
from core.services.render_service import (
    RECENT_DAYS,
    RECENT_LIMIT,
    count_label,
    empty_message,
    featured_records,
    recent_records,
)

NO_CATEGORIES_MESSAGE = "No categories available"
NO_MATCHING_CATEGORIES_MESSAGE = "No matching categories"
SHELF_ERROR_MESSAGE = "Failed to load"


@dataclass
class GalleryView:
    """Cards for the main grid plus the count label and empty/error text."""

    cards: list[CardVM] = field(default_factory=list)
    count: int = 0
    label: str = ""
    message: str | None = None


class GalleryVM:
    """Main gallery view-model.

    Owns the canonical record list (from an `IRecordStore`) and the session's
    `FilterState`; every derived view is recomputed from those two on demand.
    """

    def __init__(
        self,
        repo: IRecordStore,
        recent_days: int = RECENT_DAYS,
        recent_limit: int = RECENT_LIMIT,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Create a GalleryVM.

        Args:
            repo: Store with a `select_all()` method.
            recent_days: Age window for the "Recent" shelf.
            recent_limit: Maximum cards on the "Recent" shelf.
            clock: Returns "now"; defaults to the current UTC time.
        """
        self._repo = repo
        self._recent_days = recent_days
        self._recent_limit = recent_limit
        self._clock = clock
        self.records: list[CatRecord] = []
        self.load_error: str | None = None
        self.filter_state = FilterState()
        self._categories: list[CategoryEntry] = []

    # Loading
    def fetch(self) -> LoadResult:
        """Query the store without touching view-model state (safe off the UI thread)."""
        try:
            records = self._repo.select_all()
        except StoreError as ex:
            logger.error("Failed to load cats: {}", ex)
            return LoadResult(records=[], error=str(ex))
        logger.info("Loaded {} cats from store", len(records))
        return LoadResult(records=records)

    def apply(self, result: LoadResult) -> None:
        """Adopt a fetch result and rebuild the category index."""
        self.records = list(result.records)
        self.load_error = result.error
        self._categories = build_category_index(self.records)
        # Drop selections that no longer exist in the data
        known = {c.name for c in self._categories}
        self.filter_state.selected_categories &= known

    def load(self) -> LoadResult:
        """Fetch and apply in one step."""
        result = self.fetch()
        self.apply(result)
        return result

    def find_record(self, record_id: str) -> CatRecord | None:
        for record in self.records:
            if record.id == record_id:
                return record
        return None

    # Filter state
    def set_category_selected(self, name: str, selected: bool) -> None:
        if selected:
            self.filter_state.selected_categories.add(name)
        else:
            self.filter_state.selected_categories.discard(name)

    def is_category_selected(self, name: str) -> bool:
        return name in self.filter_state.selected_categories

    def set_search_term(self, term: str) -> None:
        self.filter_state.search_term = term or ""

    def set_view_mode(self, mode: ViewMode) -> None:
        self.filter_state.view_mode = ViewMode(mode)

    @property
    def view_mode(self) -> ViewMode:
        return self.filter_state.view_mode

    # Derived views
    @property
    def categories(self) -> list[CategoryEntry]:
        return list(self._categories)

    def visible_categories(self, query: str = "") -> tuple[list[CategoryEntry], str | None]:
        """Categories matching the sub-search plus the empty-state message, if any."""
        if not self._categories:
            return [], NO_CATEGORIES_MESSAGE
        matches = filter_categories(self._categories, query)
        if not matches:
            return [], NO_MATCHING_CATEGORIES_MESSAGE
        return matches, None

    def visible_records(self) -> list[CatRecord]:
        state = self.filter_state
        return filter_records(self.records, state.selected_categories, state.search_term)

    def gallery_view(self) -> GalleryView:
        """Project the filtered records into cards for the current view mode."""
        mode = self.filter_state.view_mode
        if self.load_error is not None:
            return GalleryView(
                count=0,
                label=count_label(0, mode),
                message=f"Failed to load cats: {self.load_error}",
            )

        records = self.visible_records()
        if mode is ViewMode.GROUPED:
            cards = build_grouped_cards(records)
        else:
            cards = build_item_cards(records)
        return GalleryView(
            cards=cards,
            count=len(cards),
            label=count_label(len(cards), mode),
            message=None if cards else empty_message(mode),
        )

    def recent_shelf(self) -> ShelfVM:
        if self.load_error is not None:
            return ShelfVM(title="Recent", error=SHELF_ERROR_MESSAGE)
        now = self._clock() if self._clock else None
        recent = recent_records(
            self.records, now=now, days=self._recent_days, limit=self._recent_limit
        )
        return ShelfVM(title="Recent", cards=build_grouped_cards(recent))

    def popular_shelf(self) -> ShelfVM:
        if self.load_error is not None:
            return ShelfVM(title="Popular", error=SHELF_ERROR_MESSAGE)
        return ShelfVM(title="Popular", cards=build_grouped_cards(featured_records(self.records)))

    @property
    def record_count(self) -> int:
        """Number of records currently loaded."""
        return len(self.records)
