"""Lightweight view model for one gallery card."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from core.models import CatRecord, MediaItem, ViewMode
from core.services.render_service import (
    GROUPED_DESCRIPTION_LIMIT,
    ITEM_DESCRIPTION_LIMIT,
    PLACEHOLDER_MEDIA,
    category_chips,
    truncate,
)


@dataclass
class CardVM:
    """Expose display properties of a record (grouped) or one of its media items."""

    record: CatRecord
    media_index: int = 0
    mode: ViewMode = ViewMode.GROUPED

    @property
    def record_id(self) -> str:
        return self.record.id

    @property
    def media(self) -> MediaItem:
        """The media shown on the card, or a placeholder image."""
        items = self.record.media
        if 0 <= self.media_index < len(items):
            return items[self.media_index]
        return PLACEHOLDER_MEDIA

    @property
    def has_media(self) -> bool:
        return bool(self.record.media)

    @property
    def is_video(self) -> bool:
        return self.media.is_video

    @property
    def badge(self) -> str | None:
        """``+N`` for extra media in grouped mode; None otherwise."""
        if self.mode is not ViewMode.GROUPED:
            return None
        extra = len(self.record.media) - 1
        return f"+{extra}" if extra > 0 else None

    @property
    def title(self) -> str:
        if self.mode is ViewMode.GROUPED:
            first = self.record.media[0] if self.record.media else None
            return self.record.title or (first.title if first and first.title else "")
        return self.media.title or self.record.title or ""

    @property
    def description(self) -> str:
        """Description truncated to the mode's character budget."""
        if self.mode is ViewMode.GROUPED:
            return truncate(self.record.description, GROUPED_DESCRIPTION_LIMIT)
        text = self.media.description or self.record.description
        return truncate(text, ITEM_DESCRIPTION_LIMIT)

    @property
    def chips(self) -> list[str]:
        return category_chips(self.record.categories)[0]

    @property
    def overflow_chip(self) -> str | None:
        return category_chips(self.record.categories)[1]


def build_grouped_cards(records: Iterable[CatRecord]) -> list[CardVM]:
    """One card per record, opening the lightbox on its first media item."""
    return [CardVM(record=r, media_index=0, mode=ViewMode.GROUPED) for r in records]


def build_item_cards(records: Iterable[CatRecord]) -> list[CardVM]:
    """One card per media item across all records; records without media add none."""
    return [
        CardVM(record=r, media_index=idx, mode=ViewMode.PER_ITEM)
        for r in records
        for idx in range(len(r.media))
    ]
