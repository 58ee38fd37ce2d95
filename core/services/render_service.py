"""Display rules shared by the card grid, shelves and the count label.

Everything here is toolkit-independent; the view-models turn these rules into
bindable objects.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from core.models import CatRecord, MediaItem, MediaType, ViewMode
from core.services.sort_service import SortService

GROUPED_DESCRIPTION_LIMIT = 80
ITEM_DESCRIPTION_LIMIT = 60
ELLIPSIS = "..."
MAX_VISIBLE_CHIPS = 2

RECENT_DAYS = 7
RECENT_LIMIT = 8

PLACEHOLDER_URL = "https://via.placeholder.com/400x400?text=Cat"
PLACEHOLDER_MEDIA = MediaItem(url=PLACEHOLDER_URL, type=MediaType.IMAGE)

_COUNT_NOUNS = {ViewMode.GROUPED: "cat", ViewMode.PER_ITEM: "photo"}


def truncate(text: str | None, limit: int) -> str:
    """Cut `text` to `limit` characters, appending an ellipsis only when cut."""
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + ELLIPSIS


def category_chips(
    categories: list[str], max_visible: int = MAX_VISIBLE_CHIPS
) -> tuple[list[str], str | None]:
    """Return the visible chips and an overflow chip like ``+3`` (or None)."""
    visible = list(categories[:max_visible])
    hidden = len(categories) - len(visible)
    return visible, (f"+{hidden}" if hidden > 0 else None)


def count_label(count: int, mode: ViewMode) -> str:
    """Pluralized result label, e.g. ``1 cat``, ``3 cats``, ``6 photos``."""
    noun = _COUNT_NOUNS[mode]
    return f"{count} {noun}{'' if count == 1 else 's'}"


def empty_message(mode: ViewMode) -> str:
    return f"No {_COUNT_NOUNS[mode]}s found"


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def recent_records(
    records: Iterable[CatRecord],
    now: datetime | None = None,
    days: int = RECENT_DAYS,
    limit: int = RECENT_LIMIT,
    sorter: SortService | None = None,
) -> list[CatRecord]:
    """Records created within the last `days` days, newest first, capped at `limit`."""
    now = _as_aware(now or datetime.now(timezone.utc))
    cutoff = now - timedelta(days=days)
    within = [
        r for r in records if r.created_at is not None and _as_aware(r.created_at) >= cutoff
    ]
    ordered = (sorter or SortService()).sort(within, [("created_at", False)])
    return ordered[:limit]


def featured_records(records: Iterable[CatRecord]) -> list[CatRecord]:
    """Records flagged as featured, in store order."""
    return [r for r in records if r.is_featured]
