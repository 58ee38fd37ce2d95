"""Category and free-text predicates over cat records.

The filter is recomputed from scratch on every call; there is no index.
"""

from __future__ import annotations

from collections.abc import Iterable, Set

from core.models import CatRecord


def matches_categories(record: CatRecord, selected: Set[str]) -> bool:
    """True if the record, or one of its media items, carries every selected tag."""
    if not selected:
        return True
    if selected <= set(record.categories):
        return True
    return any(selected <= set(item.categories) for item in record.media)


def matches_search(record: CatRecord, term: str | None) -> bool:
    """True if `term` occurs in the record's or any media item's title/description."""
    needle = (term or "").strip().casefold()
    if not needle:
        return True

    texts = [record.title, record.description]
    for item in record.media:
        texts.append(item.title)
        texts.append(item.description)
    return any(needle in (text or "").casefold() for text in texts)


def filter_records(
    records: Iterable[CatRecord], selected: Set[str], term: str | None
) -> list[CatRecord]:
    """Return records passing both the category (AND) and text predicates, in order."""
    return [r for r in records if matches_categories(r, selected) and matches_search(r, term)]
