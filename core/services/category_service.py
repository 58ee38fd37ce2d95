"""Category index derived from records, plus the category sub-filter."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from core.models import CatRecord, CategoryEntry


def build_category_index(records: Iterable[CatRecord]) -> list[CategoryEntry]:
    """Count record-level and media-level tags; most used first.

    Ties are ordered alphabetically (case-insensitive, then exact) so the
    result does not depend on record order.
    """
    counts: Counter[str] = Counter()
    for record in records:
        counts.update(record.categories)
        for item in record.media:
            counts.update(item.categories)

    ordered = sorted(counts.items(), key=lambda kv: (-kv[1], kv[0].casefold(), kv[0]))
    return [CategoryEntry(name=name, count=count) for name, count in ordered]


def filter_categories(entries: list[CategoryEntry], query: str | None) -> list[CategoryEntry]:
    """Case-insensitive substring match on category names; empty query keeps all."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(entries)
    return [e for e in entries if needle in e.name.casefold()]
