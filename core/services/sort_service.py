"""Sorting service for `CatRecord` collections.

The service performs multi-key sorting across records, handling None values and
per-key ascending/descending ordering without mutating the input list.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from core.models import CatRecord


class SortService:
    """Provides sorting utilities for record lists."""

    def sort(
        self, records: Iterable[CatRecord], sort_keys: list[tuple[str, bool]]
    ) -> list[CatRecord]:
        """Return records sorted by the provided keys.

        Args:
            records: Records to sort.
            sort_keys: List of tuples (field_name, ascending). Records whose
                value is None sort last regardless of direction.
        """
        result = list(records)
        if not sort_keys:
            return result

        # Stable sorts applied from the least significant key upwards
        for field_name, ascending in reversed(sort_keys):
            present = [r for r in result if getattr(r, field_name, None) is not None]
            missing = [r for r in result if getattr(r, field_name, None) is None]
            present.sort(
                key=lambda r, f=field_name: _sort_value(getattr(r, f)), reverse=not ascending
            )
            result = present + missing
        return result


def _sort_value(value: Any) -> Any:
    if isinstance(value, str):
        return value.casefold()
    if isinstance(value, datetime) and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
