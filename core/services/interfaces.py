"""Core service interfaces and shared data structures.

This module defines the record store contract and the result types passed
between the infrastructure and UI layers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.models import CatRecord


class StoreError(Exception):
    """Raised when the record store is unreachable or answers with an error."""


@dataclass
class LoadResult:
    """Outcome of a collection fetch.

    Attributes:
        records: Records returned by the store (empty on failure).
        error: Human-readable failure message, or None on success.
    """

    records: list[CatRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class IRecordStore:
    """Interface for read-only record stores.

    Only `select_all` is required by the gallery; the remaining queries are
    optional conveniences a store may offer.
    """

    def select_all(self) -> list[CatRecord]:
        """Return the full record collection or raise `StoreError`."""
        raise NotImplementedError

    def select(self, filters: dict[str, object]) -> list[CatRecord]:
        """Return records whose columns equal the given values."""
        raise NotImplementedError

    def select_by_category(self, category: str) -> list[CatRecord]:
        """Return records tagged with `category`."""
        raise NotImplementedError

    def select_by_categories(self, categories: list[str]) -> list[CatRecord]:
        """Return records tagged with every name in `categories`."""
        raise NotImplementedError

    def unique_categories(self) -> list[str]:
        """Return the sorted distinct record-level category names."""
        raise NotImplementedError
