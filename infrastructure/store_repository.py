"""Read-only REST access to the hosted ``cats`` table.

Talks to a PostgREST endpoint (``{base_url}/rest/v1/{table}``) using an
anonymous, select-only key. Rows are converted to `CatRecord` here so the rest
of the app only ever sees the canonical media shape.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
import json
from typing import Any
from urllib.parse import quote

from loguru import logger
import requests

from core.models import CatRecord
from core.services.interfaces import IRecordStore, StoreError
from core.services.media_resolver import resolve_media
from infrastructure.utils import parse_store_datetime

DEFAULT_TABLE = "cats"
DEFAULT_TIMEOUT_SECONDS = 15.0


def _as_categories(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(c) for c in value if isinstance(c, str) and c]


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def row_to_record(row: Mapping[str, Any]) -> CatRecord | None:
    """Convert one store row to a `CatRecord`; rows without an id yield None."""
    raw_id = row.get("id")
    if raw_id is None or raw_id == "":
        return None
    return CatRecord(
        id=str(raw_id),
        title=_optional_text(row.get("title")),
        description=_optional_text(row.get("description")),
        media=resolve_media(row),
        categories=_as_categories(row.get("categories")),
        is_featured=row.get("is_featured") is True,
        created_at=parse_store_datetime(row.get("created_at")),
    )


class RestRecordStore(IRecordStore):
    """Fetch cat records from a PostgREST/Supabase table."""

    def __init__(
        self,
        base_url: str,
        anon_key: str,
        table: str = DEFAULT_TABLE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        if not table:
            raise ValueError("Table name is required")
        self._base_url = f"{base_url.rstrip('/')}/rest/v1"
        self._table = table
        self._timeout = timeout
        self._headers = {
            "apikey": anon_key,
            "Authorization": f"Bearer {anon_key}",
            "Content-Type": "application/json",
        }

    @property
    def table_url(self) -> str:
        return f"{self._base_url}/{self._table}"

    # Public API
    def select_all(self) -> list[CatRecord]:
        """SELECT * FROM table."""
        return list(self._records(self._get("select=*", "Failed to fetch records")))

    def select(self, filters: dict[str, object]) -> list[CatRecord]:
        """SELECT * FROM table WHERE col = value [AND ...]."""
        if not filters:
            return self.select_all()
        clauses = "&".join(
            f"{quote(str(col), safe='')}=eq.{quote(str(val), safe='')}"
            for col, val in filters.items()
        )
        return list(self._records(self._get(f"select=*&{clauses}", "Failed to fetch records")))

    def select_by_category(self, category: str) -> list[CatRecord]:
        """Records whose ``categories`` array contains `category`."""
        query = f"select=*&categories=cs.{{{quote(category, safe='')}}}"
        return list(self._records(self._get(query, "Failed to fetch cats by category")))

    def select_by_categories(self, categories: list[str]) -> list[CatRecord]:
        """Records whose ``categories`` array contains all of `categories`."""
        if not categories:
            return self.select_all()
        encoded = quote(json.dumps(list(categories)), safe="")
        query = f"select=*&categories=cs.{encoded}"
        return list(self._records(self._get(query, "Failed to fetch cats by categories")))

    def unique_categories(self) -> list[str]:
        """Sorted distinct record-level categories."""
        rows = self._get("select=categories", "Failed to fetch categories")
        names: set[str] = set()
        for row in rows:
            if isinstance(row, Mapping):
                names.update(_as_categories(row.get("categories")))
        return sorted(names)

    # Internal helpers
    def _get(self, query: str, failure_message: str) -> list[Any]:
        url = f"{self.table_url}?{query}"
        try:
            response = requests.get(url, headers=self._headers, timeout=self._timeout)
        except requests.exceptions.RequestException as ex:
            logger.error("Store request failed: {} | url={}", ex, url)
            raise StoreError(f"{failure_message}: {ex}") from ex

        if not response.ok:
            message = failure_message
            try:
                body = response.json()
                if isinstance(body, Mapping) and body.get("message"):
                    message = str(body["message"])
            except ValueError:
                pass
            logger.error("Store returned HTTP {}: {}", response.status_code, message)
            raise StoreError(message)

        try:
            data = response.json()
        except ValueError as ex:
            raise StoreError(f"{failure_message}: invalid JSON response") from ex
        if not isinstance(data, list):
            raise StoreError(f"{failure_message}: unexpected response shape")
        return data

    def _records(self, rows: list[Any]) -> Iterator[CatRecord]:
        for row in rows:
            if not isinstance(row, Mapping):
                logger.warning("Skipping non-object row: {!r}", row)
                continue
            record = row_to_record(row)
            if record is None:
                logger.warning("Skipping row without id: {}", row)
                continue
            yield record
