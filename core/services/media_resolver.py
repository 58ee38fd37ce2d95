"""Normalize the store's media representations into `MediaItem` lists.

Rows carry media either as a structured ``image_data`` list (entries with
``url``/``type`` and optional per-item metadata) or as a legacy flat
``image_urls`` list. Everything downstream consumes the canonical list.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from core.models import VIDEO_EXTENSIONS, VIDEO_PATH_SEGMENT, MediaItem, MediaType, is_video_url

__all__ = ["VIDEO_EXTENSIONS", "VIDEO_PATH_SEGMENT", "is_video_url", "resolve_media"]


def _as_str_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v) for v in value if isinstance(v, str) and v]


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    return text or None


def _media_from_entry(entry: Any) -> MediaItem | None:
    if isinstance(entry, str):
        if not entry:
            return None
        return MediaItem(url=entry, type=_infer_type(entry))
    if not isinstance(entry, Mapping):
        return None
    url = entry.get("url")
    if not isinstance(url, str) or not url:
        return None
    raw_type = str(entry.get("type") or "").lower()
    if raw_type in (MediaType.IMAGE.value, MediaType.VIDEO.value):
        media_type = MediaType(raw_type)
    else:
        media_type = _infer_type(url)
    return MediaItem(
        url=url,
        type=media_type,
        title=_optional_text(entry.get("title")),
        description=_optional_text(entry.get("description")),
        categories=_as_str_list(entry.get("categories")),
    )


def _infer_type(url: str) -> MediaType:
    return MediaType.VIDEO if is_video_url(url) else MediaType.IMAGE


def resolve_media(row: Mapping[str, Any]) -> list[MediaItem]:
    """Return the canonical media list for a raw store row.

    Structured ``image_data`` wins when it has entries, then the legacy
    ``image_urls`` list; otherwise an empty list. Never raises.
    """
    structured = row.get("image_data")
    if isinstance(structured, list) and structured:
        return [m for m in (_media_from_entry(e) for e in structured) if m is not None]

    legacy = row.get("image_urls")
    if isinstance(legacy, list) and legacy:
        return [
            MediaItem(url=url, type=_infer_type(url))
            for url in legacy
            if isinstance(url, str) and url
        ]

    return []
