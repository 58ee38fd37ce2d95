"""Core domain models for cat records, media items and UI state."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

VIDEO_EXTENSIONS: tuple[str, ...] = (".mp4", ".webm", ".mov")
VIDEO_PATH_SEGMENT = "/video/"


def is_video_url(url: str | None) -> bool:
    """Return True if `url` looks like a video by extension or path segment.

    The check is case-insensitive; query strings and fragments are ignored
    when looking at the extension.
    """
    if not url:
        return False
    lower = url.lower()
    if VIDEO_PATH_SEGMENT in lower:
        return True
    path = lower.split("#", 1)[0].split("?", 1)[0]
    return path.endswith(VIDEO_EXTENSIONS)


class MediaType(str, Enum):
    """Kind of media attached to a record."""

    IMAGE = "image"
    VIDEO = "video"


class ViewMode(str, Enum):
    """Gallery display mode: one card per record or one card per media item."""

    GROUPED = "grouped"
    PER_ITEM = "per-item"


@dataclass(frozen=True)
class MediaItem:
    """A single image or video with optional per-item display overrides."""

    url: str
    type: MediaType = MediaType.IMAGE
    title: str | None = None
    description: str | None = None
    categories: list[str] = field(default_factory=list)

    @property
    def is_video(self) -> bool:
        """Declared videos and video-looking URLs both render as video."""
        return self.type is MediaType.VIDEO or is_video_url(self.url)


@dataclass
class CatRecord:
    """One gallery entry as delivered by the record store."""

    id: str
    title: str | None = None
    description: str | None = None
    media: list[MediaItem] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    is_featured: bool = False
    created_at: datetime | None = None


@dataclass(frozen=True)
class CategoryEntry:
    """Category name with the number of record and media tags using it."""

    name: str
    count: int


@dataclass
class FilterState:
    """Session-lifetime filter selection owned by the gallery view-model."""

    selected_categories: set[str] = field(default_factory=set)
    search_term: str = ""
    view_mode: ViewMode = ViewMode.GROUPED


@dataclass
class ModalState:
    """Which record (and media index within it) the lightbox shows."""

    record_id: str | None = None
    media_index: int = 0
    checkpoint_pushed: bool = False

    @property
    def is_open(self) -> bool:
        return self.record_id is not None
