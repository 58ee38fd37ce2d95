"""Shared fixtures and record factories for the test suite."""

from __future__ import annotations

import os
from datetime import datetime, timezone

import pytest

from core.models import CatRecord, MediaItem, MediaType

# Widgets are exercised without a display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


def make_record(
    record_id: str = "1",
    title: str | None = "Whiskers",
    description: str | None = None,
    media: list[MediaItem] | None = None,
    categories: list[str] | None = None,
    is_featured: bool = False,
    created_at: datetime | None = None,
) -> CatRecord:
    """Helper to create CatRecord with minimal boilerplate."""
    return CatRecord(
        id=record_id,
        title=title,
        description=description,
        media=list(media or []),
        categories=list(categories or []),
        is_featured=is_featured,
        created_at=created_at,
    )


def image(url: str = "https://cdn.example/cat.jpg", **kwargs) -> MediaItem:
    return MediaItem(url=url, type=MediaType.IMAGE, **kwargs)


def video(url: str = "https://cdn.example/cat.mp4", **kwargs) -> MediaItem:
    return MediaItem(url=url, type=MediaType.VIDEO, **kwargs)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def qt_app():
    """A QApplication on the offscreen platform for timers, signals and widgets."""
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance() or QApplication([])
    yield app
