from __future__ import annotations

import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.views.main_window import MainWindow
from core.services.render_service import RECENT_DAYS, RECENT_LIMIT
from infrastructure.logging import init_logging
from infrastructure.media_service import MediaService
from infrastructure.settings import JsonSettings
from infrastructure.store_repository import (
    DEFAULT_TABLE,
    DEFAULT_TIMEOUT_SECONDS,
    RestRecordStore,
)

BASE_DIR = Path(__file__).parent


def _build_store(settings: JsonSettings) -> RestRecordStore:
    base_url = str(settings.get("store.url", "") or "")
    anon_key = settings.store_anon_key()
    if not base_url or not anon_key:
        logger.warning("store.url or anon key is not configured; loading will fail")
    try:
        timeout = float(settings.get("store.timeout_seconds", DEFAULT_TIMEOUT_SECONDS))
    except (TypeError, ValueError):
        timeout = DEFAULT_TIMEOUT_SECONDS
    return RestRecordStore(
        base_url,
        anon_key,
        table=str(settings.get("store.table", DEFAULT_TABLE) or DEFAULT_TABLE),
        timeout=timeout,
    )


def main() -> int:
    init_logging()
    settings = JsonSettings(BASE_DIR / "settings.json")

    app = QApplication(sys.argv)

    repo = _build_store(settings)
    media = MediaService(settings)
    vm = GalleryVM(
        repo,
        recent_days=settings.get_int("gallery.recent_days", RECENT_DAYS),
        recent_limit=settings.get_int("gallery.recent_limit", RECENT_LIMIT),
    )
    logger.info("Starting gallery against {}", repo.table_url)

    win = MainWindow(vm=vm, media_service=media, settings=settings)
    win.show()
    win.start_loading()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
