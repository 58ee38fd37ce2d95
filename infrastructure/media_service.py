"""Remote image download, thumbnailing and caching.

Images are fetched over HTTP with `requests`, decoded and downscaled with
Pillow, and handed to Qt as `QImage`. Results are kept in an in-memory LRU and
a JPEG disk cache keyed by URL and requested size. Videos are not decoded
here; tiles stream them through `QMediaPlayer` instead.
"""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import hashlib
import io
import os
from pathlib import Path
from typing import Any

from PIL import Image, ImageOps, UnidentifiedImageError
from PySide6.QtCore import Qt
from PySide6.QtGui import QColor, QImage
from loguru import logger
import requests

from infrastructure.logging import get_app_data_directory

DEFAULT_MEM_CACHE = 256
DEFAULT_TIMEOUT_SECONDS = 20.0


def _compute_cache_key(url: str, size_key: int) -> str:
    """Compute a stable cache key from the URL and requested side."""
    sig = f"{url}|{int(size_key)}".encode("utf-8", errors="ignore")
    return hashlib.sha1(sig).hexdigest()


def _ensure_dir(p: Path) -> None:
    """Create directory `p` if missing (including parents)."""
    p.mkdir(parents=True, exist_ok=True)


@dataclass
class _MemCacheItem:
    key: str
    image: QImage


class _LRUCache:
    def __init__(self, capacity: int) -> None:
        self._cap = max(1, int(capacity or 1))
        self._data: OrderedDict[str, _MemCacheItem] = OrderedDict()

    def get(self, key: str) -> QImage | None:
        """Return cached QImage for key, moving it to the MRU position."""
        item = self._data.get(key)
        if not item:
            return None
        self._data.move_to_end(key)
        return item.image

    def put(self, key: str, image: QImage) -> None:
        """Insert or update `key` with `image`, evicting LRU when over capacity."""
        self._data[key] = _MemCacheItem(key, image)
        self._data.move_to_end(key)
        while len(self._data) > self._cap:
            self._data.popitem(last=False)

    def __len__(self) -> int:
        return len(self._data)


class MediaService:
    """High-level remote image service with memory/disk cache."""

    def __init__(self, settings: object | None = None) -> None:
        """Initialize caches from settings (``media.mem_cache``, ``media.disk_cache_dir``)."""
        self._mem_cap = DEFAULT_MEM_CACHE
        self._timeout = DEFAULT_TIMEOUT_SECONDS
        self._disk_dir = str(get_app_data_directory() / "thumbs")
        if settings is not None:
            try:
                self._mem_cap = int(settings.get("media.mem_cache", DEFAULT_MEM_CACHE) or 0)
            except (ValueError, TypeError):
                self._mem_cap = DEFAULT_MEM_CACHE
            raw_dir = settings.get("media.disk_cache_dir", None)
            if isinstance(raw_dir, str) and raw_dir:
                self._disk_dir = os.path.expanduser(os.path.expandvars(raw_dir))
        self._disk_path = Path(self._disk_dir)
        _ensure_dir(self._disk_path)
        self._mem_cache = _LRUCache(self._mem_cap)

    # Public API
    def get_thumbnail(self, url: str, size: int) -> QImage:
        """Return a thumbnail for `url` bounded by `size` on its longest side."""
        return self._get_image(url, size)

    def get_preview(self, url: str, max_side: int) -> QImage:
        """Return a larger preview for `url`; `max_side` <= 0 keeps the original size."""
        return self._get_image(url, max_side)

    # Internal helpers
    def _get_image(self, url: str, requested_side: int) -> QImage:
        """Get image via memory/disk cache or download and cache it."""
        key = _compute_cache_key(url, requested_side)
        img = self._mem_cache.get(key)
        if img is not None and not img.isNull():
            return img

        disk_file = self._disk_path / f"{key}.jpg"
        if disk_file.exists():
            img = QImage(str(disk_file))
            if not img.isNull():
                self._mem_cache.put(key, img)
                return img

        img = self._load_from_source(url, requested_side)
        if img is None or img.isNull():
            # Placeholder keeps tiles from collapsing; never cached on disk
            img = QImage(64, 64, QImage.Format_ARGB32)
            img.fill(QColor(220, 220, 220))
            return img

        try:
            img.convertToFormat(QImage.Format_RGB32).save(str(disk_file), "JPEG", quality=85)
        except OSError as ex:
            logger.debug("Save disk cache failed for {}: {}", disk_file, ex)

        self._mem_cache.put(key, img)
        return img

    def _download(self, url: str) -> bytes | None:
        try:
            response = requests.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.exceptions.RequestException as ex:
            logger.debug("Media download failed for {}: {}", url, ex)
            return None
        return response.content

    def _load_from_source(self, url: str, requested_side: int) -> QImage | None:
        """Download, then decode with Pillow; fall back to Qt's decoders."""
        data = self._download(url)
        if not data:
            return None

        img = self._load_via_pillow(data, requested_side)
        if img is not None and not img.isNull():
            return img

        qimg = QImage.fromData(data)
        if qimg.isNull():
            logger.debug("Could not decode media from {}", url)
            return None
        if requested_side and requested_side > 0:
            qimg = qimg.scaled(
                requested_side, requested_side, Qt.KeepAspectRatio, Qt.SmoothTransformation
            )
        return qimg

    def _load_via_pillow(self, data: bytes, requested_side: int) -> QImage | None:
        """Decode bytes with Pillow, honouring EXIF orientation."""
        try:
            with Image.open(io.BytesIO(data)) as im:
                try:
                    im = ImageOps.exif_transpose(im)
                except (OSError, ValueError, AttributeError):
                    pass
                if requested_side and requested_side > 0:
                    im.thumbnail((requested_side, requested_side), Image.Resampling.LANCZOS)
                return self._pil_to_qimage(im)
        except (OSError, ValueError, UnidentifiedImageError) as ex:
            logger.debug("Pillow decode failed: {}", ex)
            return None

    def _pil_to_qimage(self, pil_img: Any) -> QImage | None:
        """Convert a Pillow image to `QImage` and detach from the source buffer."""
        try:
            mode = pil_img.mode
            if mode not in ("RGBA", "RGB"):
                pil_img = pil_img.convert("RGBA")
                mode = pil_img.mode
            if mode == "RGB":
                data = pil_img.tobytes("raw", "RGB")
                qimg = QImage(
                    data, pil_img.width, pil_img.height, pil_img.width * 3, QImage.Format_RGB888
                )
            else:
                data = pil_img.tobytes("raw", "RGBA")
                qimg = QImage(
                    data, pil_img.width, pil_img.height, pil_img.width * 4, QImage.Format_RGBA8888
                )
            if qimg is None or qimg.isNull():
                return None
            return qimg.copy()
        except (ValueError, TypeError) as ex:
            logger.debug("PIL->QImage convert failed: {}", ex)
            return None
