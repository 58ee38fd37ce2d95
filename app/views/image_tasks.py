from __future__ import annotations

from typing import Any

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger


class _ImageTask(QRunnable):
    """QRunnable for background image download and decoding.

    Emits `receiver.imageLoaded(token, url, image)` upon completion. The
    receiver is expected to own a Qt `Signal(str, str, object)` named
    `imageLoaded`.
    """

    def __init__(
        self, *, url: str, side: int, is_preview: bool, service: Any, receiver: QObject, token: str
    ) -> None:
        super().__init__()
        self._url = url
        self._side = side
        self._is_preview = is_preview
        self._service = service
        self._receiver = receiver
        self._token = token

    def run(self) -> None:  # type: ignore[override]
        try:
            if self._is_preview:
                img = self._service.get_preview(self._url, self._side)
            else:
                img = self._service.get_thumbnail(self._url, self._side)
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.error("Image task failed for {}: {}", self._url, ex)
            img = None
        try:
            self._receiver.imageLoaded.emit(self._token, self._url, img)  # type: ignore[attr-defined]
        except RuntimeError:  # pragma: no cover - receiver already destroyed
            pass


class ImageTaskRunner:
    """Dispatches image load tasks to the global thread pool.

    Tokens identify the requester so late results can be routed or dropped:
    - Lightbox preview: "preview|{url}|{side}"
    - Card thumbnail: "thumb|{url}|{side}"
    """

    def __init__(self, *, service: Any, receiver: QObject) -> None:
        self._service = service
        self._receiver = receiver
        self._pool = QThreadPool.globalInstance()

    def request_preview(self, url: str, side: int) -> str:
        """Request a large preview image. Returns the token string."""
        token = f"preview|{url}|{side}"
        self._start(url, side, True, token)
        return token

    def request_thumbnail(self, url: str, side: int) -> str:
        """Request a card thumbnail for `url` with given `side`. Returns token."""
        token = f"thumb|{url}|{side}"
        self._start(url, side, False, token)
        return token

    def _start(self, url: str, side: int, is_preview: bool, token: str) -> None:
        if self._service is None:
            return
        task = _ImageTask(
            url=url,
            side=side,
            is_preview=is_preview,
            service=self._service,
            receiver=self._receiver,
            token=token,
        )
        self._pool.start(task)
