from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import QObject, QRunnable, QThreadPool
from loguru import logger

from core.services.interfaces import LoadResult


class _RecordLoadTask(QRunnable):
    """QRunnable fetching the record collection off the UI thread.

    Emits `receiver.recordsLoaded(result)`; the receiver is expected to own a
    Qt `Signal(object)` named `recordsLoaded`.
    """

    def __init__(self, *, fetch: Callable[[], LoadResult], receiver: QObject) -> None:
        super().__init__()
        self._fetch = fetch
        self._receiver = receiver

    def run(self) -> None:  # type: ignore[override]
        try:
            result = self._fetch()
        except Exception as ex:  # pragma: no cover - GUI background task
            logger.exception("Record load task failed")
            result = LoadResult(records=[], error=str(ex))
        try:
            self._receiver.recordsLoaded.emit(result)  # type: ignore[attr-defined]
        except RuntimeError:  # pragma: no cover - window closed mid-fetch
            logger.debug("Discarding record load result; receiver is gone")


def start_record_load(fetch: Callable[[], LoadResult], receiver: QObject) -> None:
    """Run `fetch` on the global thread pool and deliver its result to `receiver`."""
    QThreadPool.globalInstance().start(_RecordLoadTask(fetch=fetch, receiver=receiver))
