"""SearchDebouncer: last-keystroke-wins delay for the search box."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal

DEFAULT_DEBOUNCE_MS = 300


class SearchDebouncer(QObject):
    """Owns the single pending search timer.

    Every `push` replaces the pending text and restarts the timer; only the
    text present when the timer finally expires is emitted via `triggered`.
    """

    triggered = Signal(str)

    def __init__(self, delay_ms: int = DEFAULT_DEBOUNCE_MS, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._pending: str | None = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, int(delay_ms)))
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def is_pending(self) -> bool:
        return self._pending is not None

    def push(self, text: str) -> None:
        """Record `text` and restart the quiet period."""
        self._pending = text
        self._timer.start()

    def flush(self) -> None:
        """Emit the pending text now, if any."""
        if self._pending is None:
            return
        self._timer.stop()
        self._fire()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = None

    def _fire(self) -> None:
        text, self._pending = self._pending, None
        if text is not None:
            self.triggered.emit(text)
