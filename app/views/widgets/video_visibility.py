"""Play card videos while they are on screen and pause them otherwise."""

from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, QPoint, QTimer
from PySide6.QtWidgets import QAbstractScrollArea, QWidget

from app.views.constants import VIDEO_REGISTER_DELAY_MS, VIDEO_VISIBLE_RATIO
from app.views.media_utils import visible_fraction
from app.views.widgets.video_player import VideoPlayerWidget


class VideoVisibilityWatcher(QObject):
    """Tracks registered players against a viewport.

    A player plays while at least `ratio` of it intersects the viewport and
    pauses otherwise. Checks run on scroll, resize and after (re-)registration.
    """

    def __init__(
        self, viewport: QWidget, ratio: float = VIDEO_VISIBLE_RATIO, parent: QObject | None = None
    ) -> None:
        super().__init__(parent)
        self._viewport = viewport
        self._ratio = ratio
        self._players: list[VideoPlayerWidget] = []
        self._suspended = False
        viewport.installEventFilter(self)

    def watch_scroll_area(self, area: QAbstractScrollArea) -> None:
        """Re-check visibility whenever `area` scrolls."""
        area.verticalScrollBar().valueChanged.connect(self.update_playback)
        area.horizontalScrollBar().valueChanged.connect(self.update_playback)

    def register(self, players: list[VideoPlayerWidget]) -> None:
        """Replace the observed players and evaluate them immediately."""
        self._players = [p for p in players if p is not None]
        self.update_playback()

    def register_later(self, players: list[VideoPlayerWidget]) -> None:
        """Register after a short delay so freshly built layouts have settled."""
        pending = list(players)
        QTimer.singleShot(VIDEO_REGISTER_DELAY_MS, self, lambda: self.register(pending))

    def clear(self) -> None:
        self._players = []

    def set_suspended(self, suspended: bool) -> None:
        """Pause everything while suspended (e.g. the lightbox covers the grid)."""
        self._suspended = suspended
        self.update_playback()

    def update_playback(self, *_: object) -> None:
        for player in list(self._players):
            try:
                if not self._suspended and self._is_visible(player):
                    player.play()
                else:
                    player.pause()
            except RuntimeError:
                # Widget deleted by a re-render before we were told
                self._players.remove(player)

    def _is_visible(self, player: VideoPlayerWidget) -> bool:
        if not player.isVisible():
            return False
        pos = player.mapTo(self._viewport, QPoint(0, 0))
        fy = visible_fraction(pos.y(), player.height(), 0, self._viewport.height())
        fx = visible_fraction(pos.x(), player.width(), 0, self._viewport.width())
        return fx * fy >= self._ratio

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if obj is self._viewport and event.type() in (QEvent.Resize, QEvent.Show):
            self.update_playback()
        return False
