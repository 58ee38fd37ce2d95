from __future__ import annotations

from typing import Any

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtGui import QPixmap
from PySide6.QtWidgets import QGridLayout, QLabel, QVBoxLayout, QWidget
from loguru import logger

from app.viewmodels.card_vm import CardVM
from app.views.constants import (
    DEFAULT_CARD_SIZE,
    GRID_MARGIN_PX,
    GRID_MIN_CARD_PX,
    GRID_SPACING_PX,
)
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.card_tile import CardTile
from app.views.widgets.video_player import VideoPlayerWidget


class CardGrid(QWidget):
    """Lays out card tiles in a grid (main gallery) or a single row (shelves).

    Emits ``cardActivated(record_id, media_index)`` when a tile is clicked.
    """

    cardActivated = Signal(str, int)

    def __init__(
        self,
        parent: QWidget | None,
        task_runner: ImageTaskRunner,
        card_size: int | None = None,
        single_row: bool = False,
    ) -> None:
        super().__init__(parent)
        self._runner = task_runner
        self._card_size = int(card_size or DEFAULT_CARD_SIZE)
        self._single_row = single_row

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)

        self._message_label = QLabel("")
        self._message_label.setAlignment(Qt.AlignCenter)
        self._message_label.setWordWrap(True)
        self._message_label.setMinimumHeight(80)
        self._message_label.setVisible(False)
        root.addWidget(self._message_label)

        self._grid_container = QWidget()
        self._grid_layout = QGridLayout(self._grid_container)
        self._grid_layout.setSpacing(GRID_SPACING_PX)
        self._grid_layout.setContentsMargins(
            GRID_MARGIN_PX, GRID_MARGIN_PX, GRID_MARGIN_PX, GRID_MARGIN_PX
        )
        self._grid_layout.setAlignment(Qt.AlignLeft | Qt.AlignTop)
        root.addWidget(self._grid_container)
        root.addStretch()

        # state
        self._cards: list[CardVM] = []
        self._tiles: list[CardTile] = []
        self._pending_labels: dict[str, list[QLabel]] = {}
        self._columns = 0

        self.installEventFilter(self)

    # Public API
    def show_cards(self, cards: list[CardVM]) -> None:
        """Replace all tiles with one tile per card and request their thumbnails."""
        self.clear()
        self._cards = list(cards)
        self._message_label.setVisible(False)
        self._grid_container.setVisible(True)

        for card in self._cards:
            tile = CardTile(card, self._card_size, self._grid_container)
            tile.activated.connect(self.cardActivated)
            self._tiles.append(tile)
            if tile.image_label is not None:
                token = self._runner.request_thumbnail(card.media.url, self._card_size)
                self._pending_labels.setdefault(token, []).append(tile.image_label)

        self._columns = 0
        self.refit()

    def show_message(self, text: str) -> None:
        """Show a loading, empty or error message instead of tiles."""
        self.clear()
        self._grid_container.setVisible(False)
        self._message_label.setText(text)
        self._message_label.setVisible(True)

    def clear(self) -> None:
        for tile in self._tiles:
            try:
                self._grid_layout.removeWidget(tile)
                tile.cleanup()
                tile.deleteLater()
            except RuntimeError:
                pass
        self._tiles = []
        self._cards = []
        self._pending_labels = {}

    def video_players(self) -> list[VideoPlayerWidget]:
        return [t.player for t in self._tiles if t.player is not None]

    def on_image_loaded(self, token: str, url: str, image: Any) -> bool:
        """Apply a finished thumbnail; returns False for tokens this grid does not own."""
        labels = self._pending_labels.pop(token, None)
        if not labels:
            return False
        if image is None or image.isNull():
            logger.debug("Thumbnail unavailable for {}", url)
            for lbl in labels:
                lbl.setText("Image unavailable")
            return True
        pm = QPixmap.fromImage(image).scaled(
            self._card_size, self._card_size, Qt.KeepAspectRatio, Qt.SmoothTransformation
        )
        for lbl in labels:
            try:
                lbl.setPixmap(pm)
            except RuntimeError:
                pass
        return True

    def refit(self) -> None:
        """Re-flow tiles when the available width changes the column count."""
        cols = self._compute_columns()
        if cols == self._columns:
            return
        self._columns = cols
        for tile in self._tiles:
            self._grid_layout.removeWidget(tile)
        for i, tile in enumerate(self._tiles):
            r, c = divmod(i, cols)
            self._grid_layout.addWidget(tile, r, c)

    def _compute_columns(self) -> int:
        if self._single_row:
            return max(1, len(self._tiles))
        tile_w = max(GRID_MIN_CARD_PX, self._card_size) + 12 + GRID_SPACING_PX
        avail = max(1, self.width() - 2 * GRID_MARGIN_PX)
        return max(1, avail // tile_w)

    def eventFilter(self, obj: QObject, event: QEvent) -> bool:  # type: ignore[override]
        if obj is self and event.type() == QEvent.Resize:
            self.refit()
        return False
