"""Clickable gallery card: media, badge, title, description and category chips."""

from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QMouseEvent
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from app.viewmodels.card_vm import CardVM
from app.views.constants import LOADING_TEXT
from app.views.widgets.video_player import VideoPlayerWidget

_CHIP_STYLE = "background:#eef; border-radius:8px; padding:1px 6px; font-size:11px;"
_MORE_CHIP_STYLE = "background:#ddd; border-radius:8px; padding:1px 6px; font-size:11px;"
_BADGE_STYLE = (
    "background:rgba(0,0,0,160); color:white; border-radius:9px; padding:1px 7px; font-size:11px;"
)


class CardTile(QFrame):
    """One card in the grid or on a shelf.

    Emits ``activated(record_id, media_index)`` when clicked.
    """

    activated = Signal(str, int)

    def __init__(self, card: CardVM, side: int, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._card = card
        self._side = side
        self.image_label: QLabel | None = None
        self.player: VideoPlayerWidget | None = None

        self.setFrameShape(QFrame.StyledPanel)
        self.setCursor(Qt.PointingHandCursor)
        self.setFixedWidth(side + 12)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(6, 6, 6, 6)
        layout.setSpacing(4)

        media_box = QWidget(self)
        media_box.setFixedSize(side, side)
        if card.is_video:
            self.player = VideoPlayerWidget(card.media.url, media_box, muted=True, loop=True)
            self.player.setGeometry(0, 0, side, side)
        else:
            self.image_label = QLabel(LOADING_TEXT, media_box)
            self.image_label.setAlignment(Qt.AlignCenter)
            self.image_label.setGeometry(0, 0, side, side)
        if card.badge:
            badge = QLabel(card.badge, media_box)
            badge.setStyleSheet(_BADGE_STYLE)
            badge.adjustSize()
            badge.move(side - badge.width() - 6, 6)
            badge.raise_()
        layout.addWidget(media_box)

        if card.title:
            title = QLabel(card.title)
            title.setStyleSheet("font-weight: bold;")
            title.setWordWrap(True)
            layout.addWidget(title)
        if card.description:
            desc = QLabel(card.description)
            desc.setWordWrap(True)
            layout.addWidget(desc)

        if card.chips:
            chips = QHBoxLayout()
            chips.setSpacing(4)
            for name in card.chips:
                chip = QLabel(name)
                chip.setStyleSheet(_CHIP_STYLE)
                chips.addWidget(chip)
            if card.overflow_chip:
                more = QLabel(card.overflow_chip)
                more.setStyleSheet(_MORE_CHIP_STYLE)
                chips.addWidget(more)
            chips.addStretch()
            layout.addLayout(chips)

        layout.addStretch()

    @property
    def card(self) -> CardVM:
        return self._card

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton:
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.LeftButton and self.rect().contains(event.position().toPoint()):
            self.activated.emit(self._card.record_id, self._card.media_index)
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def cleanup(self) -> None:
        if self.player is not None:
            self.player.cleanup()
            self.player = None
