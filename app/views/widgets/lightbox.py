"""Full-window lightbox overlay driven by `ModalController`."""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import QEvent, QPointF, QSize, Qt
from PySide6.QtGui import QIcon, QKeyEvent, QMouseEvent, QPainter, QColor, QPixmap
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QSizePolicy,
    QToolButton,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.views.constants import LIGHTBOX_PREVIEW_SIDE, LIGHTBOX_THUMB_PX, LOADING_TEXT
from app.views.image_tasks import ImageTaskRunner
from app.views.widgets.video_player import VideoPlayerWidget
from core.models import ModalState
from core.services.modal_service import LightboxView, ModalController, ModalEvent
from infrastructure.utils import format_display_date

_ACTIVE_THUMB_STYLE = "border: 3px solid #f90; border-radius: 4px;"
_THUMB_STYLE = "border: 1px solid #888; border-radius: 4px;"
_TAG_STYLE = "background:#eef; border-radius:8px; padding:2px 8px;"


class LightboxOverlay(QWidget):
    """Covers its parent with a dimmed backdrop and the open record's media.

    Every dismissal gesture is forwarded to the controller; the overlay only
    redraws in response to controller events.
    """

    def __init__(
        self, parent: QWidget, controller: ModalController, task_runner: ImageTaskRunner
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._runner = task_runner

        self._video: VideoPlayerWidget | None = None
        self._image_label: QLabel | None = None
        self._preview_token: str | None = None
        self._thumb_buttons: list[QToolButton] = []
        self._thumb_tokens: dict[str, QToolButton] = {}
        self._press_pos: QPointF | None = None
        self._press_on_backdrop = False

        self.setFocusPolicy(Qt.StrongFocus)
        self._setup_ui()
        self.hide()

        controller.subscribe(self._on_modal_event)
        parent.installEventFilter(self)

    def _setup_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(40, 30, 40, 30)

        self._content = QFrame(self)
        self._content.setObjectName("lightboxContent")
        self._content.setStyleSheet("#lightboxContent { background: palette(window); }")
        self._content.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        content = QHBoxLayout(self._content)

        media_col = QVBoxLayout()
        self._media_holder = QWidget(self._content)
        self._media_layout = QVBoxLayout(self._media_holder)
        self._media_layout.setContentsMargins(0, 0, 0, 0)
        self._media_holder.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        media_col.addWidget(self._media_holder, 1)

        self._thumb_area = QScrollArea(self._content)
        self._thumb_area.setWidgetResizable(True)
        self._thumb_area.setFixedHeight(LIGHTBOX_THUMB_PX + 24)
        self._thumb_area.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        self._thumb_strip = QWidget()
        self._thumb_layout = QHBoxLayout(self._thumb_strip)
        self._thumb_layout.setContentsMargins(2, 2, 2, 2)
        self._thumb_area.setWidget(self._thumb_strip)
        media_col.addWidget(self._thumb_area)
        content.addLayout(media_col, 3)

        info_col = QVBoxLayout()
        header = QHBoxLayout()
        self._title_label = QLabel("")
        self._title_label.setWordWrap(True)
        self._title_label.setStyleSheet("font-size: 20px; font-weight: bold;")
        header.addWidget(self._title_label, 1)
        self._close_button = QPushButton("✕")
        self._close_button.setFixedSize(32, 32)
        self._close_button.setToolTip("Close (Esc)")
        self._close_button.clicked.connect(self._controller.close)
        header.addWidget(self._close_button, 0, Qt.AlignTop)
        info_col.addLayout(header)

        self._date_label = QLabel("")
        info_col.addWidget(self._date_label)
        self._desc_label = QLabel("")
        self._desc_label.setWordWrap(True)
        info_col.addWidget(self._desc_label)
        self._tags_layout = QHBoxLayout()
        info_col.addLayout(self._tags_layout)
        info_col.addStretch()
        content.addLayout(info_col, 2)

        root.addWidget(self._content)

    # Controller events
    def _on_modal_event(self, event: ModalEvent, _state: ModalState) -> None:
        if event is ModalEvent.OPENED:
            view = self._controller.current_view()
            if view is not None:
                self._render(view)
                self.setGeometry(self.parentWidget().rect())
                self.show()
                self.raise_()
                self.setFocus()
        elif event is ModalEvent.MEDIA_CHANGED:
            view = self._controller.current_view()
            if view is not None:
                self._swap_media(view)
        elif event is ModalEvent.CLOSED:
            self._release_media()
            self.hide()

    def _render(self, view: LightboxView) -> None:
        self._build_thumbnails(view)
        self._tags_clear()
        for name in view.categories:
            tag = QLabel(name)
            tag.setStyleSheet(_TAG_STYLE)
            self._tags_layout.addWidget(tag)
        self._tags_layout.addStretch()
        date_text = format_display_date(view.created_at)
        self._date_label.setText(f"🗓️ {date_text}" if date_text else "")
        self._date_label.setVisible(bool(date_text))
        self._swap_media(view)

    def _swap_media(self, view: LightboxView) -> None:
        """Replace only the main media element, the texts and the active thumbnail."""
        self._release_media()
        media = view.media
        if media.is_video:
            self._video = VideoPlayerWidget(
                media.url, self._media_holder, muted=False, loop=True, show_controls=True
            )
            self._media_layout.addWidget(self._video)
            self._video.play()
        else:
            self._image_label = QLabel(LOADING_TEXT, self._media_holder)
            self._image_label.setAlignment(Qt.AlignCenter)
            self._image_label.setMinimumSize(200, 200)
            self._media_layout.addWidget(self._image_label)
            self._preview_token = self._runner.request_preview(media.url, LIGHTBOX_PREVIEW_SIDE)

        self._title_label.setText(view.title)
        self._desc_label.setText(view.description)
        self._desc_label.setVisible(bool(view.description))
        for idx, button in enumerate(self._thumb_buttons):
            button.setStyleSheet(_ACTIVE_THUMB_STYLE if idx == view.active_index else _THUMB_STYLE)

    def _build_thumbnails(self, view: LightboxView) -> None:
        for button in self._thumb_buttons:
            self._thumb_layout.removeWidget(button)
            button.deleteLater()
        self._thumb_buttons = []
        self._thumb_tokens = {}
        self._thumb_area.setVisible(bool(view.thumbnails))

        for idx, item in enumerate(view.thumbnails):
            button = QToolButton(self._thumb_strip)
            button.setFixedSize(LIGHTBOX_THUMB_PX, LIGHTBOX_THUMB_PX)
            button.setIconSize(QSize(LIGHTBOX_THUMB_PX - 8, LIGHTBOX_THUMB_PX - 8))
            if item.is_video:
                button.setText("▶")
            else:
                token = self._runner.request_thumbnail(item.url, LIGHTBOX_THUMB_PX)
                self._thumb_tokens[token] = button
            button.clicked.connect(lambda _=False, i=idx: self._controller.select(i))
            self._thumb_layout.addWidget(button)
            self._thumb_buttons.append(button)

    def _tags_clear(self) -> None:
        while self._tags_layout.count():
            it = self._tags_layout.takeAt(0)
            w = it.widget()
            if w is not None:
                w.deleteLater()

    def _release_media(self) -> None:
        """Mute and stop the current video (if any) and drop the main media widget."""
        if self._video is not None:
            try:
                self._video.set_muted(True)
                self._video.pause()
                self._media_layout.removeWidget(self._video)
                self._video.cleanup()
                self._video.deleteLater()
            except RuntimeError as ex:
                logger.debug("Lightbox video already released: {}", ex)
            self._video = None
        if self._image_label is not None:
            self._media_layout.removeWidget(self._image_label)
            self._image_label.deleteLater()
            self._image_label = None
        self._preview_token = None

    # Image results routed from the main window
    def on_image_loaded(self, token: str, _url: str, image: Any) -> bool:
        if token == self._preview_token and self._image_label is not None:
            if image is None or image.isNull():
                self._image_label.setText("Image unavailable")
            else:
                pm = QPixmap.fromImage(image)
                target = self._media_holder.size()
                if target.width() > 0 and target.height() > 0:
                    pm = pm.scaled(target, Qt.KeepAspectRatio, Qt.SmoothTransformation)
                self._image_label.setPixmap(pm)
            return True
        button = self._thumb_tokens.pop(token, None)
        if button is not None:
            if image is not None and not image.isNull():
                button.setIcon(QIcon(QPixmap.fromImage(image)))
            return True
        return False

    # Input
    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0, 190))
        super().paintEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        key = event.key()
        if key == Qt.Key_Escape:
            self._controller.close()
        elif key == Qt.Key_Back or (
            key == Qt.Key_Left and event.modifiers() & Qt.AltModifier
        ):
            self._controller.handle_back()
        else:
            super().keyPressEvent(event)
            return
        event.accept()

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() == Qt.BackButton:
            self._controller.handle_back()
            event.accept()
            return
        if event.button() == Qt.LeftButton:
            self._press_pos = event.position()
            self._press_on_backdrop = self.childAt(event.position().toPoint()) is None
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if event.button() != Qt.LeftButton or self._press_pos is None:
            super().mouseReleaseEvent(event)
            return
        delta = event.position() - self._press_pos
        on_backdrop = self._press_on_backdrop
        self._press_pos = None
        if self._controller.handle_swipe(delta.x(), delta.y(), self.width()):
            return
        release_on_backdrop = self.childAt(event.position().toPoint()) is None
        self._controller.close_from_click(on_backdrop and release_on_backdrop)

    def eventFilter(self, obj, event: QEvent) -> bool:  # type: ignore[override]
        if obj is self.parentWidget() and event.type() == QEvent.Resize and self.isVisible():
            self.setGeometry(obj.rect())
        return False
