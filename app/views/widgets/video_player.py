"""Video player widget for remote media URLs."""

from __future__ import annotations

from PySide6.QtCore import Qt, QUrl
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtMultimediaWidgets import QVideoWidget
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QSlider,
    QVBoxLayout,
    QWidget,
)
from loguru import logger

from app.views.media_utils import format_duration


class VideoPlayerWidget(QWidget):
    """Streams a video URL, optionally with play/progress/volume controls.

    Card tiles use it muted, looping and without controls; the lightbox shows
    controls and plays with sound.
    """

    def __init__(
        self,
        url: str,
        parent: QWidget | None = None,
        *,
        muted: bool = True,
        loop: bool = True,
        show_controls: bool = False,
    ) -> None:
        super().__init__(parent)

        self._url = url
        self._duration = 0
        self._slider_dragging = False
        self._show_controls = show_controls

        self._media_player = QMediaPlayer(self)
        self._audio_output = QAudioOutput(self)
        self._audio_output.setMuted(muted)
        self._media_player.setAudioOutput(self._audio_output)
        self._video_widget = QVideoWidget(self)
        self._media_player.setVideoOutput(self._video_widget)
        if loop:
            self._media_player.setLoops(QMediaPlayer.Loops.Infinite)

        self._media_player.durationChanged.connect(self._on_duration_changed)
        self._media_player.positionChanged.connect(self._on_position_changed)
        self._media_player.playbackStateChanged.connect(self._on_state_changed)
        self._media_player.errorOccurred.connect(self._on_error)

        self._setup_ui()
        self._media_player.setSource(QUrl(url))

    def _setup_ui(self) -> None:
        """Setup the video surface and, when requested, the control row."""
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._video_widget.setMinimumSize(120, 90)
        self._video_widget.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        # Let clicks reach the owning tile
        self._video_widget.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        layout.addWidget(self._video_widget)

        self._error_label = QLabel("Video cannot be played")
        self._error_label.setAlignment(Qt.AlignCenter)
        self._error_label.setVisible(False)
        layout.addWidget(self._error_label)

        if not self._show_controls:
            return

        controls = QHBoxLayout()

        self._play_button = QPushButton("▶")
        self._play_button.setFixedSize(30, 30)
        self._play_button.clicked.connect(self._toggle_playback)
        controls.addWidget(self._play_button)

        self._progress_slider = QSlider(Qt.Horizontal)
        self._progress_slider.setRange(0, 0)
        self._progress_slider.sliderPressed.connect(self._on_slider_pressed)
        self._progress_slider.sliderReleased.connect(self._on_slider_released)
        self._progress_slider.valueChanged.connect(self._on_slider_value_changed)
        controls.addWidget(self._progress_slider)

        self._current_time = QLabel("--:--")
        controls.addWidget(self._current_time)
        self._duration_label = QLabel("--:--")
        controls.addWidget(self._duration_label)

        self._volume_button = QPushButton("🔊")
        self._volume_button.setFixedSize(30, 30)
        self._volume_button.clicked.connect(self._toggle_mute)
        controls.addWidget(self._volume_button)

        layout.addLayout(controls)
        self._update_play_button()
        self._update_volume_button()

    def _toggle_playback(self) -> None:
        if self.is_playing():
            self.pause()
        else:
            self.play()

    def _toggle_mute(self) -> None:
        self.set_muted(not self._audio_output.isMuted())

    def _on_slider_pressed(self) -> None:
        self._slider_dragging = True

    def _on_slider_released(self) -> None:
        self._slider_dragging = False
        self._media_player.setPosition(self._progress_slider.value())

    def _on_slider_value_changed(self, value: int) -> None:
        if self._slider_dragging:
            self._current_time.setText(format_duration(value))

    def _update_play_button(self) -> None:
        if not self._show_controls:
            return
        self._play_button.setText("⏸" if self.is_playing() else "▶")

    def _update_volume_button(self) -> None:
        if not self._show_controls:
            return
        self._volume_button.setText("🔇" if self._audio_output.isMuted() else "🔊")

    def _on_duration_changed(self, duration: int) -> None:
        self._duration = duration
        if self._show_controls:
            self._progress_slider.setRange(0, duration)
            self._duration_label.setText(format_duration(duration))

    def _on_position_changed(self, position: int) -> None:
        if self._show_controls and not self._slider_dragging:
            self._progress_slider.setValue(position)
            self._current_time.setText(format_duration(position))

    def _on_state_changed(self, _state: QMediaPlayer.PlaybackState) -> None:
        self._update_play_button()

    def _on_error(self, _error: QMediaPlayer.Error, message: str) -> None:
        logger.debug("Video playback error for {}: {}", self._url, message)
        self._video_widget.hide()
        self._error_label.setVisible(True)

    # Public API
    @property
    def url(self) -> str:
        return self._url

    def play(self) -> None:
        """Start playback; refusals from the backend are ignored."""
        try:
            self._media_player.play()
        except RuntimeError as ex:
            logger.debug("Autoplay refused for {}: {}", self._url, ex)

    def pause(self) -> None:
        try:
            self._media_player.pause()
        except RuntimeError:
            pass

    def set_muted(self, muted: bool) -> None:
        self._audio_output.setMuted(muted)
        self._update_volume_button()

    def is_muted(self) -> bool:
        return self._audio_output.isMuted()

    def is_playing(self) -> bool:
        return self._media_player.playbackState() == QMediaPlayer.PlaybackState.PlayingState

    def cleanup(self) -> None:
        """Stop playback and release the media pipeline."""
        try:
            self._media_player.stop()
            self._media_player.setSource(QUrl())
        except RuntimeError:
            pass
        try:
            self._media_player.deleteLater()
            self._audio_output.deleteLater()
        except RuntimeError:
            pass
