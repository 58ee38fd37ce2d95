"""Lightbox state machine decoupled from any UI toolkit.

States are ``Closed`` and ``Open(record_id, media_index)``. Views feed user
gestures in and listen for `ModalEvent` notifications to update widgets.
Opening pushes a checkpoint onto a `NavigationHistory` so that a platform
"back" gesture closes the lightbox instead of leaving the page.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from loguru import logger

from core.models import CatRecord, MediaItem, ModalState
from core.services.render_service import PLACEHOLDER_MEDIA

DEFAULT_TITLE = "Cute Cat"
SWIPE_WIDTH_RATIO = 0.20
SWIPE_DOMINANCE = 1.5

MODAL_CHECKPOINT = "modal-open"


class ModalEvent(str, Enum):
    OPENED = "opened"
    MEDIA_CHANGED = "media_changed"
    CLOSED = "closed"


@dataclass
class LightboxView:
    """Everything the lightbox needs to draw the current state."""

    record_id: str
    media: MediaItem
    title: str
    description: str
    categories: list[str]
    created_at: datetime | None
    thumbnails: list[MediaItem] = field(default_factory=list)
    active_index: int = 0


class NavigationHistory:
    """Minimal back-stack standing in for the platform's navigation history."""

    def __init__(self) -> None:
        self._entries: list[str] = []

    def push(self, entry: str) -> None:
        self._entries.append(entry)

    def back(self) -> str | None:
        """Pop and return the top entry, or None when empty."""
        if not self._entries:
            return None
        return self._entries.pop()

    @property
    def top(self) -> str | None:
        return self._entries[-1] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)


def is_dismiss_swipe(dx: float, dy: float, viewport_width: float) -> bool:
    """True for a rightward, mostly-horizontal swipe longer than 20% of the width."""
    threshold = viewport_width * SWIPE_WIDTH_RATIO
    return abs(dx) > abs(dy) * SWIPE_DOMINANCE and dx > threshold


Listener = Callable[[ModalEvent, ModalState], None]


class ModalController:
    """Owns the single lightbox slot.

    Args:
        lookup: Returns the record for an id from the current record set, or None.
        history: Navigation stack receiving the open checkpoint.
    """

    def __init__(
        self,
        lookup: Callable[[str], CatRecord | None],
        history: NavigationHistory | None = None,
    ) -> None:
        self._lookup = lookup
        self._history = history or NavigationHistory()
        self._state = ModalState()
        self._record: CatRecord | None = None
        self._listeners: list[Listener] = []

    @property
    def state(self) -> ModalState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def history(self) -> NavigationHistory:
        return self._history

    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # Transitions
    def open(self, record_id: str, media_index: int = 0) -> bool:
        """Open the lightbox on `record_id`; unknown ids leave the state untouched."""
        record = self._lookup(record_id)
        if record is None:
            logger.debug("Ignoring lightbox open for unknown record {}", record_id)
            return False

        if media_index < 0 or media_index >= len(record.media):
            media_index = 0

        already_open = self._state.is_open
        self._record = record
        self._state.record_id = record.id
        self._state.media_index = media_index
        if not already_open or not self._state.checkpoint_pushed:
            self._history.push(MODAL_CHECKPOINT)
            self._state.checkpoint_pushed = True

        self._emit(ModalEvent.OPENED)
        return True

    def select(self, media_index: int) -> bool:
        """Switch the main media to another thumbnail of the open record."""
        if not self._state.is_open or self._record is None:
            return False
        if media_index < 0 or media_index >= len(self._record.media):
            return False
        if media_index == self._state.media_index:
            return False
        self._state.media_index = media_index
        self._emit(ModalEvent.MEDIA_CHANGED)
        return True

    def close(self) -> bool:
        """Close via the close control or the Escape key."""
        return self._close(release_checkpoint=True)

    def close_from_click(self, target_is_backdrop: bool) -> bool:
        """Close on a click, but only when the backdrop itself was clicked."""
        if not target_is_backdrop:
            return False
        return self._close(release_checkpoint=True)

    def handle_swipe(self, dx: float, dy: float, viewport_width: float) -> bool:
        """Close on a dismiss swipe; short or vertical swipes are ignored."""
        if not self._state.is_open:
            return False
        if not is_dismiss_swipe(dx, dy, viewport_width):
            return False
        return self._close(release_checkpoint=True)

    def handle_back(self) -> bool:
        """Close on platform back navigation, which already consumed the checkpoint."""
        if not self._state.is_open:
            return False
        if self._state.checkpoint_pushed and self._history.top == MODAL_CHECKPOINT:
            self._history.back()
        self._state.checkpoint_pushed = False
        return self._close(release_checkpoint=False)

    # Views
    def current_view(self) -> LightboxView | None:
        """Describe the open lightbox, or None when closed."""
        if not self._state.is_open or self._record is None:
            return None
        record = self._record
        media = record.media
        index = self._state.media_index
        current = media[index] if media else PLACEHOLDER_MEDIA
        return LightboxView(
            record_id=record.id,
            media=current,
            title=current.title or record.title or DEFAULT_TITLE,
            description=current.description or record.description or "",
            categories=list(record.categories),
            created_at=record.created_at,
            thumbnails=list(media) if len(media) > 1 else [],
            active_index=index,
        )

    # Internal helpers
    def _close(self, release_checkpoint: bool) -> bool:
        if not self._state.is_open:
            return False
        if release_checkpoint and self._state.checkpoint_pushed:
            if self._history.top == MODAL_CHECKPOINT:
                self._history.back()
        self._state = ModalState()
        self._record = None
        self._emit(ModalEvent.CLOSED)
        return True

    def _emit(self, event: ModalEvent) -> None:
        for listener in list(self._listeners):
            listener(event, self._state)
