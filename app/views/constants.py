"""
UI/view constants centralized for reuse across view modules.

Only magic numbers, roles and fixed texts live here; display rules such as
truncation budgets belong to `core.services.render_service`.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

# Category list data roles
CATEGORY_NAME_ROLE: int = Qt.UserRole  # raw category name on each row


# Card grid defaults
DEFAULT_CARD_SIZE: int = 240  # overridable by settings.json
SHELF_CARD_SIZE: int = 160
GRID_MIN_CARD_PX: int = 160
GRID_SPACING_PX: int = 12
GRID_MARGIN_PX: int = 8

# Video tiles play while at least this share of them is on screen
VIDEO_VISIBLE_RATIO: float = 0.5
# Delay before (re-)registering video tiles after a render
VIDEO_REGISTER_DELAY_MS: int = 100

# Lightbox
LIGHTBOX_THUMB_PX: int = 72
LIGHTBOX_PREVIEW_SIDE: int = 1600

LOADING_TEXT = "Loading…"
GRID_LOADING_TEXT = "Loading cats…"
