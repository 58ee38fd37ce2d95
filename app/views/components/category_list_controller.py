"""CategoryListController: Manages the category checklist and its empty states."""

from __future__ import annotations

from collections.abc import Callable, Container, Iterable

from PySide6.QtCore import Qt
from PySide6.QtGui import QStandardItem, QStandardItemModel
from PySide6.QtWidgets import QLabel, QListView
from loguru import logger

from app.views.category_model_builder import build_model
from app.views.constants import CATEGORY_NAME_ROLE


class CategoryListController:
    """Manages the checkable category list.

    This class encapsulates:
    - Model building from `CategoryEntry` items
    - Check-state to selection callbacks
    - Switching between the list and an empty-state message
    """

    def __init__(self, list_view: QListView, empty_label: QLabel) -> None:
        """Initialize with the list view and the label used for empty states.

        Args:
            list_view: The QListView widget to manage
            empty_label: Label shown instead of the list when nothing matches
        """
        self.list_view = list_view
        self.empty_label = empty_label
        self._model: QStandardItemModel | None = None
        self._toggle_handler: Callable[[str, bool], None] | None = None

    def setup_list_properties(self) -> None:
        """Configure list view properties and behavior."""
        self.list_view.setUniformItemSizes(True)
        self.list_view.setSelectionMode(QListView.NoSelection)
        self.list_view.setEditTriggers(QListView.NoEditTriggers)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setWordWrap(True)
        self.empty_label.setVisible(False)

    def set_toggle_handler(self, handler: Callable[[str, bool], None]) -> None:
        """Register the callback invoked as ``handler(name, checked)`` on toggles."""
        self._toggle_handler = handler

    def refresh(
        self,
        entries: Iterable[object],
        selected: Container[str],
        empty_message: str | None = None,
    ) -> None:
        """Rebuild the list, or show `empty_message` when it is given.

        Args:
            entries: Category entries to list
            selected: Names whose checkbox starts checked
            empty_message: Text shown in place of the list when not None
        """
        if empty_message is not None:
            self.list_view.setVisible(False)
            self.empty_label.setText(empty_message)
            self.empty_label.setVisible(True)
            return

        model = build_model(entries, selected)
        model.setParent(self.list_view)
        # Connect after building so initial check states do not echo back
        model.itemChanged.connect(self._on_item_changed)
        self.list_view.setModel(model)
        if self._model is not None:
            self._model.deleteLater()
        self._model = model

        self.empty_label.setVisible(False)
        self.list_view.setVisible(True)

    def show_message(self, message: str) -> None:
        """Replace the list with a status message (loading, errors)."""
        self.refresh([], (), empty_message=message)

    def _on_item_changed(self, item: QStandardItem) -> None:
        name = item.data(CATEGORY_NAME_ROLE)
        if not name or self._toggle_handler is None:
            return
        checked = item.checkState() == Qt.Checked
        logger.debug("Category toggled - {}: {}", name, checked)
        self._toggle_handler(str(name), checked)
