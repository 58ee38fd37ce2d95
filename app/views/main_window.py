"""MainWindow: search sidebar, shelves, card grid and lightbox.

User input reaches the view-model through the `EVENT_BINDINGS` table below,
which lists every (source widget, signal, handler) triple the window wires up.
"""

from __future__ import annotations

from typing import Any

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QButtonGroup,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListView,
    QMainWindow,
    QRadioButton,
)
from loguru import logger

from app.viewmodels.gallery_vm import GalleryVM
from app.views.card_grid import CardGrid
from app.views.components.category_list_controller import CategoryListController
from app.views.components.menu_controller import MenuController
from app.views.components.search_debouncer import DEFAULT_DEBOUNCE_MS, SearchDebouncer
from app.views.constants import (
    DEFAULT_CARD_SIZE,
    GRID_LOADING_TEXT,
    LOADING_TEXT,
    SHELF_CARD_SIZE,
)
from app.views.image_tasks import ImageTaskRunner
from app.views.layout.layout_manager import LayoutManager
from app.views.record_tasks import start_record_load
from app.views.widgets.lightbox import LightboxOverlay
from app.views.widgets.video_visibility import VideoVisibilityWatcher
from core.models import ModalState, ViewMode
from core.services.interfaces import LoadResult
from core.services.modal_service import ModalController, ModalEvent, NavigationHistory
from infrastructure.logging import open_latest_log, open_log_directory

# (source attribute, signal name, handler method)
EVENT_BINDINGS: list[tuple[str, str | None, str]] = [
    ("search_input", "textEdited", "_on_search_text_edited"),
    ("_debouncer", "triggered", "_on_search_triggered"),
    ("category_search_input", "textChanged", "_on_category_query_changed"),
    ("_view_mode_group", "idToggled", "_on_view_mode_toggled"),
    ("grid", "cardActivated", "_on_card_activated"),
    ("recent_shelf", "cardActivated", "_on_card_activated"),
    ("popular_shelf", "cardActivated", "_on_card_activated"),
    ("imageLoaded", None, "_on_image_loaded"),
    ("recordsLoaded", None, "_on_records_loaded"),
]


def connect_bindings(owner: Any, bindings: list[tuple[str, str | None, str]]) -> None:
    """Connect each (source, signal, handler) triple on `owner`.

    A None signal name means the source attribute is itself a signal.
    """
    for source_name, signal_name, handler_name in bindings:
        source = getattr(owner, source_name)
        signal = getattr(source, signal_name) if signal_name else source
        signal.connect(getattr(owner, handler_name))


class MainWindow(QMainWindow):
    """Main application window for the cats gallery."""

    imageLoaded = Signal(str, str, object)  # token, url, QImage
    recordsLoaded = Signal(object)  # LoadResult

    _MODE_IDS = {0: ViewMode.GROUPED, 1: ViewMode.PER_ITEM}

    def __init__(
        self,
        vm: GalleryVM,
        media_service: Any | None = None,
        settings: Any | None = None,
    ) -> None:
        """Initialize MainWindow with its services and components.

        Args:
            vm: Gallery view-model owning records and filter state
            media_service: Service downloading thumbnails and previews
            settings: Settings instance for configuration
        """
        super().__init__()
        self._vm = vm
        self._media = media_service
        self._settings = settings
        self._closing = False

        self._card_size = DEFAULT_CARD_SIZE
        debounce_ms = DEFAULT_DEBOUNCE_MS
        if settings is not None:
            self._card_size = settings.get_int("gallery.card_size", DEFAULT_CARD_SIZE)
            debounce_ms = settings.get_int("search.debounce_ms", DEFAULT_DEBOUNCE_MS)

        self._debouncer = SearchDebouncer(debounce_ms, self)
        self._history = NavigationHistory()
        self.modal = ModalController(self._vm.find_record, self._history)

        self._setup_components()
        self._setup_ui()
        self._connect_signals()
        self.statusBar().showMessage("Ready", 3000)

    def _setup_components(self) -> None:
        """Setup controllers that do not depend on the widget tree."""
        self.menu_controller = MenuController(self)
        self.layout_manager = LayoutManager(self)
        self._runner = ImageTaskRunner(service=self._media, receiver=self)

    def _setup_ui(self) -> None:
        """Build the sidebar, the scrolling content column and the lightbox."""
        self.setWindowTitle("Cats Gallery")

        sidebar, side = self.layout_manager.create_sidebar_section()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search cats…")
        self.search_input.setClearButtonEnabled(True)
        side.addWidget(self.search_input)

        mode_row = QHBoxLayout()
        self._view_mode_group = QButtonGroup(self)
        for mode_id, text in ((0, "Grouped"), (1, "Per photo")):
            radio = QRadioButton(text)
            radio.setChecked(self._MODE_IDS[mode_id] is self._vm.view_mode)
            self._view_mode_group.addButton(radio, mode_id)
            mode_row.addWidget(radio)
        side.addLayout(mode_row)

        side.addWidget(QLabel("Categories"))
        self.category_search_input = QLineEdit()
        self.category_search_input.setPlaceholderText("Filter categories…")
        self.category_search_input.setClearButtonEnabled(True)
        side.addWidget(self.category_search_input)
        self.category_list = QListView()
        self.category_empty_label = QLabel("")
        side.addWidget(self.category_list, 1)
        side.addWidget(self.category_empty_label)
        self.category_controller = CategoryListController(
            self.category_list, self.category_empty_label
        )
        self.category_controller.setup_list_properties()

        scroll, content = self.layout_manager.create_content_section()
        self._scroll = scroll

        shelf_height = SHELF_CARD_SIZE + 150
        self.recent_shelf = CardGrid(None, self._runner, SHELF_CARD_SIZE, single_row=True)
        self.recent_section, recent_strip = self.layout_manager.create_shelf_section(
            "Recent", self.recent_shelf, shelf_height
        )
        content.addWidget(self.recent_section)

        self.popular_shelf = CardGrid(None, self._runner, SHELF_CARD_SIZE, single_row=True)
        self.popular_section, popular_strip = self.layout_manager.create_shelf_section(
            "Popular", self.popular_shelf, shelf_height
        )
        content.addWidget(self.popular_section)

        self.count_label = QLabel("")
        self.count_label.setStyleSheet("font-weight: bold;")
        content.addWidget(self.count_label)

        self.grid = CardGrid(None, self._runner, self._card_size)
        content.addWidget(self.grid, 1)

        central = self.layout_manager.setup_main_layout(sidebar, scroll)
        self.setCentralWidget(central)

        self._watcher = VideoVisibilityWatcher(scroll.viewport(), parent=self)
        for area in (scroll, recent_strip, popular_strip):
            self._watcher.watch_scroll_area(area)

        self.lightbox = LightboxOverlay(central, self.modal, self._runner)

        self.layout_manager.setup_initial_window_size()
        self.menu_controller.setup_menus()

    def _connect_signals(self) -> None:
        """Connect all signal/slot relationships."""
        self.menu_controller.connect_actions(
            {
                "reload": self.start_loading,
                "exit": self.close,
                "open_latest_log": open_latest_log,
                "open_log_directory": open_log_directory,
            }
        )
        connect_bindings(self, EVENT_BINDINGS)
        self.category_controller.set_toggle_handler(self._on_category_toggled)
        self.modal.subscribe(self._on_modal_event)

    # Loading
    def start_loading(self) -> None:
        """Show loading placeholders and fetch records in the background."""
        self.grid.show_message(GRID_LOADING_TEXT)
        self.recent_shelf.show_message(LOADING_TEXT)
        self.popular_shelf.show_message(LOADING_TEXT)
        self.recent_section.setVisible(True)
        self.popular_section.setVisible(True)
        self.category_controller.show_message(LOADING_TEXT)
        self.count_label.setText("")
        self.menu_controller.enable_action("reload", False)
        start_record_load(self._vm.fetch, self)

    def _on_records_loaded(self, result: LoadResult) -> None:
        if self._closing:
            logger.debug("Window closing; dropping {} loaded records", len(result.records))
            return
        self.menu_controller.enable_action("reload", True)
        if self.modal.is_open:
            self.modal.close()
        self._vm.apply(result)
        self.refresh_shelves()
        self.refresh_categories()
        self.refresh_gallery()
        if result.ok:
            self.statusBar().showMessage(f"Loaded {self._vm.record_count} cats", 3000)
        else:
            self.statusBar().showMessage("Failed to load cats", 5000)

    # Rendering
    def refresh_gallery(self) -> None:
        """Re-filter and redraw the main grid and the count label."""
        view = self._vm.gallery_view()
        self.count_label.setText(view.label)
        if view.message is not None:
            self.grid.show_message(view.message)
        else:
            self.grid.show_cards(view.cards)
        self._register_videos()

    def refresh_shelves(self) -> None:
        for section, grid, shelf in (
            (self.recent_section, self.recent_shelf, self._vm.recent_shelf()),
            (self.popular_section, self.popular_shelf, self._vm.popular_shelf()),
        ):
            section.setVisible(shelf.is_visible)
            if shelf.error is not None:
                grid.show_message(shelf.error)
            elif shelf.cards:
                grid.show_cards(shelf.cards)
            else:
                grid.clear()

    def refresh_categories(self) -> None:
        entries, message = self._vm.visible_categories(self.category_search_input.text())
        self.category_controller.refresh(
            entries, self._vm.filter_state.selected_categories, message
        )

    def _register_videos(self) -> None:
        players = (
            self.grid.video_players()
            + self.recent_shelf.video_players()
            + self.popular_shelf.video_players()
        )
        self._watcher.register_later(players)

    # Handlers
    def _on_search_text_edited(self, text: str) -> None:
        self._debouncer.push(text)

    def _on_search_triggered(self, text: str) -> None:
        self._vm.set_search_term(text)
        self.refresh_gallery()

    def _on_category_toggled(self, name: str, checked: bool) -> None:
        self._vm.set_category_selected(name, checked)
        self.refresh_gallery()

    def _on_category_query_changed(self, _text: str) -> None:
        self.refresh_categories()

    def _on_view_mode_toggled(self, mode_id: int, checked: bool) -> None:
        if not checked:
            return
        self._vm.set_view_mode(self._MODE_IDS.get(mode_id, ViewMode.GROUPED))
        self.refresh_gallery()

    def _on_card_activated(self, record_id: str, media_index: int) -> None:
        self.modal.open(record_id, media_index)

    def _on_modal_event(self, event: ModalEvent, _state: ModalState) -> None:
        if event is ModalEvent.OPENED:
            self._watcher.set_suspended(True)
            self._scroll.verticalScrollBar().setEnabled(False)
        elif event is ModalEvent.CLOSED:
            self._scroll.verticalScrollBar().setEnabled(True)
            self._watcher.set_suspended(False)

    def _on_image_loaded(self, token: str, url: str, image: Any) -> None:
        # Several receivers may be waiting on the same token
        for receiver in (self.grid, self.recent_shelf, self.popular_shelf, self.lightbox):
            receiver.on_image_loaded(token, url, image)

    def closeEvent(self, event) -> None:
        """Stop timers and media before the window goes away."""
        self._closing = True
        self._debouncer.cancel()
        self.modal.close()
        self._watcher.clear()
        for grid in (self.grid, self.recent_shelf, self.popular_shelf):
            grid.clear()
        event.accept()
