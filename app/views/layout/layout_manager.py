"""LayoutManager: Builds the sidebar/content split and the content sections."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QScrollArea,
    QSplitter,
    QVBoxLayout,
    QWidget,
)


class LayoutManager:
    """Manages main window layout and splitter behavior.

    This class encapsulates all layout-related functionality including:
    - Main window layout creation
    - Scrollable content column with shelves and the grid
    - Window sizing and positioning
    """

    # Layout constants
    SIDEBAR_STRETCH_FACTOR = 2
    CONTENT_STRETCH_FACTOR = 8
    SIDEBAR_WIDTH = 260
    WINDOW_SIZE_RATIO = 0.75

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to manage layout for
        """
        self.window = main_window
        self.splitter: QSplitter | None = None
        self.content_scroll: QScrollArea | None = None

    def setup_main_layout(self, sidebar_widget: QWidget, content_widget: QWidget) -> QWidget:
        """Create the main horizontal splitter layout.

        Args:
            sidebar_widget: Widget containing the search and category controls
            content_widget: Widget containing shelves, count label and grid

        Returns:
            Central widget configured with the layout
        """
        central = QWidget(self.window)
        root = QHBoxLayout(central)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(sidebar_widget)
        self.splitter.addWidget(content_widget)
        self.splitter.setStretchFactor(0, self.SIDEBAR_STRETCH_FACTOR)
        self.splitter.setStretchFactor(1, self.CONTENT_STRETCH_FACTOR)
        content_w = max(1, self.window.width() - self.SIDEBAR_WIDTH)
        self.splitter.setSizes([self.SIDEBAR_WIDTH, content_w])

        root.addWidget(self.splitter)
        return central

    def setup_initial_window_size(self) -> None:
        """Setup initial window size based on screen dimensions."""
        screen = QApplication.primaryScreen()
        if screen is not None:
            rect = screen.availableGeometry()
            width = int(rect.width() * self.WINDOW_SIZE_RATIO)
            height = int(rect.height() * self.WINDOW_SIZE_RATIO)
            self.window.resize(width, height)

    def create_sidebar_section(self) -> tuple[QWidget, QVBoxLayout]:
        """Create the sidebar widget with layout."""
        sidebar = QWidget()
        sidebar.setMinimumWidth(200)
        layout = QVBoxLayout(sidebar)
        return sidebar, layout

    def create_content_section(self) -> tuple[QScrollArea, QVBoxLayout]:
        """Create the vertically scrolling content column.

        Returns:
            The scroll area and the layout of its inner widget
        """
        self.content_scroll = QScrollArea()
        self.content_scroll.setWidgetResizable(True)
        self.content_scroll.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        inner = QWidget()
        layout = QVBoxLayout(inner)
        self.content_scroll.setWidget(inner)
        return self.content_scroll, layout

    def create_shelf_section(
        self, title: str, shelf: QWidget, height: int
    ) -> tuple[QWidget, QScrollArea]:
        """Wrap a single-row card grid in a titled, horizontally scrolling section.

        Returns:
            The section widget and its horizontal scroll area
        """
        section = QWidget()
        layout = QVBoxLayout(section)
        layout.setContentsMargins(0, 0, 0, 0)
        header = QLabel(title)
        header.setStyleSheet("font-size: 16px; font-weight: bold;")
        layout.addWidget(header)

        strip = QScrollArea()
        strip.setWidgetResizable(True)
        strip.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
        strip.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        strip.setFrameShape(QScrollArea.NoFrame)
        strip.setFixedHeight(height)
        strip.setWidget(shelf)
        layout.addWidget(strip)
        return section, strip
