"""LayoutManager: Manages main window layout and the panel splitter."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from app.views.constants import FUNCTION_KEYS


class LayoutManager:
    """Manages main window layout and splitter behavior.

    This class encapsulates all layout-related functionality including:
    - Two equal panel sections side by side
    - The function key bar below the panels
    - Window sizing
    """

    WINDOW_SIZE_RATIO = 0.6

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to manage layout for
        """
        self.window = main_window
        self.splitter: QSplitter | None = None

    def create_panel_section(self) -> tuple[QWidget, QVBoxLayout, QLabel]:
        """Create a panel section with its path label.

        Returns:
            (widget, layout, path label)
        """
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.setContentsMargins(2, 2, 2, 2)
        label = QLabel("")
        label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        layout.addWidget(label)
        return widget, layout, label

    def setup_main_layout(self, left: QWidget, right: QWidget) -> QWidget:
        """Create the central widget: splitter with both panels and the key bar."""
        central = QWidget(self.window)
        root = QVBoxLayout(central)

        self.splitter = QSplitter(Qt.Horizontal)
        self.splitter.addWidget(left)
        self.splitter.addWidget(right)
        self.splitter.setStretchFactor(0, 1)
        self.splitter.setStretchFactor(1, 1)
        root.addWidget(self.splitter)

        keys = QHBoxLayout()
        for key, label in FUNCTION_KEYS:
            keys.addWidget(QLabel(f"<b>{key}</b> {label}"))
        keys.addStretch(1)
        root.addLayout(keys)
        return central

    def setup_initial_window_size(self) -> None:
        """Setup initial window size based on screen dimensions."""
        screen = QApplication.primaryScreen()
        if screen is not None:
            rect = screen.availableGeometry()
            self.window.resize(
                int(rect.width() * self.WINDOW_SIZE_RATIO),
                int(rect.height() * self.WINDOW_SIZE_RATIO),
            )
