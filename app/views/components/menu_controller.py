"""MenuController: Manages menu creation and action connections."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import QMainWindow, QMenuBar

from core.models import SortOrder

SORT_LABELS: dict[SortOrder, str] = {
    SortOrder.NAME_DIRS_FIRST_ASC: "Name (directories first)",
    SortOrder.NAME_ASC: "Name",
    SortOrder.NAME_DESC: "Name, descending",
    SortOrder.NAME_DIRS_FIRST_DESC: "Name, descending (directories first)",
    SortOrder.SIZE_DIRS_FIRST_ASC: "Size (directories first, smallest first)",
    SortOrder.SIZE_DIRS_FIRST_DESC: "Size (directories first, largest first)",
    SortOrder.SIZE_ASC: "Size",
    SortOrder.SIZE_DESC: "Size, descending",
    SortOrder.TIME_DIRS_FIRST_ASC: "Modify time (directories first, oldest first)",
    SortOrder.TIME_DIRS_FIRST_DESC: "Modify time (directories first, newest first)",
    SortOrder.TIME_ASC: "Modify time",
    SortOrder.TIME_DESC: "Modify time, descending",
}


class MenuController:
    """Manages main window menu creation and action connections.

    This class encapsulates all menu-related functionality including:
    - Menu structure creation with function-key shortcuts
    - Sort order actions
    - Action-to-handler connection management
    """

    def __init__(self, main_window: QMainWindow) -> None:
        """Initialize with main window reference.

        Args:
            main_window: The QMainWindow to create menus for
        """
        self.window = main_window
        self.actions: dict[str, QAction] = {}
        self.sort_actions: dict[SortOrder, QAction] = {}

    def setup_menus(self) -> dict[str, QAction]:
        """Create all menus and return action references.

        Returns:
            Dictionary mapping action names to QAction instances
        """
        menubar = QMenuBar(self.window)

        # File Menu
        file_menu = menubar.addMenu("File")
        self.actions["copy"] = self._add(file_menu, "Copy…", "F5")
        self.actions["move"] = self._add(file_menu, "Move…", "F6")
        self.actions["mkdir"] = self._add(file_menu, "Make Directory…", "F7")
        self.actions["delete"] = self._add(file_menu, "Delete…", "F8")
        file_menu.addSeparator()
        self.actions["refresh"] = self._add(file_menu, "Refresh", "F9")
        self.actions["exit"] = self._add(file_menu, "Exit", "F10")

        # Select Menu
        select_menu = menubar.addMenu("Select")
        self.actions["select_by"] = self._add(select_menu, "Select by Pattern…", "Ctrl+S")
        self.actions["invert"] = self._add(select_menu, "Invert Selection", "Ctrl+I")

        # Sort Menu
        sort_menu = menubar.addMenu("Sort")
        group = QActionGroup(self.window)
        for order, label in SORT_LABELS.items():
            action = sort_menu.addAction(label)
            action.setCheckable(True)
            group.addAction(action)
            self.sort_actions[order] = action

        # Log Menu
        log_menu = menubar.addMenu("Log")
        self.actions["open_latest_log"] = log_menu.addAction("Open Latest Log")
        self.actions["open_log_directory"] = log_menu.addAction("Open Log Directory")

        self.window.setMenuBar(menubar)
        return self.actions

    def _add(self, menu, text: str, shortcut: str) -> QAction:
        action = menu.addAction(text)
        action.setShortcut(QKeySequence(shortcut))
        return action

    def connect_actions(self, handlers: dict[str, Callable]) -> None:
        """Connect menu actions to their handler methods.

        Args:
            handlers: Dictionary mapping action names to handler callables
        """
        for name, action in self.actions.items():
            if name in handlers:
                action.triggered.connect(handlers[name])
        if "exit" not in handlers:
            self.actions["exit"].triggered.connect(self.window.close)

    def connect_sort_actions(self, handler: Callable[[SortOrder], None]) -> None:
        """Connect every sort action to `handler(order)`."""
        for order, action in self.sort_actions.items():
            action.triggered.connect(lambda _checked=False, o=order: handler(o))

    def check_sort_order(self, order: SortOrder) -> None:
        action = self.sort_actions.get(order)
        if action:
            action.setChecked(True)
