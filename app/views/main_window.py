"""Dual-panel MainWindow built from extracted components.

The window owns two `PanelVM` instances, one per side, and tracks which of
them is active. File operations always act on the active panel and default
their destination to the other one.
"""

from __future__ import annotations

import os
import re
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import QMainWindow, QMessageBox, QTreeView
from loguru import logger

from app.viewmodels.panel_vm import PanelVM
from app.views.components.menu_controller import MenuController
from app.views.components.panel_controller import PanelController
from app.views.dialogs.progress_dialog import DialogProgressReporter
from app.views.dialogs.prompt_dialog import PromptDialog
from app.views.dialogs.select_dialog import SelectDialog
from app.views.handlers.file_operations import FileOperationsHandler
from app.views.layout.layout_manager import LayoutManager
from core.models import SortOrder
from core.services.sort_service import parse_sort_order
from infrastructure.logging import open_latest_log, open_log_directory


class MainWindow(QMainWindow):
    """Main application window with two file panels."""

    def __init__(self, settings: Any | None = None) -> None:
        """Initialize MainWindow with all services and components.

        Args:
            settings: Settings instance for configuration
        """
        super().__init__()

        self._initialize_services(settings)
        self._setup_components()
        self._setup_ui()
        self._connect_signals()
        self._setup_window_properties()

    def _initialize_services(self, settings: Any | None) -> None:
        """Create the panel view-models from settings.

        Args:
            settings: Settings instance
        """
        self._settings = settings

        left = os.getcwd()
        right = os.path.expanduser("~")
        order = SortOrder.NAME_DIRS_FIRST_ASC
        show_hidden = True
        if self._settings is not None:
            left = self._settings.get("panels.left") or left
            right = self._settings.get("panels.right") or right
            order = parse_sort_order(self._settings.get("panels.sort_order"), order)
            show_hidden = bool(self._settings.get("panels.show_hidden", True))

        self.left_vm = PanelVM(left, sort_order=order, show_hidden=show_hidden)
        self.right_vm = PanelVM(right, sort_order=order, show_hidden=show_hidden)

    def _setup_components(self) -> None:
        """Setup all extracted components and controllers."""
        self.left_tree = QTreeView()
        self.right_tree = QTreeView()

        self.menu_controller = MenuController(self)
        self.layout_manager = LayoutManager(self)

        left_widget, left_layout, left_label = self.layout_manager.create_panel_section()
        right_widget, right_layout, right_label = self.layout_manager.create_panel_section()
        left_layout.addWidget(self.left_tree)
        right_layout.addWidget(self.right_tree)
        self._panel_widgets = (left_widget, right_widget)

        self.left_panel = PanelController(self.left_vm, self.left_tree, left_label)
        self.right_panel = PanelController(self.right_vm, self.right_tree, right_label)
        self._active = self.left_panel

        self.status_reporter = StatusReporterImpl(self)
        self.ui_updater = UIUpdaterImpl(self)

        refresh_ms = 100
        if self._settings is not None:
            refresh_ms = self._settings.get_int("progress.refresh_interval_ms", 100)
        self.prompt = PromptDialog(self)
        self.progress = DialogProgressReporter(self, refresh_interval_ms=refresh_ms)

        self.file_operations = FileOperationsHandler(
            panels=self._panels,
            prompt=self.prompt,
            progress=self.progress,
            settings=self._settings,
            parent_widget=self,
            ui_updater=self.ui_updater,
            status_reporter=self.status_reporter,
        )

    def _setup_ui(self) -> None:
        """Setup the main UI components and layout."""
        self.setWindowTitle("Twin Panel")

        for controller in (self.left_panel, self.right_panel):
            controller.setup_tree_properties()
            try:
                controller.vm.load()
            except OSError as ex:
                logger.error("Cannot read {}: {}", controller.vm.path, ex)
            controller.refresh_model()

        central = self.layout_manager.setup_main_layout(*self._panel_widgets)
        self.setCentralWidget(central)
        self.layout_manager.setup_initial_window_size()

        self.menu_controller.setup_menus()
        self.menu_controller.check_sort_order(self.left_vm.panel.sort_order)

    def _connect_signals(self) -> None:
        """Connect all signal/slot relationships."""
        handlers = {
            "copy": self.file_operations.copy,
            "move": self.file_operations.move,
            "mkdir": self.file_operations.make_directory,
            "delete": self.file_operations.delete,
            "refresh": self.ui_updater.refresh_panels,
            "exit": self.close,
            "select_by": self.on_open_select_dialog,
            "invert": self.on_invert_selection,
            "open_latest_log": self.on_open_latest_log,
            "open_log_directory": self.on_open_log_directory,
        }
        self.menu_controller.connect_actions(handlers)
        self.menu_controller.connect_sort_actions(self.on_sort_order)

        self.left_panel.focused.connect(self._on_panel_focused)
        self.right_panel.focused.connect(self._on_panel_focused)

        switch = QShortcut(QKeySequence(Qt.Key_Tab), self)
        switch.setContext(Qt.WindowShortcut)
        switch.activated.connect(self.switch_panel)

    def _setup_window_properties(self) -> None:
        """Setup window properties and status bar."""
        self.left_panel.focus()
        self.statusBar().showMessage("Ready", 3000)

    @property
    def other_panel(self) -> PanelController:
        return self.right_panel if self._active is self.left_panel else self.left_panel

    def refresh_panels(self) -> None:
        """Re-read both panels from disk, keeping cursors and marks."""
        self.left_panel.reload()
        self.right_panel.reload()
        self._active.focus()

    def switch_panel(self) -> None:
        self.other_panel.focus()

    # Menu action handlers

    def on_open_select_dialog(self) -> None:
        """Show the select-by-pattern dialog for the active panel."""
        panel = self._active
        entry = panel.vm.cursor_entry
        dlg = SelectDialog(self, entry.name if entry is not None else None)
        dlg.selectRequested.connect(lambda regex: self._apply_select_regex(regex, True))
        dlg.unselectRequested.connect(lambda regex: self._apply_select_regex(regex, False))
        dlg.invertRequested.connect(self.on_invert_selection)
        dlg.exec()

    def on_invert_selection(self) -> None:
        self._active.vm.invert_selection()
        self._active.update_all_styles()
        self.status_reporter.show_status(f"{self._active.vm.selected_count} item(s) selected")

    def on_sort_order(self, order: SortOrder) -> None:
        """Apply a sort order to both panels."""
        for controller in (self.left_panel, self.right_panel):
            controller.vm.set_sort_order(order)
            controller.refresh_model()
        logger.info("Sort order changed: {}", order.value)

    def on_open_latest_log(self) -> None:
        if not open_latest_log(self._log_dir()):
            QMessageBox.information(self, "Open Latest Log", "No log file found.")

    def on_open_log_directory(self) -> None:
        if not open_log_directory(self._log_dir()):
            QMessageBox.warning(self, "Open Log Directory", "Cannot open the log directory.")

    # Private methods

    def _panels(self) -> tuple[PanelVM, PanelVM]:
        return self._active.vm, self.other_panel.vm

    def _on_panel_focused(self, controller: PanelController) -> None:
        self._active = controller

    def _apply_select_regex(self, regex: str, select: bool) -> None:
        """Mark or unmark entries of the active panel by regex."""
        try:
            changed = self._active.vm.select_by_pattern(regex, select)
        except re.error as ex:
            QMessageBox.warning(self, "Select by Pattern", f"Invalid pattern:\n{ex}")
            return
        self._active.update_all_styles()
        verb = "Selected" if select else "Unselected"
        self.status_reporter.show_status(f"{verb} {changed} item(s)")

    def _log_dir(self) -> str | None:
        if self._settings is None:
            return None
        return self._settings.get("logging.dir") or None


# Helper implementation classes


class StatusReporterImpl:
    """Implementation of StatusReporter protocol."""

    def __init__(self, main_window: QMainWindow):
        self.window = main_window

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message in status bar."""
        self.window.statusBar().showMessage(message, timeout)


class UIUpdaterImpl:
    """Implementation of UIUpdateCallback protocol."""

    def __init__(self, main_window: MainWindow):
        self.window = main_window

    def refresh_panels(self) -> None:
        """Re-read both panels."""
        self.window.refresh_panels()
