"""PanelController: Binds one PanelVM to a QTreeView."""

from __future__ import annotations

from PySide6.QtCore import QEvent, QObject, Qt, Signal
from PySide6.QtWidgets import QAbstractItemView, QHeaderView, QLabel, QTreeView
from loguru import logger

from app.viewmodels.panel_vm import PanelVM
from app.views.constants import NUM_COLUMNS
from app.views.panel_model_builder import apply_selection_style, build_model


class PanelController(QObject):
    """Manages a panel view: model building, cursor sync and panel keys.

    This class encapsulates all panel-related functionality including:
    - Model building from the panel entries
    - Keeping the Qt current index and the panel cursor in sync
    - Enter/Backspace navigation and Insert marking
    """

    focused = Signal(object)  # PanelController

    def __init__(self, vm: PanelVM, tree_view: QTreeView, path_label: QLabel) -> None:
        """Initialize with a view-model and its widgets.

        Args:
            vm: The PanelVM shown by this panel
            tree_view: The QTreeView widget to manage
            path_label: Label showing the current directory
        """
        super().__init__(tree_view)
        self.vm = vm
        self.tree = tree_view
        self.path_label = path_label
        self._model = None

    def setup_tree_properties(self) -> None:
        """Configure tree view properties and behavior."""
        self.tree.setRootIsDecorated(False)
        self.tree.setUniformRowHeights(True)
        self.tree.setSortingEnabled(False)
        self.tree.setSelectionMode(QAbstractItemView.SingleSelection)
        self.tree.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.tree.installEventFilter(self)
        self.tree.doubleClicked.connect(lambda _idx: self.enter())
        header = self.tree.header()
        header.setStretchLastSection(False)
        header.setSectionResizeMode(0, QHeaderView.Stretch)
        for i in range(1, NUM_COLUMNS):
            header.setSectionResizeMode(i, QHeaderView.ResizeToContents)

    def refresh_model(self) -> None:
        """Rebuild the model from the view-model and restore the cursor."""
        self._model = build_model(self.vm.entries)
        self.tree.setModel(self._model)
        self.tree.selectionModel().currentRowChanged.connect(self._on_current_changed)
        self.path_label.setText(self.vm.path)
        self._show_cursor()

    def reload(self) -> None:
        """Re-read the directory from disk, keeping cursor and marks."""
        try:
            self.vm.refresh()
        except OSError as ex:
            logger.error("Refresh failed for {}: {}", self.vm.path, ex)
        self.refresh_model()

    def enter(self) -> None:
        try:
            changed = self.vm.enter()
        except OSError as ex:
            logger.warning("Cannot open directory: {}", ex)
            return
        if changed:
            self.refresh_model()

    def go_up(self) -> None:
        try:
            changed = self.vm.go_up()
        except OSError as ex:
            logger.warning("Cannot open parent directory: {}", ex)
            return
        if changed:
            self.refresh_model()

    def toggle_selection(self) -> None:
        row = self.vm.panel.cursor_index
        self.vm.toggle_cursor_selection()
        self.update_row_style(row)
        self._show_cursor()

    def update_row_style(self, row: int) -> None:
        if self._model is None or not 0 <= row < len(self.vm.entries):
            return
        items = [self._model.item(row, c) for c in range(NUM_COLUMNS)]
        apply_selection_style([it for it in items if it is not None], self.vm.entries[row].is_selected)

    def update_all_styles(self) -> None:
        for row in range(len(self.vm.entries)):
            self.update_row_style(row)

    def focus(self) -> None:
        self.tree.setFocus()

    def eventFilter(self, obj, event) -> bool:  # noqa: N802
        if obj is not self.tree:
            return False
        if event.type() == QEvent.FocusIn:
            self.focused.emit(self)
        elif event.type() == QEvent.KeyPress:
            key = event.key()
            if key in (Qt.Key_Return, Qt.Key_Enter):
                self.enter()
                return True
            if key == Qt.Key_Backspace:
                self.go_up()
                return True
            if key == Qt.Key_Insert:
                self.toggle_selection()
                return True
        return False

    def _on_current_changed(self, current, _previous) -> None:
        if current.isValid():
            self.vm.move_cursor_to(current.row())

    def _show_cursor(self) -> None:
        if self._model is None or self._model.rowCount() == 0:
            return
        index = self._model.index(self.vm.panel.cursor_index, 0)
        self.tree.setCurrentIndex(index)
        self.tree.scrollTo(index)
