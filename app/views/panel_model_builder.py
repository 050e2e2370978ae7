from __future__ import annotations

from collections.abc import Iterable

from PySide6.QtCore import Qt
from PySide6.QtGui import QBrush, QColor, QStandardItem, QStandardItemModel

from app.viewmodels.entry_vm import EntryVM
from app.views.constants import (
    COL_NAME,
    COL_SIZE,
    HEADERS,
    NAME_ROLE,
    SELECTED_COLOR,
)
from core.models import FileEntry


def build_row(entry: FileEntry) -> list[QStandardItem]:
    """Build the items of one panel row."""
    vm = EntryVM(entry)
    row = [
        QStandardItem(vm.display_name),
        QStandardItem(vm.size_text),
        QStandardItem(vm.time_text),
    ]
    for it in row:
        it.setEditable(False)
    row[COL_NAME].setData(entry.name, NAME_ROLE)
    row[COL_SIZE].setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
    if vm.tooltip:
        row[COL_NAME].setToolTip(vm.tooltip)
    apply_selection_style(row, entry.is_selected)
    return row


def apply_selection_style(row: list[QStandardItem], selected: bool) -> None:
    """Paint marked rows in the selection color."""
    brush = QBrush(QColor(SELECTED_COLOR)) if selected else QBrush()
    for it in row:
        it.setForeground(brush)


def build_model(entries: Iterable[FileEntry]) -> QStandardItemModel:
    """Builds the flat list model for a panel, rows in panel order."""
    model = QStandardItemModel()
    model.setHorizontalHeaderLabels(HEADERS)
    for entry in entries:
        model.appendRow(build_row(entry))
    return model
