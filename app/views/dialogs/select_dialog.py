from __future__ import annotations

import re

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
)


class SelectDialog(QDialog):
    selectRequested = Signal(str)  # regex
    unselectRequested = Signal(str)  # regex
    invertRequested = Signal()

    def __init__(self, parent=None, current_name: str | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Select by Pattern")

        root = QVBoxLayout(self)

        row = QHBoxLayout()
        row.addWidget(QLabel("Regex"))
        self.regex = QLineEdit()
        self.regex.setPlaceholderText(r"e.g. \.txt$")
        row.addWidget(self.regex)
        root.addLayout(row)

        tips = QLabel(
            "Mark or unmark entries whose name matches the pattern.\n"
            "- Exact name: ^name$\n"
            "- Any text: .*\n"
            r"- Extension: \.jpe?g$"
        )
        tips.setWordWrap(True)
        root.addWidget(tips)

        btns = QHBoxLayout()
        self.btn_select = QPushButton("Select")
        self.btn_unselect = QPushButton("Unselect")
        self.btn_invert = QPushButton("Invert")
        self.btn_close = QPushButton("Close")
        btns.addWidget(self.btn_select)
        btns.addWidget(self.btn_unselect)
        btns.addWidget(self.btn_invert)
        btns.addStretch(1)
        btns.addWidget(self.btn_close)
        root.addLayout(btns)

        self.btn_close.clicked.connect(self.accept)
        self.btn_select.clicked.connect(lambda: self.selectRequested.emit(self.regex.text()))
        self.btn_unselect.clicked.connect(lambda: self.unselectRequested.emit(self.regex.text()))
        self.btn_invert.clicked.connect(self.invertRequested.emit)

        # Default to an exact match of the entry under the cursor
        if current_name:
            self.regex.setText(f"^{re.escape(current_name)}$")
