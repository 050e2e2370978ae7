"""Modal choice dialog used by the file operations to ask the user."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from core.services.interfaces import CANCELLED

DANGER_STYLE = "QDialog { background-color: #b00020; } QLabel { color: white; font-weight: bold; }"


class ChoiceDialog(QDialog):
    """Title text, an optional editable line and a row of buttons."""

    def __init__(
        self,
        title: str,
        buttons: list[str],
        editable_prompt: str | None = None,
        is_danger: bool = False,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Question" if not is_danger else "Warning")
        self.setModal(True)
        self.choice = CANCELLED

        root = QVBoxLayout(self)
        label = QLabel(title)
        label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        root.addWidget(label)

        self.edit: QLineEdit | None = None
        if editable_prompt is not None:
            self.edit = QLineEdit(editable_prompt)
            self.edit.selectAll()
            # Enter in the line confirms with the first button.
            self.edit.returnPressed.connect(lambda: self._choose(1))
            root.addWidget(self.edit)

        row = QHBoxLayout()
        row.addStretch(1)
        for i, text in enumerate(buttons, start=1):
            btn = QPushButton(text)
            btn.setAutoDefault(i == 1)
            btn.clicked.connect(lambda _checked=False, idx=i: self._choose(idx))
            row.addWidget(btn)
        row.addStretch(1)
        root.addLayout(row)

        if is_danger:
            self.setStyleSheet(DANGER_STYLE)

    def _choose(self, index: int) -> None:
        self.choice = index
        self.accept()

    @property
    def text(self) -> str:
        return self.edit.text() if self.edit is not None else ""


class PromptDialog:
    """Qt implementation of the `Prompt` protocol.

    `text` holds the content of the editable line after each `ask` call.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        self.parent = parent
        self.text = ""

    def ask(
        self,
        title: str,
        buttons: tuple[str, ...] | list[str],
        editable_prompt: str | None = None,
        is_danger: bool = False,
    ) -> int:
        """Show the dialog and block until a button is chosen or it is dismissed."""
        dlg = ChoiceDialog(title, list(buttons), editable_prompt, is_danger, self.parent)
        dlg.exec()
        self.text = dlg.text if dlg.choice != CANCELLED else (editable_prompt or "")
        return dlg.choice
