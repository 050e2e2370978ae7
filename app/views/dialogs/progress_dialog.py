"""Progress window shown while a mass action runs."""

from __future__ import annotations

import time

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QApplication,
    QDialog,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)


class ProgressDialog(QDialog):
    """Status text, a per-item bar, an overall bar and optional extra info."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Working…")
        self.setWindowModality(Qt.WindowModal)

        root = QVBoxLayout(self)
        self.status_label = QLabel("")
        self.status_label.setMinimumWidth(420)
        self.item_bar = QProgressBar()
        self.overall_bar = QProgressBar()
        self.extra_label = QLabel("")
        for bar in (self.item_bar, self.overall_bar):
            bar.setRange(0, 100)
        root.addWidget(self.status_label)
        root.addWidget(self.item_bar)
        root.addWidget(self.overall_bar)
        root.addWidget(self.extra_label)

    def show_progress(
        self, status_text: str, item_percent: int, overall_percent: int, extra_info: str
    ) -> None:
        if not self.isVisible():
            self.show()
        self.status_label.setText(status_text)
        self.item_bar.setValue(max(0, min(100, int(item_percent))))
        self.overall_bar.setValue(max(0, min(100, int(overall_percent))))
        self.extra_label.setText(extra_info)
        self.extra_label.setVisible(bool(extra_info))
        QApplication.processEvents()


class DialogProgressReporter:
    """Qt implementation of the `ProgressReporter` protocol.

    Redraws are throttled to `refresh_interval_ms`; completed items always
    draw. `update(None, 0, 0, None)` resets the throttle and hides the dialog.
    """

    def __init__(self, parent: QWidget | None = None, refresh_interval_ms: int = 100) -> None:
        self.dialog = ProgressDialog(parent)
        self._interval = max(0, refresh_interval_ms) / 1000.0
        self._last_draw = 0.0

    def update(
        self,
        status_text: str | None,
        item_percent: int,
        overall_percent: int,
        extra_info: str | None = None,
    ) -> None:
        if status_text is None and not item_percent and not overall_percent and extra_info is None:
            self._last_draw = 0.0
            self.dialog.hide()
            return

        now = time.monotonic()
        if self._last_draw and now - self._last_draw < self._interval and item_percent < 100:
            return
        self._last_draw = now
        self.dialog.show_progress(status_text or "", item_percent, overall_percent, extra_info or "")
