"""FileOperationsHandler: Runs copy, move, delete and mkdir on the active panel."""

from __future__ import annotations

from collections.abc import Callable
import os
from typing import Any, Protocol

from PySide6.QtWidgets import QMessageBox, QWidget
from loguru import logger

from app.viewmodels.panel_vm import PanelVM
from core.models import PARENT_ENTRY_NAME
from core.operations.copy import DEFAULT_BUFFER_SIZE, CopyOperation
from core.operations.delete import DeleteOperation
from core.operations.mkdir import make_directories
from core.operations.move import MoveOperation
from core.services.interfaces import MassActionResult, Prompt
from core.services.mass_action import MassActionService

OK_BUTTONS: tuple[str, ...] = ("OK", "Cancel")
YES_NO_BUTTONS: tuple[str, ...] = ("Yes", "No")


class UIUpdateCallback(Protocol):
    """Protocol for UI update callbacks."""

    def refresh_panels(self) -> None:
        """Re-read both panels from disk."""
        ...


class StatusReporter(Protocol):
    """Protocol for status reporting callback."""

    def show_status(self, message: str, timeout: int = 3000) -> None:
        """Show status message."""
        ...


class FileOperationsHandler:
    """Handles the file operation workflows of the main window.

    This class encapsulates:
    - Asking for the destination (copy/move) or a confirmation (delete)
    - Running the mass action with a count pass for progress
    - Creating directories
    - Refreshing panels and reporting the outcome
    """

    def __init__(
        self,
        panels: Callable[[], tuple[PanelVM, PanelVM]],
        prompt: Prompt,
        progress: Any,
        settings: Any,
        parent_widget: QWidget,
        ui_updater: UIUpdateCallback,
        status_reporter: StatusReporter,
    ) -> None:
        """Initialize with required services and callbacks.

        Args:
            panels: Returns (active panel, other panel)
            prompt: Prompt used for destinations and by the operations
            progress: Progress reporter used by the operations
            settings: Settings instance for configuration
            parent_widget: Parent widget for message boxes
            ui_updater: Callback for UI updates
            status_reporter: Callback for status messages
        """
        self.panels = panels
        self.prompt = prompt
        self.progress = progress
        self.settings = settings
        self.parent = parent_widget
        self.ui_updater = ui_updater
        self.status_reporter = status_reporter
        self.mass_actions = MassActionService(progress)

    def copy(self) -> None:
        """Copy the cursor entry or the marked entries to the other panel."""
        self._transfer("Copy", CopyOperation)

    def move(self) -> None:
        """Move the cursor entry or the marked entries to the other panel."""
        self._transfer("Move", MoveOperation)

    def delete(self) -> None:
        """Delete the cursor entry or the marked entries after confirmation."""
        active, _other = self.panels()
        what = self._describe_items(active)
        if what is None:
            self.status_reporter.show_status("Nothing to delete")
            return

        btn = self.prompt.ask(f"Delete {what}?", YES_NO_BUTTONS, None, True)
        if btn != 1:
            return
        operation = DeleteOperation(self.prompt, self.progress)
        self._run("Delete", active, operation, "")

    def make_directory(self) -> None:
        """Ask for a name and create the directory (with parents) in the active panel."""
        active, _other = self.panels()
        btn = self.prompt.ask("Create the directory:", OK_BUTTONS, "", False)
        name = self.prompt.text.strip()
        if btn != 1 or not name:
            return

        path = name if os.path.isabs(name) else os.path.join(active.path, name)
        try:
            make_directories(path)
        except OSError as ex:
            logger.error("Make directory failed: {} | {}", path, ex)
            QMessageBox.critical(self.parent, "Make Directory", f"Cannot create directory:\n{path}\n{ex}")
            return

        self.ui_updater.refresh_panels()
        self.status_reporter.show_status(f"Created {path}")

    def _transfer(self, verb: str, operation_cls) -> None:
        active, other = self.panels()
        what = self._describe_items(active)
        if what is None:
            self.status_reporter.show_status(f"Nothing to {verb.lower()}")
            return

        btn = self.prompt.ask(f"{verb} {what} to:", OK_BUTTONS, other.path, False)
        target_spec = self.prompt.text.strip()
        if btn != 1 or not target_spec:
            return
        if active.selected_count and not os.path.isabs(target_spec):
            target_spec = os.path.join(active.path, target_spec)

        buffer_size = DEFAULT_BUFFER_SIZE
        if self.settings is not None:
            buffer_size = self.settings.get_int("copy.buffer_size", DEFAULT_BUFFER_SIZE)
        operation = operation_cls(self.prompt, self.progress, buffer_size=buffer_size)
        self._run(verb, active, operation, target_spec)

    def _run(self, verb: str, active: PanelVM, operation, target_spec: str) -> None:
        try:
            result = self.mass_actions.execute(active.panel, operation, target_spec)
        except Exception as ex:
            logger.exception("{} failed: {}", verb, ex)
            QMessageBox.critical(self.parent, verb, f"{verb} failed: {str(ex)}")
            result = None
        self.ui_updater.refresh_panels()
        if result is not None:
            self.status_reporter.show_status(self._summary(verb, result))

    @staticmethod
    def _describe_items(panel: PanelVM) -> str | None:
        if panel.selected_count:
            return f"{panel.selected_count} selected item(s)"
        entry = panel.cursor_entry
        if entry is None or entry.name == PARENT_ENTRY_NAME:
            return None
        return f'"{entry.name}"'

    @staticmethod
    def _summary(verb: str, result: MassActionResult) -> str:
        if result.aborted:
            return f"{verb} aborted after {result.processed} item(s)"
        return f"{verb} finished: {result.processed} item(s)"
