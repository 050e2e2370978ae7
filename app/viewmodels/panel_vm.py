"""ViewModel for one file panel: listing, navigation, cursor and marks."""

from __future__ import annotations

import os

from loguru import logger

from core.models import PARENT_ENTRY_NAME, FileEntry, Panel, SortOrder
from core.services.selection_service import PatternSelectionService
from core.services.sort_service import SortService
from infrastructure.directory_service import read_directory


class PanelVM:
    """Panel view-model.

    Mediates between the directory reader and the panel widget, and owns the
    `Panel` the mass-action engine works on.
    """

    def __init__(
        self,
        path: str,
        sorter: SortService | None = None,
        sort_order: SortOrder = SortOrder.NAME_DIRS_FIRST_ASC,
        show_hidden: bool = True,
        reader=read_directory,
    ) -> None:
        """Create a PanelVM.

        Args:
            path: Initial directory.
            sorter: Sorting service (defaults to `SortService`).
            sort_order: Order applied after every load.
            show_hidden: Whether dot-files are listed.
            reader: Callable `(path, show_hidden) -> list[FileEntry]`.
        """
        self._sorter = sorter or SortService()
        self._selector = PatternSelectionService()
        self._reader = reader
        self.show_hidden = show_hidden
        self.panel = Panel(path=os.path.abspath(path), sort_order=sort_order)

    @property
    def path(self) -> str:
        return self.panel.path

    @property
    def entries(self) -> list[FileEntry]:
        return self.panel.entries

    @property
    def cursor_entry(self) -> FileEntry | None:
        idx = self.panel.cursor_index
        if 0 <= idx < len(self.panel.entries):
            return self.panel.entries[idx]
        return None

    def load(self, path: str | None = None, focus: str | None = None) -> None:
        """Read `path` (default: current directory) and put the cursor on `focus`.

        Raises:
            OSError: The directory cannot be read; the panel is left unchanged.
        """
        new_path = os.path.abspath(path or self.panel.path)
        entries = self._sorter.sort(self._reader(new_path, self.show_hidden), self.panel.sort_order)
        self.panel.path = new_path
        self.panel.entries = entries
        self.panel.selected_count = 0
        self.panel.cursor_index = 0
        if focus:
            self.set_cursor_by_name(focus)
        logger.debug("Loaded {} | entries={}", new_path, len(entries))

    def refresh(self) -> None:
        """Reload the current directory keeping cursor and marks where possible."""
        marked = {e.name for e in self.panel.entries if e.is_selected}
        current = self.panel.file_under_cursor
        index = self.panel.cursor_index
        self.load(self.panel.path)
        for entry in self.panel.entries:
            if entry.name in marked:
                self.panel.set_selected(entry, True)
        if not self.set_cursor_by_name(current):
            self.move_cursor_to(index)

    def enter(self) -> bool:
        """Open the entry under the cursor if it is a directory."""
        entry = self.cursor_entry
        if entry is None:
            return False
        if entry.is_parent:
            return self.go_up()
        if entry.is_dir or entry.is_link_to_dir:
            self.load(os.path.join(self.panel.path, entry.name))
            return True
        return False

    def go_up(self) -> bool:
        """Go to the parent directory, focusing the directory we came from."""
        parent = os.path.dirname(self.panel.path.rstrip(os.sep)) or os.sep
        if parent == self.panel.path:
            return False
        came_from = os.path.basename(self.panel.path.rstrip(os.sep))
        self.load(parent, focus=came_from)
        return True

    def set_sort_order(self, order: SortOrder) -> None:
        current = self.panel.file_under_cursor
        self.panel.sort_order = order
        self.panel.entries = self._sorter.sort(self.panel.entries, order)
        if current:
            self.set_cursor_by_name(current)

    def set_cursor_by_name(self, name: str) -> bool:
        for i, entry in enumerate(self.panel.entries):
            if entry.name == name:
                self.panel.cursor_index = i
                return True
        return False

    def move_cursor_to(self, index: int) -> None:
        if not self.panel.entries:
            self.panel.cursor_index = 0
            return
        self.panel.cursor_index = max(0, min(index, len(self.panel.entries) - 1))

    def toggle_cursor_selection(self, advance: bool = True) -> None:
        """Flip the mark under the cursor (Insert key) and optionally move down."""
        entry = self.cursor_entry
        if entry is not None and entry.name != PARENT_ENTRY_NAME:
            self.panel.set_selected(entry, not entry.is_selected)
        if advance:
            self.move_cursor_to(self.panel.cursor_index + 1)

    def select_by_pattern(self, regex: str, select: bool) -> int:
        """Mark or unmark entries matching `regex`; returns the number changed."""
        return self._selector.apply(self.panel, regex, select)

    def invert_selection(self) -> None:
        self._selector.invert(self.panel)

    @property
    def selected_count(self) -> int:
        """Number of marked entries."""
        return self.panel.selected_count
