"""Core domain models for panel entries and panels."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

PARENT_ENTRY_NAME = ".."


class SortOrder(str, Enum):
    """Panel sort orders; the `_DIRS_FIRST` variants group directories on top."""

    NAME_ASC = "name_asc"
    SIZE_ASC = "size_asc"
    TIME_ASC = "time_asc"
    NAME_DESC = "name_desc"
    SIZE_DESC = "size_desc"
    TIME_DESC = "time_desc"
    NAME_DIRS_FIRST_ASC = "name_dirs_first_asc"
    SIZE_DIRS_FIRST_ASC = "size_dirs_first_asc"
    TIME_DIRS_FIRST_ASC = "time_dirs_first_asc"
    NAME_DIRS_FIRST_DESC = "name_dirs_first_desc"
    SIZE_DIRS_FIRST_DESC = "size_dirs_first_desc"
    TIME_DIRS_FIRST_DESC = "time_dirs_first_desc"


@dataclass
class FileEntry:
    """A single directory entry as shown in a panel."""

    name: str
    size: int = 0
    mtime: float = 0.0
    mode: int = 0
    uid: int = 0
    is_dir: bool = False
    is_executable: bool = False
    is_link: bool = False
    is_link_to_dir: bool = False
    is_link_broken: bool = False
    link_target: str | None = None
    is_selected: bool = False

    @property
    def is_parent(self) -> bool:
        """True for the `..` entry."""
        return self.name == PARENT_ENTRY_NAME


@dataclass
class Panel:
    """One side of the dual-panel view: a directory, its entries and marks."""

    path: str
    entries: list[FileEntry] = field(default_factory=list)
    cursor_index: int = 0
    selected_count: int = 0
    sort_order: SortOrder = SortOrder.NAME_DIRS_FIRST_ASC

    @property
    def file_under_cursor(self) -> str:
        """Name of the entry under the cursor, or an empty string."""
        if 0 <= self.cursor_index < len(self.entries):
            return self.entries[self.cursor_index].name
        return ""

    @property
    def selected_entries(self) -> list[FileEntry]:
        """Marked entries in panel order."""
        return [e for e in self.entries if e.is_selected]

    def set_selected(self, entry: FileEntry, selected: bool) -> None:
        """Mark or unmark `entry`, keeping `selected_count` in sync."""
        if entry.is_parent or entry.is_selected == selected:
            return
        entry.is_selected = selected
        self.selected_count += 1 if selected else -1
