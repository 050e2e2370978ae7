"""Sorting service for panel entries.

The service orders entries by name, size or modification time, ascending or
descending, optionally grouping directories first. The `..` entry always
stays on top.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from core.models import FileEntry, SortOrder

_KEYS: dict[SortOrder, tuple[str, bool, bool]] = {
    # order -> (field, ascending, dirs_first)
    SortOrder.NAME_ASC: ("name", True, False),
    SortOrder.SIZE_ASC: ("size", True, False),
    SortOrder.TIME_ASC: ("mtime", True, False),
    SortOrder.NAME_DESC: ("name", False, False),
    SortOrder.SIZE_DESC: ("size", False, False),
    SortOrder.TIME_DESC: ("mtime", False, False),
    SortOrder.NAME_DIRS_FIRST_ASC: ("name", True, True),
    SortOrder.SIZE_DIRS_FIRST_ASC: ("size", True, True),
    SortOrder.TIME_DIRS_FIRST_ASC: ("mtime", True, True),
    SortOrder.NAME_DIRS_FIRST_DESC: ("name", False, True),
    SortOrder.SIZE_DIRS_FIRST_DESC: ("size", False, True),
    SortOrder.TIME_DIRS_FIRST_DESC: ("mtime", False, True),
}


def parse_sort_order(value: Any, default: SortOrder = SortOrder.NAME_DIRS_FIRST_ASC) -> SortOrder:
    """Return the `SortOrder` named by `value`, or `default` when unknown."""
    try:
        return SortOrder(str(value))
    except ValueError:
        return default


class SortService:
    """Provides sorting utilities for `FileEntry` lists."""

    def sort(self, entries: Iterable[FileEntry], order: SortOrder) -> list[FileEntry]:
        """Return `entries` sorted by `order`.

        Args:
            entries: Entries to sort; not modified.
            order: Sort order to apply.
        """
        field_name, ascending, dirs_first = _KEYS[order]
        items = list(entries)
        parents = [e for e in items if e.is_parent]
        rest = [e for e in items if not e.is_parent]

        def value_of(entry: FileEntry) -> Any:
            if field_name == "name":
                return (entry.name.lower(), entry.name)
            return (getattr(entry, field_name), entry.name.lower())

        rest.sort(key=value_of, reverse=not ascending)
        if dirs_first:
            # Stable sort keeps the per-field order inside each group.
            rest.sort(key=lambda e: 0 if (e.is_dir or e.is_link_to_dir) else 1)
        return parents + rest
