"""Pattern-based selection service decoupled from any UI toolkit."""

from __future__ import annotations

import re

from core.models import Panel


class PatternSelectionService:
    """Mark or unmark panel entries whose name matches a regular expression.

    The `..` entry is never marked.
    """

    def apply(self, panel: Panel, regex: str, select: bool, include_dirs: bool = True) -> int:
        """Apply selection for entries whose name matches `regex`.

        Args:
            panel: Panel whose entries are updated.
            regex: Regular expression searched in the entry name.
            select: If True, mark; otherwise unmark.
            include_dirs: Whether directories are affected too.

        Returns:
            Number of entries whose mark changed.

        Raises:
            re.error: `regex` is not a valid pattern.
        """
        rx = re.compile(regex)
        changed = 0
        for entry in panel.entries:
            if entry.is_parent or (entry.is_dir and not include_dirs):
                continue
            if entry.is_selected == select or not rx.search(entry.name):
                continue
            panel.set_selected(entry, select)
            changed += 1
        return changed

    def invert(self, panel: Panel) -> None:
        """Flip the mark of every entry except `..`."""
        for entry in panel.entries:
            if not entry.is_parent:
                panel.set_selected(entry, not entry.is_selected)
