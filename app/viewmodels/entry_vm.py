"""Lightweight view model wrapper around `FileEntry`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from core.models import FileEntry

SIZE_FIELD_WIDTH = 7


def compact_size(size: int, width: int = SIZE_FIELD_WIDTH) -> str:
    """Render `size` in at most `width` characters using K/M/G/T suffixes."""
    text = str(size)
    for suffix in ("K", "M", "G", "T"):
        if len(text) <= width:
            break
        size //= 1024
        text = f"{size}{suffix}"
    return text


@dataclass
class EntryVM:
    """Expose display properties for one panel row."""

    entry: FileEntry

    @property
    def prefix(self) -> str:
        """Type marker: `/` directory, `@` link, `*` executable."""
        if self.entry.is_dir:
            return "/"
        if self.entry.is_link:
            return "@"
        if self.entry.is_executable:
            return "*"
        return " "

    @property
    def display_name(self) -> str:
        return f"{self.prefix}{self.entry.name}"

    @property
    def size_text(self) -> str:
        if self.entry.is_parent:
            return "UP--DIR"
        return compact_size(int(self.entry.size or 0))

    @property
    def time_text(self) -> str:
        try:
            return datetime.fromtimestamp(self.entry.mtime).strftime("%b %d %H:%M")
        except (OverflowError, OSError, ValueError):
            return ""

    @property
    def tooltip(self) -> str:
        if self.entry.is_link and self.entry.link_target:
            broken = " (broken)" if self.entry.is_link_broken else ""
            return f"-> {self.entry.link_target}{broken}"
        return ""
