"""
UI/view constants centralized for reuse across view modules.
"""

from __future__ import annotations

from PySide6.QtCore import Qt

# Column headers and indices
HEADERS: list[str] = [
    "Name",
    "Size",
    "Modify time",
]

COL_NAME: int = 0
COL_SIZE: int = 1
COL_TIME: int = 2
NUM_COLUMNS: int = 3


# Data roles
NAME_ROLE: int = Qt.UserRole  # raw entry name on the name item

# Marked entries
SELECTED_COLOR: str = "#d4a000"

# Function key bar (key, label)
FUNCTION_KEYS: list[tuple[str, str]] = [
    ("F5", "Copy"),
    ("F6", "Move"),
    ("F7", "Mkdir"),
    ("F8", "Delete"),
    ("F9", "Refresh"),
    ("F10", "Quit"),
]
