from __future__ import annotations

import os
import stat

from core.operations.base import format_number
from core.services.interfaces import OperationContext, Verdict


class CountOperation:
    """Counts entries and bytes below a path to size the progress bars."""

    def __init__(self, progress) -> None:
        self.progress = progress

    def __call__(self, source: str, target: str, context: OperationContext) -> Verdict:
        try:
            st = os.lstat(source)
        except OSError:
            pass
        else:
            context.total_items += 1
            if not stat.S_ISDIR(st.st_mode):
                context.total_size += st.st_size

        info = f"Items: {context.total_items}\nSize: {format_number(context.total_size)} bytes"
        self.progress.update(f"Scanning {source}", 0, 0, info)
        # Counting must never clear panel marks.
        context.keep_item_selected = True
        return Verdict.PARENT_OK_PROCESS_CHILDREN
