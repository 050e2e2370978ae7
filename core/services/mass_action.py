"""Mass actions: apply one operation to the cursor entry or to all marked entries.

A mass action walks every top-level item with a single shared
`OperationContext`, clears the panel mark of items that completed, and stops
as soon as the user aborts.
"""

from __future__ import annotations

import os

from loguru import logger

from core.models import PARENT_ENTRY_NAME, Panel
from core.operations.count import CountOperation
from core.services.interfaces import (
    MassActionResult,
    Operation,
    OperationContext,
    ProgressReporter,
    Verdict,
)
from core.services.walker import walk


def run_mass_action(
    panel: Panel,
    operation: Operation,
    target_spec: str,
    context: OperationContext,
    progress: ProgressReporter,
) -> MassActionResult:
    """Walk the cursor entry or every marked entry of `panel`.

    Args:
        panel: Active panel providing the directory, marks and cursor.
        operation: Operation variant to apply.
        target_spec: Destination. With no marks, an absolute value is the
            directory receiving the cursor entry and a relative one is the new
            name inside the panel directory. With marks it is the directory
            receiving every marked entry.
        context: Shared state for this mass action.
        progress: Reporter reset once the action finishes.

    Returns:
        Counts of processed and unmarked items, and whether the user aborted.
    """
    processed = 0
    cleared = 0
    try:
        if panel.selected_count == 0:
            name = panel.file_under_cursor
            if name and name != PARENT_ENTRY_NAME:
                source = os.path.join(panel.path, name)
                if os.path.isabs(target_spec):
                    target = os.path.join(target_spec, name)
                else:
                    target = os.path.join(panel.path, target_spec)
                walk(source, target, context, operation)
                processed += 1
        else:
            for entry in list(panel.entries):
                if not entry.is_selected:
                    continue
                context.keep_item_selected = False
                source = os.path.join(panel.path, entry.name)
                target = os.path.join(target_spec, entry.name)
                verdict = walk(source, target, context, operation)
                processed += 1
                if context.abort:
                    break
                if verdict is Verdict.OK and not context.keep_item_selected:
                    panel.set_selected(entry, False)
                    cleared += 1
    finally:
        progress.update(None, 0, 0, None)

    return MassActionResult(processed=processed, cleared=cleared, aborted=context.abort)


class MassActionService:
    """Runs a count pass followed by the requested operation."""

    def __init__(self, progress: ProgressReporter) -> None:
        self.progress = progress

    def execute(self, panel: Panel, operation: Operation, target_spec: str = "") -> MassActionResult:
        """Size the work with a count pass, then run `operation` on the same items.

        A fresh context is used for every call so skip/confirm policies never
        leak from one mass action into the next.
        """
        context = OperationContext()
        logger.info(
            "Mass action {} in {} -> {} | marked={}",
            type(operation).__name__,
            panel.path,
            target_spec,
            panel.selected_count,
        )

        run_mass_action(panel, CountOperation(self.progress), target_spec, context, self.progress)
        context.current_items = 0
        context.keep_item_selected = False

        result = run_mass_action(panel, operation, target_spec, context, self.progress)
        logger.info(
            "Mass action {} finished | items={} size={} processed={} unmarked={} aborted={}",
            type(operation).__name__,
            context.total_items,
            context.total_size,
            result.processed,
            result.cleared,
            result.aborted,
        )
        return result
