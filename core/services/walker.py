"""Recursive walker that drives one operation over a path and its descendants."""

from __future__ import annotations

import os
import stat

from loguru import logger

from core.services.interfaces import Operation, OperationContext, Verdict


def _is_directory(path: str) -> bool:
    try:
        return stat.S_ISDIR(os.lstat(path).st_mode)
    except OSError:
        return False


def walk(source: str, target: str, context: OperationContext, operation: Operation) -> Verdict:
    """Apply `operation` to `source` and, when asked to, to its children.

    The operation decides what happens next through its verdict:
    `PARENT_OK_PROCESS_CHILDREN` descends into a directory, and
    `RETRY_AFTER_CHILDREN` descends and then calls the operation once more
    on `source` (a directory removed only after it was emptied).

    Args:
        source: Path the operation is applied to.
        target: Matching destination path (ignored by some operations).
        context: Shared state of the running mass action.
        operation: Operation variant to apply.

    Returns:
        The resulting verdict for `source`.
    """
    context.current_items += 1

    verdict = operation(source, target, context)
    if context.abort:
        return Verdict.ABORT

    if verdict in (Verdict.OK, Verdict.SKIP):
        return verdict

    if verdict not in (Verdict.PARENT_OK_PROCESS_CHILDREN, Verdict.RETRY_AFTER_CHILDREN):
        logger.error("Unexpected verdict {} for {}", verdict, source)
        return verdict

    if not _is_directory(source):
        return Verdict.OK

    try:
        with os.scandir(source) as it:
            names = [entry.name for entry in it]
    except OSError as ex:
        logger.warning("Cannot list directory {}: {}", source, ex)
        context.keep_item_selected = True
        return Verdict.SKIP

    for name in names:
        walk(os.path.join(source, name), os.path.join(target, name), context, operation)
        if context.abort:
            return Verdict.ABORT

    if verdict is Verdict.RETRY_AFTER_CHILDREN:
        verdict = operation(source, target, context)
        if context.abort:
            return Verdict.ABORT
        if verdict is not Verdict.OK:
            logger.error("Operation still incomplete after children for {}: {}", source, verdict)
            return verdict

    return Verdict.OK
