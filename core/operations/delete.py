"""Delete operation.

Deletion never descends on its own: a non-empty directory answers
`RETRY_AFTER_CHILDREN`, the walker removes the children first and then calls
the operation again to remove the now-empty directory.
"""

from __future__ import annotations

import errno
import os
import stat

from loguru import logger

from core.operations.base import OperationBase
from core.services.interfaces import (
    CANCELLED,
    CONFIRM_BUTTONS,
    ConfirmChoice,
    OperationContext,
    Verdict,
)

NOT_EMPTY_ERRNOS = (errno.ENOTEMPTY, errno.EEXIST)


class DeleteOperation(OperationBase):
    """Removes files, links and (after confirmation) whole directory trees."""

    def __call__(self, source: str, target: str, context: OperationContext) -> Verdict:
        self.progress.update(f"Delete\n{source}", 100, context.overall_percent(), None)

        verdict = Verdict.RETRY
        while verdict is Verdict.RETRY:
            try:
                st = os.lstat(source)
            except OSError as ex:
                verdict = self.resolve_error(context, f'Stat failed for "{source}"', ex)
                continue

            if stat.S_ISDIR(st.st_mode):
                verdict = self._remove_directory(source, context)
            else:
                verdict = self._remove_file(source, context)
        return verdict

    def _remove_file(self, source: str, context: OperationContext) -> Verdict:
        try:
            os.unlink(source)
        except OSError as ex:
            return self.resolve_error(context, f'Cannot remove "{source}"', ex)
        return Verdict.OK

    def _remove_directory(self, source: str, context: OperationContext) -> Verdict:
        try:
            os.rmdir(source)
        except OSError as ex:
            if ex.errno in NOT_EMPTY_ERRNOS:
                return self._confirm_recursive(source, context)
            return self.resolve_error(context, f'Cannot remove "{source}"', ex)
        return Verdict.OK

    def _confirm_recursive(self, source: str, context: OperationContext) -> Verdict:
        """Decide whether a non-empty directory is removed with its contents."""
        prefix_matches = context.prefix_matches(source)
        if context.confirm_all_no:
            btn = ConfirmChoice.NO
        elif context.confirm_all_yes or prefix_matches:
            btn = ConfirmChoice.YES
        else:
            btn = self.prompt.ask(
                f'Directory "{source}" not empty.\nDelete it recursively?',
                CONFIRM_BUTTONS,
                None,
                True,
            )

        if btn == ConfirmChoice.YES:
            if not prefix_matches:
                context.confirm_yes_prefix = source
            return Verdict.RETRY_AFTER_CHILDREN
        if btn == ConfirmChoice.ALL:
            context.confirm_all_yes = True
            return Verdict.RETRY_AFTER_CHILDREN
        if btn == ConfirmChoice.NONE:
            context.confirm_all_no = True
        elif btn == ConfirmChoice.ABORT:
            context.abort = True
            return Verdict.ABORT
        elif btn not in (ConfirmChoice.NO, CANCELLED):
            logger.warning("Unknown prompt answer {}, keeping {}", btn, source)
        context.keep_item_selected = True
        return Verdict.SKIP
