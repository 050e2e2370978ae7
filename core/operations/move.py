"""Move operation implemented as copy followed by removal of the source."""

from __future__ import annotations

import os

from core.operations.copy import CopyOperation
from core.operations.delete import NOT_EMPTY_ERRNOS
from core.services.interfaces import OperationContext, Verdict


class MoveOperation(CopyOperation):
    """Moves `source` to `target`.

    Files are copied and then unlinked. A directory is created at the target,
    its children are moved by the walker, and the emptied source directory is
    removed on the second call.
    """

    status_verb = "Moving"

    def __call__(self, source: str, target: str, context: OperationContext) -> Verdict:
        verdict = super().__call__(source, target, context)
        if verdict is Verdict.OK:
            return self._remove_source(source, context, is_dir=False)
        if verdict is Verdict.PARENT_OK_PROCESS_CHILDREN:
            return self._remove_source(source, context, is_dir=True)
        return verdict

    def _remove_source(self, source: str, context: OperationContext, is_dir: bool) -> Verdict:
        while True:
            try:
                if is_dir:
                    os.rmdir(source)
                else:
                    os.unlink(source)
                return Verdict.OK
            except FileNotFoundError:
                return Verdict.OK
            except OSError as ex:
                if is_dir and ex.errno in NOT_EMPTY_ERRNOS:
                    return Verdict.RETRY_AFTER_CHILDREN
                verdict = self.resolve_error(context, f'Cannot remove "{source}"', ex)
                if verdict is not Verdict.RETRY:
                    return verdict
