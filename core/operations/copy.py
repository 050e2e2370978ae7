"""Copy operation: regular files, directories, symbolic links and device nodes."""

from __future__ import annotations

import os
import stat

from core.operations.base import OperationBase
from core.services.interfaces import (
    CANCELLED,
    CONFIRM_BUTTONS,
    ConfirmChoice,
    OperationContext,
    Verdict,
)

DEFAULT_BUFFER_SIZE = 16384


class CopyFailure(Exception):
    """A recoverable copy error, reported to the user by the retry loop."""

    def __init__(self, message: str, cause: OSError | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause


def _percent(done: int, total: int) -> int:
    if total <= 0:
        return 100
    return min(100, done * 100 // total)


def _is_same_or_inside(path: str, directory: str) -> bool:
    real_path = os.path.realpath(path)
    real_dir = os.path.realpath(directory)
    return real_path == real_dir or real_path.startswith(real_dir.rstrip(os.sep) + os.sep)


class CopyOperation(OperationBase):
    """Copies `source` to `target`; directories are filled by the walker."""

    status_verb = "Copying"

    def __init__(self, prompt, progress, buffer_size: int = DEFAULT_BUFFER_SIZE) -> None:
        super().__init__(prompt, progress)
        self.buffer_size = max(1, int(buffer_size))

    def __call__(self, source: str, target: str, context: OperationContext) -> Verdict:
        self._report(source, target, 0, context)
        while True:
            try:
                return self._copy_once(source, target, context)
            except CopyFailure as failure:
                verdict = self.resolve_error(context, failure.message, failure.cause)
                if verdict is not Verdict.RETRY:
                    return verdict

    def _report(self, source: str, target: str, item_percent: int, context: OperationContext) -> None:
        self.progress.update(
            f"{self.status_verb}\n{source}\nTo\n{target}",
            item_percent,
            context.overall_percent(),
            None,
        )

    def _copy_once(self, source: str, target: str, context: OperationContext) -> Verdict:
        try:
            src_st = os.lstat(source)
        except OSError as ex:
            raise CopyFailure(f"Stat operation failed for {source}", ex) from ex

        try:
            tgt_st: os.stat_result | None = os.lstat(target)
        except FileNotFoundError:
            tgt_st = None
        except OSError as ex:
            raise CopyFailure(f"Stat operation failed for {target}", ex) from ex

        mode = src_st.st_mode
        if stat.S_ISREG(mode):
            return self._copy_file(source, target, src_st, tgt_st, context)

        if stat.S_ISDIR(mode):
            if _is_same_or_inside(target, source):
                raise CopyFailure(f"Cannot copy directory\n{source}\ninto itself")
            if tgt_st is not None and stat.S_ISDIR(tgt_st.st_mode):
                # Never touch an existing directory, only fill it.
                return Verdict.PARENT_OK_PROCESS_CHILDREN
            try:
                os.mkdir(target, stat.S_IMODE(mode))
            except OSError as ex:
                raise CopyFailure(f"Failed to create directory:\n{target}", ex) from ex
            return Verdict.PARENT_OK_PROCESS_CHILDREN

        if stat.S_ISLNK(mode):
            try:
                link = os.readlink(source)
            except OSError as ex:
                raise CopyFailure(f"Failed to read symbolic link from\n{source}", ex) from ex
            try:
                os.symlink(link, target)
            except OSError as ex:
                raise CopyFailure(f"Failed to create symbolic link\n{target}", ex) from ex
            return Verdict.OK

        if stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
            try:
                os.mknod(target, mode, src_st.st_rdev)
            except OSError as ex:
                raise CopyFailure(f"Failed to create special file\n{target}", ex) from ex
            return Verdict.OK

        raise CopyFailure(f"Unsupported file type:\n{source}")

    def _copy_file(
        self,
        source: str,
        target: str,
        src_st: os.stat_result,
        tgt_st: os.stat_result | None,
        context: OperationContext,
    ) -> Verdict:
        if tgt_st is not None and stat.S_ISDIR(tgt_st.st_mode):
            raise CopyFailure(f"Cannot overwrite directory\n{target}\nwith a file\n{source}")
        if tgt_st is not None and os.path.samestat(src_st, tgt_st):
            raise CopyFailure(f"Cannot copy file onto itself:\n{source}")

        try:
            src = open(source, "rb", buffering=0)  # pylint: disable=consider-using-with
        except OSError as ex:
            raise CopyFailure(f"Cannot open source file for reading:\n{source}", ex) from ex

        with src:
            fd = self._open_target(target, stat.S_IMODE(src_st.st_mode), context)
            if isinstance(fd, Verdict):
                return fd
            try:
                with os.fdopen(fd, "wb", buffering=0) as dst:
                    self._transfer(src, dst, source, target, src_st.st_size, context)
            except OSError as ex:
                raise CopyFailure(f"Cannot write data to:\n{target}", ex) from ex
        return Verdict.OK

    def _open_target(self, target: str, perm: int, context: OperationContext) -> int | Verdict:
        """Create `target` exclusively, asking before overwriting an existing file."""
        try:
            return os.open(target, os.O_WRONLY | os.O_CREAT | os.O_EXCL, perm)
        except FileExistsError:
            pass
        except OSError as ex:
            raise CopyFailure(f"Cannot open target file for writing:\n{target}", ex) from ex

        btn = self._confirm_overwrite(target, context)
        if btn == ConfirmChoice.ABORT:
            context.abort = True
            return Verdict.ABORT
        if btn != ConfirmChoice.YES:
            context.keep_item_selected = True
            return Verdict.SKIP

        try:
            return os.open(target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, perm)
        except OSError as ex:
            raise CopyFailure(f"Cannot open target file for writing:\n{target}", ex) from ex

    def _confirm_overwrite(self, target: str, context: OperationContext) -> int:
        if context.confirm_all_no:
            return ConfirmChoice.NO
        if context.confirm_all_yes:
            return ConfirmChoice.YES

        btn = self.prompt.ask(
            f"Target file exists:\n{target}\nOverwrite this file?", CONFIRM_BUTTONS, None, True
        )
        if btn == ConfirmChoice.ALL:
            context.confirm_all_yes = True
            return ConfirmChoice.YES
        if btn == ConfirmChoice.NONE:
            context.confirm_all_no = True
            return ConfirmChoice.NO
        if btn == CANCELLED:
            return ConfirmChoice.NO
        return btn

    def _transfer(self, src, dst, source: str, target: str, size: int, context: OperationContext) -> None:
        copied = 0
        while True:
            try:
                chunk = src.read(self.buffer_size)
            except OSError as ex:
                raise CopyFailure(f"Cannot read data from:\n{source}", ex) from ex
            if not chunk:
                break
            try:
                written = dst.write(chunk)
            except OSError as ex:
                raise CopyFailure(f"Cannot write data to:\n{target}", ex) from ex
            if written != len(chunk):
                raise CopyFailure(f"Cannot write data to:\n{target}")
            copied += written
            self._report(source, target, _percent(copied, size), context)
        if copied == 0:
            self._report(source, target, 100, context)
