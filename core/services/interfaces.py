"""Core service interfaces and shared data structures.

This module defines the verdicts, the per mass action operation context, the
prompt/progress collaborator protocols and the result structures used across
the engine, the infrastructure and the UI layers.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import os
from typing import Protocol

# Returned by `Prompt.ask` when the dialog is dismissed (Escape, close button).
CANCELLED = -1

# Button sets; the 1-based index of a label is what `Prompt.ask` returns.
ERROR_BUTTONS: tuple[str, ...] = ("Skip", "Skip all", "Retry", "Abort")
CONFIRM_BUTTONS: tuple[str, ...] = ("Yes", "No", "All", "None", "Abort")


class ErrorChoice:
    """Indexes into `ERROR_BUTTONS`."""

    SKIP = 1
    SKIP_ALL = 2
    RETRY = 3
    ABORT = 4


class ConfirmChoice:
    """Indexes into `CONFIRM_BUTTONS`."""

    YES = 1
    NO = 2
    ALL = 3
    NONE = 4
    ABORT = 5


class Verdict(Enum):
    """Outcome of one operation invocation, consumed by the walker."""

    OK = "ok"
    SKIP = "skip"
    ABORT = "abort"
    PARENT_OK_PROCESS_CHILDREN = "parent_ok_process_children"
    RETRY_AFTER_CHILDREN = "retry_after_children"
    # Only used inside an operation's own retry loop.
    RETRY = "retry"


@dataclass
class OperationContext:
    """Mutable state shared by every call of one mass action.

    Attributes:
        total_items: Number of entries found by the count pass.
        current_items: Number of walker invocations so far.
        total_size: Bytes found by the count pass (display only).
        abort: Set once the user aborts; never cleared.
        skip_all: Skip every further recoverable error without asking.
        confirm_all_yes: Answer "Yes" to every further confirmation.
        confirm_all_no: Answer "No" to every further confirmation.
        confirm_yes_prefix: Directory confirmed for recursive delete.
        keep_item_selected: Output flag; keep the panel mark of the current item.
    """

    total_items: int = 0
    current_items: int = 0
    total_size: int = 0
    abort: bool = False
    skip_all: bool = False
    confirm_all_yes: bool = False
    confirm_all_no: bool = False
    confirm_yes_prefix: str = ""
    keep_item_selected: bool = False

    def overall_percent(self) -> int:
        """Overall progress in percent, clamped to 0..100."""
        if self.total_items <= 0:
            return 0
        return min(100, self.current_items * 100 // self.total_items)

    def prefix_matches(self, path: str) -> bool:
        """True when `path` is `confirm_yes_prefix` or lies below it."""
        prefix = self.confirm_yes_prefix
        if not prefix:
            return False
        prefix = prefix.rstrip(os.sep) or os.sep
        if path == prefix:
            return True
        return path.startswith(prefix if prefix.endswith(os.sep) else prefix + os.sep)


class Prompt(Protocol):
    """Blocking modal choice among ordered buttons."""

    text: str

    def ask(
        self,
        title: str,
        buttons: tuple[str, ...] | list[str],
        editable_prompt: str | None = None,
        is_danger: bool = False,
    ) -> int:
        """Return the 1-based index of the chosen button, or `CANCELLED`."""
        ...


class ProgressReporter(Protocol):
    """Receives status text and progress percentages."""

    def update(
        self,
        status_text: str | None,
        item_percent: int,
        overall_percent: int,
        extra_info: str | None = None,
    ) -> None:
        """Report progress; all-empty arguments reset the reporter."""
        ...


class Operation(Protocol):
    """One operation variant driven by the walker."""

    def __call__(self, source: str, target: str, context: OperationContext) -> Verdict: ...


@dataclass
class MassActionResult:
    """Outcome of one mass action.

    Attributes:
        processed: Top-level items handed to the walker.
        cleared: Items whose selection mark was cleared.
        aborted: Whether the user aborted.
    """

    processed: int
    cleared: int
    aborted: bool
