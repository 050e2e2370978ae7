"""Shared helpers for operation variants: error prompts and progress text."""

from __future__ import annotations

from loguru import logger

from core.services.interfaces import (
    CANCELLED,
    ERROR_BUTTONS,
    ErrorChoice,
    OperationContext,
    Prompt,
    Verdict,
)


def describe_error(message: str, ex: OSError | None) -> str:
    """Append the OS error text and number to `message` when available."""
    if ex is None or ex.errno is None:
        return message
    return f"{message}\n{ex.strerror} ({ex.errno})"


def format_number(value: int) -> str:
    """Format an integer with thousands separators."""
    return f"{value:,}"


class OperationBase:
    """Holds the prompt/progress collaborators shared by every variant."""

    def __init__(self, prompt: Prompt, progress) -> None:
        self.prompt = prompt
        self.progress = progress

    def resolve_error(
        self, context: OperationContext, message: str, ex: OSError | None = None
    ) -> Verdict:
        """Resolve a recoverable error to SKIP, RETRY or ABORT.

        Honors `context.skip_all`; otherwise asks Skip / Skip all / Retry /
        Abort. A dismissed dialog counts as Skip. Skips keep the panel mark.
        """
        text = describe_error(message, ex)
        logger.warning("{}", text.replace("\n", " "))
        if context.skip_all:
            context.keep_item_selected = True
            return Verdict.SKIP

        btn = self.prompt.ask(text, ERROR_BUTTONS, None, True)
        if btn == ErrorChoice.RETRY:
            return Verdict.RETRY
        if btn == ErrorChoice.ABORT:
            context.abort = True
            return Verdict.ABORT
        if btn == ErrorChoice.SKIP_ALL:
            context.skip_all = True
        elif btn not in (ErrorChoice.SKIP, CANCELLED):
            logger.warning("Unknown prompt answer {}, skipping", btn)
        context.keep_item_selected = True
        return Verdict.SKIP
