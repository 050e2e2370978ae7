from __future__ import annotations

import os
from pathlib import Path

import pytest

from core.models import Panel, SortOrder
from core.services.sort_service import SortService
from infrastructure.directory_service import read_directory


class ScriptedPrompt:
    """Prompt answering from a fixed script and recording every question.

    Each answer is either a button index or a `(index, text)` pair for
    prompts with an editable field. Running out of answers fails the test.
    """

    def __init__(self, answers=()) -> None:
        self.answers = list(answers)
        self.asked: list[tuple[str, tuple[str, ...]]] = []
        self.text = ""

    def ask(self, title, buttons, editable_prompt=None, is_danger=False) -> int:
        self.asked.append((title, tuple(buttons)))
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {title!r}")
        answer = self.answers.pop(0)
        if isinstance(answer, tuple):
            answer, self.text = answer
        else:
            self.text = editable_prompt or ""
        return answer


class RecordingProgress:
    """Progress reporter keeping every update call."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []

    def update(self, status_text, item_percent, overall_percent, extra_info=None) -> None:
        self.calls.append((status_text, item_percent, overall_percent, extra_info))

    @property
    def statuses(self) -> list[str]:
        return [c[0] for c in self.calls if c[0]]


def make_tree(root: Path, layout: dict) -> Path:
    """Create files and directories under `root` from a nested dict.

    String values are file contents, dict values are subdirectories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, value in layout.items():
        path = root / name
        if isinstance(value, dict):
            make_tree(path, value)
        else:
            path.write_bytes(value.encode() if isinstance(value, str) else value)
    return root


def make_panel(path: Path, marked=(), cursor: str | None = None) -> Panel:
    """Read `path` into a name-sorted panel, marking `marked` entries."""
    entries = SortService().sort(read_directory(str(path)), SortOrder.NAME_ASC)
    panel = Panel(path=str(path), entries=entries, sort_order=SortOrder.NAME_ASC)
    for entry in entries:
        if entry.name in marked:
            panel.set_selected(entry, True)
    if cursor is not None:
        panel.cursor_index = [e.name for e in entries].index(cursor)
    return panel


def failing(real, bad_paths, error_number, times=None):
    """Wrap an `os` function so it raises for `bad_paths`.

    With `times` set, only the first `times` matching calls fail.
    """
    bad = {os.fspath(p) for p in bad_paths}
    state = {"left": times}

    def wrapper(path, *args, **kwargs):
        if os.fspath(path) in bad and state["left"] != 0:
            if state["left"] is not None:
                state["left"] -= 1
            raise OSError(error_number, os.strerror(error_number), os.fspath(path))
        return real(path, *args, **kwargs)

    return wrapper


@pytest.fixture
def progress() -> RecordingProgress:
    return RecordingProgress()


@pytest.fixture
def umask_022():
    old = os.umask(0o022)
    yield
    os.umask(old)
