from __future__ import annotations

import errno
import os

from conftest import ScriptedPrompt, failing, make_panel, make_tree

from core.operations.move import MoveOperation
from core.services.interfaces import ConfirmChoice, ErrorChoice, OperationContext, Verdict
from core.services.mass_action import MassActionService
from core.services.walker import walk


def test_move_file(tmp_path, progress):
    src = tmp_path / "a"
    src.write_text("payload")
    dst = tmp_path / "b"

    assert walk(str(src), str(dst), OperationContext(), MoveOperation(ScriptedPrompt(), progress)) is Verdict.OK
    assert not src.exists()
    assert dst.read_text() == "payload"
    assert progress.calls[0][0].startswith("Moving\n")


def test_move_directory_tree(tmp_path, progress):
    src = make_tree(tmp_path / "src", {"a": "A", "sub": {"b": "B", "empty": {}}})
    os.symlink("a", src / "link")
    dst = tmp_path / "dst"

    verdict = walk(str(src), str(dst), OperationContext(), MoveOperation(ScriptedPrompt(), progress))

    assert verdict is Verdict.OK
    assert not src.exists()
    assert (dst / "a").read_text() == "A"
    assert (dst / "sub" / "b").read_text() == "B"
    assert (dst / "sub" / "empty").is_dir()
    assert os.readlink(dst / "link") == "a"


def test_move_empty_directory(tmp_path, progress):
    src = tmp_path / "src"
    src.mkdir()
    dst = tmp_path / "dst"

    assert walk(str(src), str(dst), OperationContext(), MoveOperation(ScriptedPrompt(), progress)) is Verdict.OK
    assert not src.exists()
    assert dst.is_dir()


def test_declined_overwrite_keeps_source(tmp_path, progress):
    src = make_tree(tmp_path / "src", {"clash": "new", "other": "o"})
    dst = make_tree(tmp_path / "dst", {"clash": "old"})
    ctx = OperationContext()

    verdict = walk(str(src), str(dst), ctx, MoveOperation(ScriptedPrompt([ConfirmChoice.NO]), progress))

    assert verdict is not Verdict.OK
    assert (src / "clash").read_text() == "new"
    assert (dst / "clash").read_text() == "old"
    assert not (src / "other").exists()
    assert (dst / "other").read_text() == "o"
    assert ctx.keep_item_selected


def test_move_directory_onto_itself_keeps_everything(tmp_path, progress):
    left = make_tree(tmp_path / "left", {"d": {"f": "data", "empty": {}}})
    panel = make_panel(left, marked=("d",))
    prompt = ScriptedPrompt([ErrorChoice.SKIP])

    result = MassActionService(progress).execute(panel, MoveOperation(prompt, progress), str(left))

    assert len(prompt.asked) == 1
    assert "into itself" in prompt.asked[0][0]
    assert (left / "d" / "f").read_text() == "data"
    assert (left / "d" / "empty").is_dir()
    assert result.cleared == 0


def test_source_removal_failure_is_reported(tmp_path, progress, monkeypatch):
    src = tmp_path / "a"
    src.write_text("x")
    dst = tmp_path / "b"
    monkeypatch.setattr(os, "unlink", failing(os.unlink, [src], errno.EACCES))
    prompt = ScriptedPrompt([ErrorChoice.SKIP])
    ctx = OperationContext()

    assert MoveOperation(prompt, progress)(str(src), str(dst), ctx) is Verdict.SKIP
    assert src.exists()
    assert dst.read_text() == "x"
    assert prompt.asked[0][0].startswith(f'Cannot remove "{src}"')
    assert ctx.keep_item_selected


def test_move_marked_entries_clears_marks(tmp_path, progress):
    left = make_tree(tmp_path / "left", {"a": "1", "b": "2", "c": "3"})
    right = make_tree(tmp_path / "right", {})
    panel = make_panel(left, marked=("a", "c"))

    result = MassActionService(progress).execute(
        panel, MoveOperation(ScriptedPrompt(), progress), str(right)
    )

    assert result.processed == 2
    assert result.cleared == 2
    assert panel.selected_count == 0
    assert sorted(os.listdir(left)) == ["b"]
    assert sorted(os.listdir(right)) == ["a", "c"]
