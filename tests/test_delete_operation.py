from __future__ import annotations

import errno
import os

from conftest import ScriptedPrompt, failing, make_panel, make_tree

from core.operations.delete import DeleteOperation
from core.services.interfaces import (
    CONFIRM_BUTTONS,
    ConfirmChoice,
    ErrorChoice,
    OperationContext,
    Verdict,
)
from core.services.mass_action import MassActionService
from core.services.walker import walk


def test_delete_file_without_prompt(tmp_path, progress):
    f = tmp_path / "f"
    f.write_text("x")
    prompt = ScriptedPrompt()

    assert walk(str(f), "", OperationContext(), DeleteOperation(prompt, progress)) is Verdict.OK
    assert not f.exists()
    assert prompt.asked == []
    assert progress.calls[0][:2] == (f"Delete\n{f}", 100)


def test_empty_directory_is_removed_without_prompt(tmp_path, progress):
    d = tmp_path / "d"
    d.mkdir()

    assert walk(str(d), "", OperationContext(), DeleteOperation(ScriptedPrompt(), progress)) is Verdict.OK
    assert not d.exists()


def test_yes_removes_directory_with_files(tmp_path, progress):
    d = make_tree(tmp_path / "d", {"a": "1", "b": "2"})
    prompt = ScriptedPrompt([ConfirmChoice.YES])
    ctx = OperationContext()

    assert walk(str(d), "", ctx, DeleteOperation(prompt, progress)) is Verdict.OK
    assert not d.exists()
    assert prompt.asked == [(f'Directory "{d}" not empty.\nDelete it recursively?', CONFIRM_BUTTONS)]
    assert ctx.confirm_yes_prefix == str(d)


def test_nested_directories_are_confirmed_once(tmp_path, progress):
    d = make_tree(tmp_path / "d", {"sub": {"inner": {"f": "1"}, "g": "2"}, "h": "3"})
    prompt = ScriptedPrompt([ConfirmChoice.YES])

    assert walk(str(d), "", OperationContext(), DeleteOperation(prompt, progress)) is Verdict.OK
    assert not d.exists()
    assert len(prompt.asked) == 1


def test_sibling_with_common_name_prefix_is_asked_again(tmp_path, progress):
    d = make_tree(tmp_path / "d", {"f": "1"})
    d2 = make_tree(tmp_path / "d2", {"f": "1"})
    prompt = ScriptedPrompt([ConfirmChoice.YES, ConfirmChoice.NO])
    op = DeleteOperation(prompt, progress)
    ctx = OperationContext()

    assert walk(str(d), "", ctx, op) is Verdict.OK
    assert walk(str(d2), "", ctx, op) is Verdict.SKIP
    assert d2.exists()
    assert len(prompt.asked) == 2


def test_every_marked_directory_gets_its_own_confirmation(tmp_path, progress):
    make_tree(tmp_path, {"d1": {"f": "1"}, "d2": {"f": "2"}})
    panel = make_panel(tmp_path, marked=("d1", "d2"))
    prompt = ScriptedPrompt([ConfirmChoice.YES, ConfirmChoice.YES])

    result = MassActionService(progress).execute(panel, DeleteOperation(prompt, progress))

    assert len(prompt.asked) == 2
    assert not (tmp_path / "d1").exists()
    assert not (tmp_path / "d2").exists()
    assert result.cleared == 2


def test_all_confirms_remaining_directories(tmp_path, progress):
    make_tree(tmp_path, {"d1": {"f": "1"}, "d2": {"f": "2"}})
    panel = make_panel(tmp_path, marked=("d1", "d2"))
    prompt = ScriptedPrompt([ConfirmChoice.ALL])

    MassActionService(progress).execute(panel, DeleteOperation(prompt, progress))

    assert len(prompt.asked) == 1
    assert not (tmp_path / "d1").exists()
    assert not (tmp_path / "d2").exists()


def test_none_keeps_remaining_directories_and_marks(tmp_path, progress):
    make_tree(tmp_path, {"d1": {"f": "1"}, "d2": {"f": "2"}, "plain": "x"})
    panel = make_panel(tmp_path, marked=("d1", "d2", "plain"))
    prompt = ScriptedPrompt([ConfirmChoice.NONE])

    result = MassActionService(progress).execute(panel, DeleteOperation(prompt, progress))

    assert len(prompt.asked) == 1
    assert (tmp_path / "d1" / "f").exists()
    assert (tmp_path / "d2" / "f").exists()
    assert not (tmp_path / "plain").exists()
    assert result.cleared == 1
    assert {e.name for e in panel.selected_entries} == {"d1", "d2"}


def test_no_skips_directory(tmp_path, progress):
    d = make_tree(tmp_path / "d", {"f": "1"})
    ctx = OperationContext()

    verdict = walk(str(d), "", ctx, DeleteOperation(ScriptedPrompt([ConfirmChoice.NO]), progress))

    assert verdict is Verdict.SKIP
    assert (d / "f").exists()
    assert ctx.keep_item_selected


def test_abort_on_recursive_prompt(tmp_path, progress):
    d = make_tree(tmp_path / "d", {"f": "1"})
    ctx = OperationContext()

    verdict = walk(str(d), "", ctx, DeleteOperation(ScriptedPrompt([ConfirmChoice.ABORT]), progress))

    assert verdict is Verdict.ABORT
    assert ctx.abort
    assert (d / "f").exists()


def test_symlink_to_directory_removes_only_the_link(tmp_path, progress):
    target = make_tree(tmp_path / "target", {"f": "1"})
    link = tmp_path / "link"
    os.symlink(target, link)

    assert walk(str(link), "", OperationContext(), DeleteOperation(ScriptedPrompt(), progress)) is Verdict.OK
    assert not os.path.lexists(link)
    assert (target / "f").exists()


def test_unlink_failure_skip_keeps_file(tmp_path, progress, monkeypatch):
    f = tmp_path / "f"
    f.write_text("x")
    monkeypatch.setattr(os, "unlink", failing(os.unlink, [f], errno.EACCES))
    prompt = ScriptedPrompt([ErrorChoice.SKIP])
    ctx = OperationContext()

    assert DeleteOperation(prompt, progress)(str(f), "", ctx) is Verdict.SKIP
    assert f.exists()
    assert ctx.keep_item_selected
    assert prompt.asked[0][0] == f'Cannot remove "{f}"\nPermission denied ({errno.EACCES})'


def test_unlink_failure_retry_then_succeeds(tmp_path, progress, monkeypatch):
    f = tmp_path / "f"
    f.write_text("x")
    monkeypatch.setattr(os, "unlink", failing(os.unlink, [f], errno.EACCES, times=1))
    prompt = ScriptedPrompt([ErrorChoice.RETRY])

    assert DeleteOperation(prompt, progress)(str(f), "", OperationContext()) is Verdict.OK
    assert not f.exists()


def test_failed_child_leaves_parent_in_place(tmp_path, progress, monkeypatch):
    d = make_tree(tmp_path / "d", {"stuck": "1", "free": "2"})
    monkeypatch.setattr(os, "unlink", failing(os.unlink, [d / "stuck"], errno.EPERM))
    prompt = ScriptedPrompt([ConfirmChoice.YES, ErrorChoice.SKIP_ALL])
    ctx = OperationContext()

    verdict = walk(str(d), "", ctx, DeleteOperation(prompt, progress))

    assert verdict is not Verdict.OK
    assert (d / "stuck").exists()
    assert not (d / "free").exists()
    assert ctx.skip_all
    assert len(prompt.asked) == 2


def test_missing_path_asks_and_skips(tmp_path, progress):
    prompt = ScriptedPrompt([ErrorChoice.SKIP])

    verdict = DeleteOperation(prompt, progress)(str(tmp_path / "gone"), "", OperationContext())

    assert verdict is Verdict.SKIP
    assert prompt.asked[0][0].startswith(f'Stat failed for "{tmp_path / "gone"}"')
