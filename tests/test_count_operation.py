from __future__ import annotations

from conftest import make_tree

from core.operations.count import CountOperation
from core.services.interfaces import OperationContext, Verdict
from core.services.walker import walk


def test_counts_items_and_file_bytes(tmp_path, progress):
    src = make_tree(tmp_path / "src", {"a": "abc", "sub": {"b": "hello", "empty": {}}})
    ctx = OperationContext()

    assert walk(str(src), "", ctx, CountOperation(progress)) is Verdict.OK
    # src, a, sub, b, empty
    assert ctx.total_items == 5
    assert ctx.total_size == 8
    assert ctx.current_items == 5


def test_counting_keeps_marks_and_reports_totals(tmp_path, progress):
    f = tmp_path / "f"
    f.write_bytes(b"x" * 1234)
    ctx = OperationContext()

    verdict = CountOperation(progress)(str(f), "", ctx)

    assert verdict is Verdict.PARENT_OK_PROCESS_CHILDREN
    assert ctx.keep_item_selected
    status, item, overall, info = progress.calls[-1]
    assert status == f"Scanning {f}"
    assert (item, overall) == (0, 0)
    assert info == "Items: 1\nSize: 1,234 bytes"


def test_missing_path_is_not_counted(tmp_path, progress):
    ctx = OperationContext()

    assert walk(str(tmp_path / "missing"), "", ctx, CountOperation(progress)) is Verdict.OK
    assert ctx.total_items == 0
    assert ctx.current_items == 1
