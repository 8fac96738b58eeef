from __future__ import annotations

from kaolin.loc import Cursor
from kaolin.loc import Loc
from kaolin.rope import Rope
from kaolin.undo import Snapshot
from kaolin.undo import UndoMgmt


def _snapshot(s):
    cursor = Cursor(Loc(0, 0), Loc(0, 0))
    return Snapshot(Rope(s), cursor, 0, 0, Loc(0, 0))


def test_undo_mgmt_repr():
    ret = repr(UndoMgmt(_snapshot('')))
    assert ret == 'UndoMgmt(history=1, ptr=0, saved=0, dirty=False)'


def test_commit_without_changes_does_nothing():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    assert undo_mgmt.commit(_snapshot('a')) is False
    assert len(undo_mgmt.history) == 1


def test_commit_after_register():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    undo_mgmt.register()
    assert undo_mgmt.dirty is True
    assert undo_mgmt.commit(_snapshot('ab')) is True
    assert undo_mgmt.ptr == 1
    assert undo_mgmt.dirty is False


def test_undo_and_redo_step_through_history():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    undo_mgmt.register()
    undo_mgmt.commit(_snapshot('ab'))
    undo_mgmt.register()

    # pending changes are committed before stepping back
    ret = undo_mgmt.undo(_snapshot('abc'))
    assert ret is not None and ret.content == 'ab'
    ret = undo_mgmt.undo(_snapshot('ab'))
    assert ret is not None and ret.content == 'a'
    assert undo_mgmt.undo(_snapshot('a')) is None

    ret = undo_mgmt.redo(_snapshot('a'))
    assert ret is not None and ret.content == 'ab'
    ret = undo_mgmt.redo(_snapshot('ab'))
    assert ret is not None and ret.content == 'abc'
    assert undo_mgmt.redo(_snapshot('abc')) is None
    assert undo_mgmt.ptr == len(undo_mgmt.history) - 1


def test_register_drops_redo_history():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    undo_mgmt.register()
    undo_mgmt.commit(_snapshot('ab'))
    undo_mgmt.undo(_snapshot('ab'))
    assert len(undo_mgmt.history) == 2
    undo_mgmt.register()
    assert len(undo_mgmt.history) == 1
    assert undo_mgmt.redo(_snapshot('ax')) is None


def test_at_file():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    assert undo_mgmt.at_file()
    undo_mgmt.register()
    assert not undo_mgmt.at_file()
    undo_mgmt.disk_write(_snapshot('ab'))
    assert undo_mgmt.saved == 1
    assert undo_mgmt.at_file()
    undo_mgmt.undo(_snapshot('ab'))
    assert not undo_mgmt.at_file()
    undo_mgmt.redo(_snapshot('a'))
    assert undo_mgmt.at_file()


def test_saved_point_lost_when_history_is_rewritten():
    undo_mgmt = UndoMgmt(_snapshot('a'))
    undo_mgmt.register()
    undo_mgmt.disk_write(_snapshot('ab'))
    undo_mgmt.undo(_snapshot('ab'))
    undo_mgmt.register()
    assert undo_mgmt.saved is None
    undo_mgmt.commit(_snapshot('ax'))
    assert not undo_mgmt.at_file()
