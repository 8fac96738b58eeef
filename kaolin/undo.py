from __future__ import annotations

from typing import NamedTuple

from kaolin.loc import Cursor
from kaolin.loc import Loc
from kaolin.rope import Rope


class Snapshot(NamedTuple):
    content: Rope
    cursor: Cursor
    char_ptr: int
    old_cursor: int
    offset: Loc


class UndoMgmt:
    """a linear history of committed snapshots

    `ptr` is the snapshot matching the live document (plus any edits made
    since, when `dirty`).  `saved` is the snapshot last written to disk, or
    `None` once that point has been dropped from the history.
    """

    def __init__(self, snapshot: Snapshot) -> None:
        self.history = [snapshot]
        self.ptr = 0
        self.saved: int | None = 0
        self.dirty = False

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}('
            f'history={len(self.history)}, ptr={self.ptr}, '
            f'saved={self.saved}, dirty={self.dirty}'
            f')'
        )

    def _drop_redo(self) -> None:
        del self.history[self.ptr + 1:]
        if self.saved is not None and self.saved > self.ptr:
            self.saved = None

    def register(self) -> None:
        self.dirty = True
        self._drop_redo()

    def commit(self, snapshot: Snapshot) -> bool:
        if not self.dirty:
            return False
        self._drop_redo()
        self.history.append(snapshot)
        self.ptr += 1
        self.dirty = False
        return True

    def undo(self, current: Snapshot) -> Snapshot | None:
        self.commit(current)
        if self.ptr == 0:
            return None
        self.ptr -= 1
        return self.history[self.ptr]

    def redo(self, current: Snapshot) -> Snapshot | None:
        self.commit(current)
        if self.ptr + 1 >= len(self.history):
            return None
        self.ptr += 1
        return self.history[self.ptr]

    def disk_write(self, snapshot: Snapshot) -> None:
        self.commit(snapshot)
        self.saved = self.ptr

    def at_file(self) -> bool:
        return not self.dirty and self.saved == self.ptr
