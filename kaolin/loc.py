from __future__ import annotations

from typing import NamedTuple
from typing import NewType

CharIdx = NewType('CharIdx', int)
DisplayIdx = NewType('DisplayIdx', int)


class Loc(NamedTuple):
    x: int
    y: int

    @property
    def key(self) -> tuple[int, int]:
        """row-major ordering, NamedTuple ordering would compare x first"""
        return self.y, self.x


class Size(NamedTuple):
    w: int
    h: int


class Cursor(NamedTuple):
    loc: Loc
    selection_end: Loc
