from __future__ import annotations

from typing import Iterable
from typing import NamedTuple

from kaolin.horizontal_scrolling import char_width
from kaolin.horizontal_scrolling import tab_stop
from kaolin.loc import Loc


class MapEntry(NamedTuple):
    char: int
    display: int


def form_map(
        s: str,
        tab_width: int,
        *,
        char_start: int = 0,
        display_start: int = 0,
) -> tuple[list[MapEntry], list[MapEntry]]:
    dbl = []
    tab = []
    x = display_start
    for char_idx, c in enumerate(s, char_start):
        if c == '\t':
            tab.append(MapEntry(char_idx, x))
            x = tab_stop(x, tab_width)
        elif char_width(c) == 2:
            dbl.append(MapEntry(char_idx, x))
            x += 2
        else:
            x += 1
    return dbl, tab


class CharMap:
    """per-line sorted entries for characters wider than one cell"""

    def __init__(
            self,
            map: dict[int, list[MapEntry]] | None = None,
    ) -> None:
        self.map: dict[int, list[MapEntry]] = {}
        for y, entries in (map or {}).items():
            self.insert(y, entries)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.map!r})'

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CharMap):
            return NotImplemented
        return self.map == other.map

    def insert(self, y: int, entries: Iterable[MapEntry]) -> None:
        entries = list(entries)
        if entries:
            self.map[y] = entries
        else:
            self.map.pop(y, None)

    def delete(self, y: int) -> None:
        self.map.pop(y, None)

    def get(self, y: int) -> list[MapEntry]:
        return list(self.map.get(y, ()))

    def count(self, loc: Loc, display: bool) -> int:
        """how many entries sit before `loc.x` (a display or char index)"""
        ret = 0
        for entry in self.map.get(loc.y, ()):
            if (entry.display if display else entry.char) >= loc.x:
                break
            ret += 1
        return ret

    def _replace_tail(self, loc: Loc, tail: list[MapEntry]) -> int:
        start = self.count(loc, display=False)
        self.insert(loc.y, self.map.get(loc.y, [])[:start] + tail)
        return start

    def shift_insertion(self, loc: Loc, tail: list[MapEntry]) -> int:
        """patch a line after text was inserted at char `loc.x`

        `tail` is the entries of the edited line from `loc.x` onwards: a tab
        after the insertion point changes width with its starting column so
        the tail is re-formed rather than shifted by a constant.  entries
        before the insertion point are untouched.  returns how many there are
        """
        return self._replace_tail(loc, tail)

    def shift_deletion(self, loc: Loc, tail: list[MapEntry]) -> int:
        """patch a line after text starting at char `loc.x` was removed"""
        return self._replace_tail(loc, tail)

    def shift_up(self, y: int) -> None:
        for k in sorted(self.map):
            if k >= y:
                self.map[k - 1] = self.map.pop(k)

    def shift_down(self, y: int) -> None:
        for k in sorted(self.map, reverse=True):
            if k >= y:
                self.map[k + 1] = self.map.pop(k)
