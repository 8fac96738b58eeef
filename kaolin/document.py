from __future__ import annotations

import collections
import enum
from typing import IO

from kaolin.charmap import CharMap
from kaolin.charmap import form_map
from kaolin.charmap import MapEntry
from kaolin.errors import IoError
from kaolin.errors import NoFileName
from kaolin.errors import OutOfRange
from kaolin.errors import ReadOnlyFile
from kaolin.errors import Status
from kaolin.event import Event
from kaolin.horizontal_scrolling import tab_boundaries_backward
from kaolin.horizontal_scrolling import trim
from kaolin.loc import CharIdx
from kaolin.loc import Cursor
from kaolin.loc import DisplayIdx
from kaolin.loc import Loc
from kaolin.loc import Size
from kaolin.perf import Perf
from kaolin.reg import Match
from kaolin.reg import Searcher
from kaolin.reg import word_pattern
from kaolin.rope import Rope
from kaolin.undo import Snapshot
from kaolin.undo import UndoMgmt


def get_text(sio: IO[str]) -> tuple[str, str, bool]:
    """read `sio` (opened with `newline=''`) normalizing newlines to `\\n`

    returns the text, the dominant newline and whether newlines were mixed
    """
    parts = []
    newlines = collections.Counter({'\n': 0})  # default to `\n`
    for line in sio:
        for ending in ('\r\n', '\n'):
            if line.endswith(ending):
                parts.append(f'{line[:-1 * len(ending)]}\n')
                newlines[ending] += 1
                break
        else:
            parts.append(line)
    (nl, _), = newlines.most_common(1)
    mixed = len({k for k, v in newlines.items() if v}) > 1
    return ''.join(parts), nl, mixed


def _load_file(file_name: str) -> tuple[str, str, bool]:
    try:
        with open(file_name, encoding='UTF-8', newline='') as f:
            return get_text(f)
    except UnicodeDecodeError as e:
        raise IoError(f'error! not utf-8: {file_name!r}') from e
    except OSError as e:
        raise IoError(f'error! cannot open {file_name!r}: {e}') from e


class WordState(enum.Enum):
    AT_START = enum.auto()
    AT_END = enum.auto()
    IN_CENTER = enum.auto()
    OUT = enum.auto()


class DocumentInfo:
    def __init__(
            self,
            *,
            read_only: bool = False,
            eol: bool = True,
            modified: bool = False,
            loaded_to: int = 0,
            nl: str = '\n',
    ) -> None:
        self.read_only = read_only
        # the last line has no trailing newline
        self.eol = eol
        self.modified = modified
        self.loaded_to = loaded_to
        self.nl = nl

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}('
            f'read_only={self.read_only}, eol={self.eol}, '
            f'modified={self.modified}, loaded_to={self.loaded_to}, '
            f'nl={self.nl!r}'
            f')'
        )


class Document:
    def __init__(
            self,
            size: Size,
            *,
            tab_width: int = 4,
            read_only: bool = False,
            perf: Perf | None = None,
    ) -> None:
        if tab_width < 1:
            raise ValueError(f'tab width must be positive: {tab_width}')
        self.size = size
        self.tab_width = tab_width
        self.perf = perf if perf is not None else Perf()
        self.file_name: str | None = None
        self.info = DocumentInfo(read_only=read_only)

        self.content = Rope()
        self.lines: list[str] = []
        self.dbl_map = CharMap()
        self.tab_map = CharMap()

        self.cursor = Cursor(Loc(0, 0), Loc(0, 0))
        self.char_ptr = 0
        # display column that vertical motion tries to return to
        self.old_cursor = 0
        self.offset = Loc(0, 0)
        self.secondary_cursors: list[Loc] = []
        self.last_event: Event | None = None

        self.undo_mgmt = UndoMgmt(self.take_snapshot())
        self.load_to(1)

    @classmethod
    def open(
            cls,
            size: Size,
            file_name: str,
            *,
            tab_width: int = 4,
            read_only: bool = False,
            perf: Perf | None = None,
    ) -> Document:
        perf = perf if perf is not None else Perf()
        with perf.timed('open'):
            text, nl, mixed = _load_file(file_name)

            doc = cls(size, tab_width=tab_width, read_only=read_only, perf=perf)
            doc.file_name = file_name
            doc.content = Rope(text)
            doc.info.eol = not text.endswith('\n')
            doc.info.nl = nl
            doc.reload_lines(0)

            doc.undo_mgmt = UndoMgmt(doc.take_snapshot())
            if mixed:
                # the file on disk can't be reproduced, it needs a save
                doc.info.modified = True
                doc.undo_mgmt.saved = None
            return doc

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.file_name!r}>'

    # lines

    def len_lines(self) -> int:
        return self.content.len_lines() - (0 if self.info.eol else 1)

    def _rope_line(self, y: int) -> str:
        line = self.content.line(y)
        return line[:-1] if line.endswith('\n') else line

    def load_to(self, n: int) -> None:
        to = min(n, self.len_lines())
        for y in range(self.info.loaded_to, to):
            line = self._rope_line(y)
            dbl, tab = form_map(line, self.tab_width)
            self.dbl_map.insert(y, dbl)
            self.tab_map.insert(y, tab)
            self.lines.append(line)
        self.info.loaded_to = max(self.info.loaded_to, to)

    def reload_lines(self, to: int | None = None) -> None:
        if to is None:
            to = self.info.loaded_to
        self.lines = []
        self.dbl_map = CharMap()
        self.tab_map = CharMap()
        self.info.loaded_to = 0
        self.load_to(to)

    def line(self, y: int) -> str | None:
        if 0 <= y < self.info.loaded_to:
            return self.lines[y]
        else:
            return None

    def line_trim(self, y: int, start: int, length: int) -> str | None:
        line = self.line(y)
        if line is None:
            return None
        return trim(line, start, length, self.tab_width)

    def line_number(self, y: int) -> str:
        total = len(str(self.len_lines()))
        num = str(y + 1) if y < self.len_lines() else '~'
        return num.rjust(total)

    def set_tab_width(self, tab_width: int) -> None:
        if tab_width < 1:
            raise ValueError(f'tab width must be positive: {tab_width}')
        self.tab_width = tab_width
        self.reload_lines()
        if self.cursor.loc.y < self.info.loaded_to:
            self.move_to(self.char_loc())

    # bounds

    def _in_range(self, x: int, y: int) -> bool:
        return (
            0 <= y < self.info.loaded_to and
            0 <= x <= len(self.lines[y])
        )

    def out_of_range(self, x: int, y: int) -> None:
        if not self._in_range(x, y):
            raise OutOfRange(f'{Loc(x, y)} is out of range')

    def valid_range(self, start: int, end: int, y: int) -> None:
        self.out_of_range(start, y)
        self.out_of_range(end, y)
        if start > end:
            raise OutOfRange(f'{start}..{end} is backwards')

    def _loaded_line(self, y: int) -> str:
        self.out_of_range(0, y)
        return self.lines[y]

    def _cur_line(self) -> str:
        self.load_to(self.cursor.loc.y + 1)
        return self._loaded_line(self.cursor.loc.y)

    # index translation

    def _wide(self, y: int) -> list[tuple[MapEntry, int]]:
        ret = [(entry, 2) for entry in self.dbl_map.get(y)]
        ret.extend(
            (entry, self.tab_width - entry.display % self.tab_width)
            for entry in self.tab_map.get(y)
        )
        ret.sort()
        return ret

    def character_idx(self, loc: Loc) -> CharIdx:
        """display column -> character index, snapping to glyph starts"""
        line = self._loaded_line(loc.y)
        char = display = 0
        for entry, width in self._wide(loc.y):
            if entry.display > loc.x:
                break
            elif loc.x < entry.display + width:
                return CharIdx(entry.char)
            char, display = entry.char + 1, entry.display + width
        return CharIdx(min(char + loc.x - display, len(line)))

    def display_idx(self, loc: Loc) -> DisplayIdx:
        self.out_of_range(loc.x, loc.y)
        char = display = 0
        for entry, width in self._wide(loc.y):
            if entry.char >= loc.x:
                break
            char, display = entry.char + 1, entry.display + width
        return DisplayIdx(display + loc.x - char)

    def line_width(self, y: int) -> int:
        return self.display_idx(Loc(len(self._loaded_line(y)), y))

    def is_dbl_width(self, y: int, x: int) -> bool:
        return any(entry.display == x for entry in self.dbl_map.get(y))

    def is_tab(self, y: int, x: int) -> bool:
        return any(entry.display == x for entry in self.tab_map.get(y))

    def width_of(self, y: int, x: int) -> int:
        if self.is_dbl_width(y, x):
            return 2
        elif self.is_tab(y, x):
            return self.tab_width - x % self.tab_width
        else:
            return 1

    def loc(self) -> Loc:
        return self.cursor.loc

    def char_loc(self) -> Loc:
        return Loc(self.char_ptr, self.cursor.loc.y)

    def loc_to_file_pos(self, loc: Loc) -> int:
        return self.content.line_to_char(loc.y) + loc.x

    # cursor

    def _set_loc(self, loc: Loc) -> None:
        self.cursor = self.cursor._replace(loc=loc)

    def _fix_dangling_cursor(self) -> None:
        x, y = self.cursor.loc
        width = self.line_width(y)
        if x > width:
            self._set_loc(Loc(width, y))

    def _fix_split(self) -> None:
        loc = self.cursor.loc
        self._set_loc(loc._replace(x=self.display_idx(self.char_loc_of(loc))))

    def char_loc_of(self, loc: Loc) -> Loc:
        return loc._replace(x=self.character_idx(loc))

    def _update_char_ptr(self) -> None:
        self.char_ptr = self.character_idx(self.cursor.loc)

    def _goto_row(self, y: int, x: int) -> None:
        self.load_to(y + 1)
        self._set_loc(Loc(x, y))
        self._fix_dangling_cursor()
        self._fix_split()
        self._update_char_ptr()
        self.bring_cursor_in_viewport()

    def bring_cursor_in_viewport(self) -> None:
        (x, y), (off_x, off_y), (w, h) = self.cursor.loc, self.offset, self.size
        if off_y > y:
            off_y = y
        if off_y + h <= y:
            off_y = max(y - h, 0) + 1
        if off_x > x:
            off_x = x
        if off_x + w <= x:
            off_x = max(x - w, 0) + 1
        self.offset = Loc(off_x, off_y)
        self.load_to(self.offset.y + self.size.h)

    def cursor_loc_in_screen(self) -> Loc | None:
        (x, y), (off_x, off_y) = self.cursor.loc, self.offset
        if x < off_x or y < off_y:
            return None
        ret = Loc(x - off_x, y - off_y)
        if ret.x >= self.size.w or ret.y >= self.size.h:
            return None
        return ret

    def cancel_selection(self) -> None:
        self.cursor = self.cursor._replace(selection_end=self.cursor.loc)

    def select_up(self) -> Status:
        if self.cursor.loc.y == 0:
            return Status.START_OF_FILE
        self._goto_row(self.cursor.loc.y - 1, self.old_cursor)
        return Status.NONE

    def move_up(self) -> Status:
        ret = self.select_up()
        self.cancel_selection()
        return ret

    def select_down(self) -> Status:
        if self.cursor.loc.y + 1 >= self.len_lines():
            return Status.END_OF_FILE
        self._goto_row(self.cursor.loc.y + 1, self.old_cursor)
        return Status.NONE

    def move_down(self) -> Status:
        ret = self.select_down()
        self.cancel_selection()
        return ret

    def select_left(self) -> Status:
        self._cur_line()
        if self.char_ptr == 0:
            return Status.START_OF_LINE
        self.char_ptr -= 1
        self._set_loc(Loc(self.display_idx(self.char_loc()), self.loc().y))
        self.old_cursor = self.cursor.loc.x
        self.bring_cursor_in_viewport()
        return Status.NONE

    def move_left(self) -> Status:
        ret = self.select_left()
        self.cancel_selection()
        return ret

    def select_right(self) -> Status:
        if self.char_ptr >= len(self._cur_line()):
            return Status.END_OF_LINE
        self.char_ptr += 1
        self._set_loc(Loc(self.display_idx(self.char_loc()), self.loc().y))
        self.old_cursor = self.cursor.loc.x
        self.bring_cursor_in_viewport()
        return Status.NONE

    def move_right(self) -> Status:
        ret = self.select_right()
        self.cancel_selection()
        return ret

    def select_home(self) -> None:
        self._cur_line()
        self.char_ptr = 0
        self._set_loc(Loc(0, self.cursor.loc.y))
        self.old_cursor = 0
        self.bring_cursor_in_viewport()

    def move_home(self) -> None:
        self.select_home()
        self.cancel_selection()

    def select_end(self) -> None:
        self.select_to_x(len(self._cur_line()))

    def move_end(self) -> None:
        self.select_end()
        self.cancel_selection()

    def select_top(self) -> None:
        self.select_to(Loc(0, 0))

    def move_top(self) -> None:
        self.select_top()
        self.cancel_selection()

    def select_bottom(self) -> None:
        self.select_to(Loc(0, self.len_lines() - 1))

    def move_bottom(self) -> None:
        self.select_bottom()
        self.cancel_selection()

    def select_to_x(self, x: int) -> None:
        """select to character index `x`, clamped to the line end"""
        line = self._cur_line()
        self.char_ptr = max(min(x, len(line)), 0)
        self._set_loc(Loc(self.display_idx(self.char_loc()), self.loc().y))
        self.old_cursor = self.cursor.loc.x
        self.bring_cursor_in_viewport()

    def move_to_x(self, x: int) -> None:
        self.select_to_x(x)
        self.cancel_selection()

    def select_to_y(self, y: int) -> None:
        if not 0 <= y < self.len_lines():
            raise OutOfRange(f'line {y} is out of range')
        self._goto_row(y, self.cursor.loc.x)

    def move_to_y(self, y: int) -> None:
        self.select_to_y(y)
        self.cancel_selection()

    def select_to(self, loc: Loc) -> None:
        """select to `loc` where `loc.x` is a character index"""
        self.select_to_y(loc.y)
        self.select_to_x(loc.x)

    def move_to(self, loc: Loc) -> None:
        self.select_to(loc)
        self.cancel_selection()

    def move_page_up(self) -> None:
        self.clear_cursors()
        y = max(self.cursor.loc.y - self.size.h, 0)
        self.offset = self.offset._replace(
            y=max(self.offset.y - self.size.h, 0),
        )
        self._goto_row(y, 0)
        self.old_cursor = 0
        self.cancel_selection()

    def move_page_down(self) -> None:
        self.clear_cursors()
        last = self.len_lines() - 1
        y = self.cursor.loc.y + self.size.h
        if y <= last:
            self.offset = self.offset._replace(y=self.offset.y + self.size.h)
        elif self.len_lines() < self.offset.y + self.size.h:
            y = last
        else:
            y = last
            self.offset = self.offset._replace(
                y=max(self.len_lines() - self.size.h, 0),
            )
        self._goto_row(y, 0)
        self.old_cursor = 0
        self.cancel_selection()

    def scroll_up(self) -> None:
        self.offset = self.offset._replace(y=max(self.offset.y - 1, 0))
        self.load_to(self.offset.y + self.size.h)

    def scroll_down(self) -> None:
        if self.offset.y + 1 < self.len_lines():
            self.offset = self.offset._replace(y=self.offset.y + 1)
        self.load_to(self.offset.y + self.size.h)

    # selection

    def is_selection_empty(self) -> bool:
        return self.cursor.loc == self.cursor.selection_end

    def selection_loc_bound_disp(self) -> tuple[Loc, Loc]:
        left, right = self.cursor.loc, self.cursor.selection_end
        if left.key > right.key:
            left, right = right, left
        return left, right

    def selection_loc_bound(self) -> tuple[Loc, Loc]:
        left, right = self.selection_loc_bound_disp()
        return self.char_loc_of(left), self.char_loc_of(right)

    def is_loc_selected(self, loc: Loc) -> bool:
        left, right = self.selection_loc_bound()
        return left.key <= loc.key < right.key

    def is_loc_selected_disp(self, loc: Loc) -> bool:
        """whether the cell at display location `loc` is drawn selected"""
        left, right = self.selection_loc_bound_disp()
        return left.key <= loc.key < right.key

    def selection_range(self) -> tuple[int, int]:
        left, right = self.selection_loc_bound()
        return self.loc_to_file_pos(left), self.loc_to_file_pos(right)

    def selection_text(self) -> str:
        return self.content.slice(*self.selection_range())

    def remove_selection(self) -> str:
        self._check_writable()
        start, end = self.selection_range()
        left, _ = self.selection_loc_bound()
        removed = self.content.slice(start, end)
        if removed:
            self.content.remove(start, end)
            self.reload_lines()
            self._edited()
        self.move_to(left)
        return removed

    def select_line_at(self, y: int) -> None:
        self.move_to(Loc(0, y))
        self.select_to(Loc(len(self._loaded_line(y)), y))

    def select_word_at(self, loc: Loc) -> None:
        """select the word under display location `loc`"""
        self.load_to(loc.y + 1)
        x = self.character_idx(loc)
        start = end = x
        for word_start, word_end in self.word_boundaries(self.lines[loc.y]):
            if word_start <= x <= word_end:
                start, end = word_start, word_end
                break
        self.move_to(Loc(start, loc.y))
        self.select_to(Loc(end, loc.y))

    # secondary cursors

    def new_cursor(self, loc: Loc) -> None:
        idx = self.has_cursor(loc)
        if idx is not None:
            del self.secondary_cursors[idx]
        elif self._in_range(loc.x, loc.y):
            self.secondary_cursors.append(loc)

    def clear_cursors(self) -> None:
        self.secondary_cursors.clear()

    def has_cursor(self, loc: Loc) -> int | None:
        try:
            return self.secondary_cursors.index(loc)
        except ValueError:
            return None

    # words

    def word_boundaries(self, line: str) -> list[tuple[int, int]]:
        searcher = Searcher(word_pattern(self.tab_width))
        return [
            (match.loc.x, match.loc.x + len(match.text))
            for match in searcher.lfinds(line)
        ]

    @staticmethod
    def cursor_word_state(
            words: list[tuple[int, int]],
            x: int,
    ) -> tuple[WordState, int]:
        for i, (start, end) in enumerate(words):
            if start <= x <= end:
                if x == end:
                    return WordState.AT_END, i
                elif x == start:
                    return WordState.AT_START, i
                else:
                    return WordState.IN_CENTER, i
        return WordState.OUT, -1

    def _prev_word(self, loc: Loc, *, close: bool) -> int:
        line = self._loaded_line(loc.y)
        words = self.word_boundaries(line)
        state, idx = self.cursor_word_state(words, loc.x)
        if state is WordState.OUT:
            x = loc.x
            while state is WordState.OUT and x > 0:
                x -= 1
                state, idx = self.cursor_word_state(words, x)
            if state is not WordState.AT_END:
                return 0
            start, end = words[idx]
            return start if close else end
        elif idx == 0:
            return 0
        elif state is WordState.AT_START:
            return words[idx - 1][0]
        else:
            return words[idx - 1][1]

    def _next_word(self, loc: Loc, *, close: bool) -> int:
        line = self._loaded_line(loc.y)
        words = self.word_boundaries(line)
        state, idx = self.cursor_word_state(words, loc.x)
        if state is WordState.OUT:
            x = loc.x
            while state is WordState.OUT and x < len(line):
                x += 1
                state, idx = self.cursor_word_state(words, x)
            if state is not WordState.AT_START:
                return len(line)
            return words[idx][0]

        target = idx if close else idx + 1
        if target >= len(words):
            return len(line)
        start, end = words[target]
        return start if state is WordState.AT_START else end

    def prev_word_index(self, loc: Loc) -> int:
        return self._prev_word(loc, close=False)

    def prev_word_close(self, loc: Loc) -> int:
        return self._prev_word(loc, close=True)

    def next_word_index(self, loc: Loc) -> int:
        return self._next_word(loc, close=False)

    def next_word_close(self, loc: Loc) -> int:
        return self._next_word(loc, close=True)

    def move_prev_word(self) -> Status:
        self._cur_line()
        if self.char_ptr == 0:
            return Status.START_OF_LINE
        self.move_to_x(self.prev_word_index(self.char_loc()))
        return Status.NONE

    def move_next_word(self) -> Status:
        if self.char_ptr >= len(self._cur_line()):
            return Status.END_OF_LINE
        self.move_to_x(self.next_word_index(self.char_loc()))
        return Status.NONE

    def delete_word(self) -> str:
        """delete back from the cursor to the previous word boundary"""
        self._check_writable()
        x, y = self.char_loc()
        line = self._cur_line()
        words = self.word_boundaries(line)
        state, idx = self.cursor_word_state(words, x)
        if state in (WordState.IN_CENTER, WordState.AT_END):
            upto = words[idx][0]
        elif state is WordState.AT_START:
            upto = words[idx - 1][0] if idx > 0 else 0
        else:
            back = x
            while state is WordState.OUT and back > 0:
                back -= 1
                state, idx = self.cursor_word_state(words, back)
            if state is not WordState.AT_END:
                upto = 0
            elif line[back:back + 1] == ' ':
                upto = words[idx][0]
            else:
                upto = words[idx][1]
        return self.delete(upto, x, y)

    # editing

    def _check_writable(self) -> None:
        if self.info.read_only:
            raise ReadOnlyFile(f'{self.file_name!r} is read only')

    def _edited(self) -> None:
        self.info.modified = True
        self.undo_mgmt.register()

    def _reindex(self, loc: Loc, display: int, *, insertion: bool) -> None:
        tail = self.lines[loc.y][loc.x:]
        dbl, tab = form_map(
            tail, self.tab_width, char_start=loc.x, display_start=display,
        )
        if insertion:
            self.dbl_map.shift_insertion(loc, dbl)
            self.tab_map.shift_insertion(loc, tab)
        else:
            self.dbl_map.shift_deletion(loc, dbl)
            self.tab_map.shift_deletion(loc, tab)

    def exe(self, event: Event) -> None:
        event(self)
        self.last_event = event
        self.cancel_selection()

    def insert(self, loc: Loc, text: str) -> None:
        """insert `text` at character location `loc`"""
        self._check_writable()
        self.out_of_range(loc.x, loc.y)

        if '\n' in text:
            first, *rest = text.split('\n')
            self.insert(loc, first)
            for part in rest:
                self.split_down(self.char_loc())
                self.insert(self.char_loc(), part)
            return

        display = self.display_idx(loc)
        self.content.insert(self.loc_to_file_pos(loc), text)
        line = self.lines[loc.y]
        self.lines[loc.y] = f'{line[:loc.x]}{text}{line[loc.x:]}'
        self._reindex(loc, display, insertion=True)
        self._edited()
        self.move_to(Loc(loc.x + len(text), loc.y))

    def delete(self, start: int, end: int | None, y: int) -> str:
        """delete characters `[start, end)` of line `y`, returning them"""
        self._check_writable()
        line = self._loaded_line(y)
        if end is None:
            end = len(line)
        self.valid_range(start, end, y)

        display = self.display_idx(Loc(start, y))
        line_start = self.content.line_to_char(y)
        self.content.remove(line_start + start, line_start + end)
        self.lines[y] = f'{line[:start]}{line[end:]}'
        self._reindex(Loc(start, y), display, insertion=False)
        self._edited()
        self.move_to(Loc(start, y))
        return line[start:end]

    def delete_with_tab(self, loc: Loc, text: str) -> str:
        """delete `text` at `loc`, removing indentation spaces a tab at a time

        when `loc` is the last space of a leading run of `tab_width` spaces
        the whole run goes, matching how it was most likely typed
        """
        self._check_writable()
        line = self._loaded_line(loc.y)
        end = loc.x + len(text)
        if loc.x + 1 in tab_boundaries_backward(line, self.tab_width):
            return self.delete(loc.x + 1 - self.tab_width, end, loc.y)
        else:
            return self.delete(loc.x, end, loc.y)

    def insert_line(self, y: int, text: str) -> None:
        self._check_writable()
        if not 0 <= y <= min(self.len_lines(), self.info.loaded_to):
            raise OutOfRange(f'cannot insert line {y}')

        if '\n' in text:
            for i, part in enumerate(text.split('\n')):
                self.insert_line(y + i, part)
            return

        if y == self.len_lines() and self.info.eol:
            self.content.insert(self.content.len_chars(), f'\n{text}')
        else:
            self.content.insert(self.content.line_to_char(y), f'{text}\n')
        self.lines.insert(y, text)
        self.info.loaded_to += 1
        self.dbl_map.shift_down(y)
        self.tab_map.shift_down(y)
        dbl, tab = form_map(text, self.tab_width)
        self.dbl_map.insert(y, dbl)
        self.tab_map.insert(y, tab)
        self._edited()
        self.move_to_y(y)
        self.old_cursor = self.cursor.loc.x

    def delete_line(self, y: int) -> str:
        """remove line `y` entirely, returning its text"""
        self._check_writable()
        removed = self._loaded_line(y)

        if self.len_lines() == 1:
            # a document always has at least one (possibly empty) line
            self.content.remove(0, len(removed))
            self.lines[0] = ''
            self.dbl_map.delete(0)
            self.tab_map.delete(0)
        else:
            if y == self.len_lines() - 1 and self.info.eol:
                start = self.content.line_to_char(y) - 1
                end = self.content.len_chars()
            else:
                start = self.content.line_to_char(y)
                end = self.content.line_to_char(y + 1)
            self.content.remove(start, end)
            del self.lines[y]
            self.info.loaded_to -= 1
            self.dbl_map.delete(y)
            self.tab_map.delete(y)
            self.dbl_map.shift_up(y)
            self.tab_map.shift_up(y)

        self._edited()
        self.move_to_y(min(y, self.len_lines() - 1))
        self.old_cursor = self.cursor.loc.x
        return removed

    def split_down(self, loc: Loc) -> None:
        """break line `loc.y` at `loc.x`, moving the rest to a new line"""
        self._check_writable()
        self.out_of_range(loc.x, loc.y)
        rhs = self.lines[loc.y][loc.x:]
        self.delete(loc.x, None, loc.y)
        self.insert_line(loc.y + 1, rhs)
        self.move_to(Loc(0, loc.y + 1))

    def splice_up(self, y: int) -> None:
        """join line `y + 1` onto the end of line `y`"""
        self._check_writable()
        self.load_to(y + 2)
        self.out_of_range(0, y)
        self.out_of_range(0, y + 1)
        length = len(self.lines[y])
        below = self.lines[y + 1]
        self.delete_line(y + 1)
        self.insert(Loc(length, y), below)
        self.move_to(Loc(length, y))

    def swap_line_up(self) -> None:
        self._check_writable()
        x, y = self.char_loc()
        line = self._cur_line()
        if y == 0:
            raise OutOfRange('cannot swap the first line up')
        self.delete_line(y)
        self.insert_line(y - 1, line)
        self.move_to(Loc(x, y - 1))

    def swap_line_down(self) -> None:
        self._check_writable()
        x, y = self.char_loc()
        line = self._cur_line()
        if y + 1 >= self.len_lines():
            raise OutOfRange('cannot swap the last line down')
        self.load_to(y + 2)
        self.delete_line(y)
        self.insert_line(y + 1, line)
        self.move_to(Loc(x, y + 1))

    def replace(self, loc: Loc, target: str, into: str) -> None:
        self._check_writable()
        self.valid_range(loc.x, loc.x + len(target), loc.y)
        self.delete(loc.x, loc.x + len(target), loc.y)
        self.insert(loc, into)

    def replace_all(self, pattern: str, into: str) -> int:
        with self.perf.timed('replace_all'):
            self._check_writable()
            self.move_to(Loc(0, 0))
            count = inc = 0
            while True:
                match = self.next_match(pattern, inc)
                if match is None:
                    return count
                self.replace(match.loc, match.text, into)
                count += 1
                # an empty match would otherwise be found again
                inc = 0 if match.text else 1

    # search

    def next_match(self, pattern: str, inc: int = 0) -> Match | None:
        """the first match at or after the cursor (plus `inc` characters)"""
        searcher = Searcher(pattern)
        y = self.cursor.loc.y
        match = searcher.lfind(self._cur_line(), self.char_ptr + inc)
        while match is None:
            y += 1
            self.load_to(y + 1)
            if y >= self.info.loaded_to:
                return None
            match = searcher.lfind(self.lines[y])
        return match._replace(loc=Loc(match.loc.x, y))

    def prev_match(self, pattern: str) -> Match | None:
        """the last match which starts before the cursor"""
        searcher = Searcher(pattern)
        y = self.cursor.loc.y
        match = searcher.rfind(self._cur_line()[:self.char_ptr])
        while match is None:
            y -= 1
            if y < 0:
                return None
            match = searcher.rfind(self.lines[y])
        return match._replace(loc=Loc(match.loc.x, y))

    # undo / redo

    def take_snapshot(self) -> Snapshot:
        return Snapshot(
            content=self.content.copy(),
            cursor=self.cursor,
            char_ptr=self.char_ptr,
            old_cursor=self.old_cursor,
            offset=self.offset,
        )

    def apply_snapshot(self, snapshot: Snapshot) -> None:
        self.content = snapshot.content.copy()
        self.cursor = snapshot.cursor
        self.char_ptr = snapshot.char_ptr
        self.old_cursor = snapshot.old_cursor
        self.offset = snapshot.offset
        self.reload_lines()
        self.load_to(max(self.cursor.loc.y + 1, self.offset.y + self.size.h))
        self.info.modified = not self.undo_mgmt.at_file()

    def commit(self) -> bool:
        with self.perf.timed('commit'):
            return self.undo_mgmt.commit(self.take_snapshot())

    def undo(self) -> bool:
        with self.perf.timed('undo'):
            snapshot = self.undo_mgmt.undo(self.take_snapshot())
            if snapshot is None:
                return False
            self.apply_snapshot(snapshot)
            return True

    def redo(self) -> bool:
        with self.perf.timed('redo'):
            snapshot = self.undo_mgmt.redo(self.take_snapshot())
            if snapshot is None:
                return False
            self.apply_snapshot(snapshot)
            return True

    # disk

    def _write(self, file_name: str) -> None:
        contents = str(self.content)
        if self.info.nl != '\n':
            contents = contents.replace('\n', self.info.nl)
        try:
            with open(file_name, 'w', encoding='UTF-8', newline='') as f:
                f.write(contents)
        except OSError as e:
            raise IoError(f'cannot save file: {e}') from e

    def save(self) -> None:
        with self.perf.timed('save'):
            self._check_writable()
            if self.file_name is None:
                raise NoFileName('no file name to save to')
            self._write(self.file_name)
            self.undo_mgmt.disk_write(self.take_snapshot())
            self.info.modified = False

    def save_as(self, file_name: str) -> None:
        with self.perf.timed('save_as'):
            self._check_writable()
            self._write(file_name)
