from __future__ import annotations

from typing import NamedTuple
from typing import TYPE_CHECKING
from typing import Union

from kaolin.loc import Loc

if TYPE_CHECKING:
    from kaolin.document import Document  # XXX: circular


class Insert(NamedTuple):
    loc: Loc
    text: str

    def __call__(self, doc: Document) -> None:
        doc.insert(self.loc, self.text)


class Delete(NamedTuple):
    loc: Loc
    text: str

    def __call__(self, doc: Document) -> None:
        doc.delete_with_tab(self.loc, self.text)


class InsertLine(NamedTuple):
    y: int
    text: str

    @property
    def loc(self) -> Loc:
        return Loc(0, self.y)

    def __call__(self, doc: Document) -> None:
        doc.insert_line(self.y, self.text)


class DeleteLine(NamedTuple):
    y: int

    @property
    def loc(self) -> Loc:
        return Loc(0, self.y)

    def __call__(self, doc: Document) -> None:
        doc.delete_line(self.y)


class SplitDown(NamedTuple):
    loc: Loc

    def __call__(self, doc: Document) -> None:
        doc.split_down(self.loc)


class SpliceUp(NamedTuple):
    y: int

    @property
    def loc(self) -> Loc:
        return Loc(0, self.y)

    def __call__(self, doc: Document) -> None:
        doc.splice_up(self.y)


Event = Union[Insert, Delete, InsertLine, DeleteLine, SplitDown, SpliceUp]
