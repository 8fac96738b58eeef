from __future__ import annotations

import functools
from typing import Match as ReMatch
from typing import NamedTuple

import onigurumacffi

from kaolin.loc import Loc

# a pattern which can never match inside a single line
NEVER = '$ ^'


class Match(NamedTuple):
    text: str
    loc: Loc


class _Reg:
    def __init__(self, s: str) -> None:
        self._pattern = s
        try:
            self._reg = onigurumacffi.compile(self._pattern)
        except onigurumacffi.OnigError:
            self.valid = False
            self._reg = onigurumacffi.compile(NEVER)
        else:
            self.valid = True

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self._pattern!r})'

    def search(self, line: str, pos: int = 0) -> ReMatch[str] | None:
        return self._reg.search(line, pos)


make_reg = functools.lru_cache(maxsize=None)(_Reg)


def word_pattern(tab_width: int) -> str:
    # an indentation tab typed as spaces counts as one word
    return rf'(\t| {{{tab_width}}}|\s{{2,}}|\w+|\.)'


class Searcher:
    def __init__(self, pattern: str) -> None:
        self.reg = make_reg(pattern)

    def __repr__(self) -> str:
        return f'{type(self).__name__}({self.reg!r})'

    def lfind(self, s: str, start: int = 0) -> Match | None:
        if start > len(s):
            return None
        match = self.reg.search(s, start)
        if match is None:
            return None
        return Match(match[0], Loc(match.start(), 0))

    def lfinds(self, s: str) -> list[Match]:
        ret = []
        pos = 0
        while pos <= len(s):
            match = self.reg.search(s, pos)
            if match is None:
                break
            ret.append(Match(match[0], Loc(match.start(), 0)))
            # step past empty matches so we always make progress
            pos = max(match.end(), match.start() + 1)
        return ret

    def rfind(self, s: str) -> Match | None:
        matches = self.lfinds(s)
        return matches[-1] if matches else None
