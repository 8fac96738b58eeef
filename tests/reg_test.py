from __future__ import annotations

from kaolin.loc import Loc
from kaolin.reg import make_reg
from kaolin.reg import Match
from kaolin.reg import Searcher
from kaolin.reg import word_pattern


def test_make_reg_is_cached():
    assert make_reg('a+') is make_reg('a+')


def test_reg_invalid_never_matches():
    reg = make_reg('(')
    assert reg.valid is False
    assert reg.search('((', 0) is None
    assert Searcher('(').lfind('((') is None


def test_reg_repr():
    assert repr(make_reg('a+')) == "_Reg('a+')"


def test_searcher_lfind():
    assert Searcher('b+').lfind('abbcb') == Match('bb', Loc(1, 0))


def test_searcher_lfind_start():
    assert Searcher('b+').lfind('abbcb', 3) == Match('b', Loc(4, 0))
    assert Searcher('b+').lfind('abbcb', 6) is None


def test_searcher_lfind_no_match():
    assert Searcher('z').lfind('abc') is None


def test_searcher_lfinds():
    ret = Searcher(r'\d+').lfinds('a1b22')
    assert ret == [Match('1', Loc(1, 0)), Match('22', Loc(3, 0))]


def test_searcher_rfind():
    assert Searcher('ab').rfind('abab') == Match('ab', Loc(2, 0))
    assert Searcher('ab').rfind('') is None


def test_searcher_character_indices():
    assert Searcher('b').lfind('日本b') == Match('b', Loc(2, 0))


def test_word_pattern():
    assert word_pattern(4) == r'(\t| {4}|\s{2,}|\w+|\.)'
    ret = Searcher(word_pattern(2)).lfinds('foo.bar   x')
    assert [match.text for match in ret] == ['foo', '.', 'bar', '  ', 'x']
