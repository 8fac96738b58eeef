from __future__ import annotations

import random

import pytest

from kaolin.rope import CHUNK
from kaolin.rope import Rope


def test_rope_empty():
    rope = Rope()
    assert str(rope) == ''
    assert len(rope) == 0
    assert rope.len_lines() == 1
    assert rope.height == 0


def test_rope_repr():
    assert repr(Rope('a\nb')) == "Rope('a\\nb')"


def test_rope_equality():
    assert Rope('abc') == Rope('abc')
    assert Rope('abc') == 'abc'
    assert Rope('abc') != Rope('abd')


def test_rope_larger_than_a_chunk():
    s = 'hello\nworld\n' * CHUNK
    rope = Rope(s)
    assert str(rope) == s
    assert rope.len_chars() == len(s)
    assert rope.len_lines() == s.count('\n') + 1


@pytest.mark.parametrize(
    ('line', 'expected'),
    (
        pytest.param(0, 0, id='first line'),
        pytest.param(1, 2, id='middle line'),
        pytest.param(2, 5, id='after the last newline'),
        pytest.param(3, 5, id='one past the end'),
    ),
)
def test_rope_line_to_char(line, expected):
    assert Rope('a\nbc\n').line_to_char(line) == expected


@pytest.mark.parametrize(
    ('idx', 'expected'),
    ((0, 0), (1, 0), (2, 1), (4, 1), (5, 2)),
)
def test_rope_char_to_line(idx, expected):
    assert Rope('a\nbc\n').char_to_line(idx) == expected


def test_rope_line():
    rope = Rope('a\nbc\n')
    assert rope.line(0) == 'a\n'
    assert rope.line(1) == 'bc\n'
    assert rope.line(2) == ''


def test_rope_slice():
    assert Rope('hello world').slice(3, 8) == 'lo wo'


def test_rope_insert_and_remove():
    rope = Rope('hello world')
    rope.insert(5, ',')
    assert rope == 'hello, world'
    rope.remove(0, 7)
    assert rope == 'world'


@pytest.mark.parametrize(
    'fn',
    (
        pytest.param(lambda rope: rope.insert(4, 'x'), id='insert'),
        pytest.param(lambda rope: rope.remove(2, 1), id='remove backwards'),
        pytest.param(lambda rope: rope.remove(0, 4), id='remove past end'),
        pytest.param(lambda rope: rope.line(1), id='line'),
        pytest.param(lambda rope: rope.line_to_char(2), id='line_to_char'),
        pytest.param(lambda rope: rope.char_to_line(4), id='char_to_line'),
        pytest.param(lambda rope: rope.slice(0, 4), id='slice'),
    ),
)
def test_rope_out_of_range(fn):
    with pytest.raises(IndexError):
        fn(Rope('abc'))


def test_rope_copy_does_not_see_later_edits():
    rope = Rope('abc')
    copy = rope.copy()
    rope.insert(0, 'x')
    copy.remove(0, 1)
    assert rope == 'xabc'
    assert copy == 'bc'


def test_rope_typing_stays_shallow():
    rope = Rope()
    for i in range(5000):
        rope.insert(len(rope), 'x\n' if i % 10 == 0 else 'x')
    assert rope.len_lines() == 501
    assert rope.height < 10
    # typing merges into neighbouring leaves
    assert all(len(chunk) <= CHUNK for chunk in rope.chunks())
    assert sum(1 for _ in rope.chunks()) < 5000 // CHUNK * 2 + 2


def test_rope_random_edits_match_str():
    rand = random.Random(0)
    rope = Rope()
    s = ''
    for _ in range(1000):
        if s and rand.random() < .4:
            start = rand.randrange(len(s))
            end = rand.randrange(start, min(len(s), start + 50) + 1)
            rope.remove(start, end)
            s = s[:start] + s[end:]
        else:
            idx = rand.randrange(len(s) + 1)
            text = ''.join(rand.choice('ab\n日') for _ in range(rand.randrange(80)))
            rope.insert(idx, text)
            s = s[:idx] + text + s[idx:]

        assert str(rope) == s
        assert rope.len_lines() == s.count('\n') + 1
        line = rand.randrange(rope.len_lines())
        expected = len('\n'.join(s.split('\n')[:line])) + (1 if line else 0)
        assert rope.line_to_char(line) == expected
        assert rope.line(line).rstrip('\n') == s.split('\n')[line]
