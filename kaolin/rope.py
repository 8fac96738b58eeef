from __future__ import annotations

from typing import Iterator

CHUNK = 512


class _Node:
    __slots__ = ('left', 'right', 'text', 'length', 'newlines', 'height')

    def __init__(
            self,
            left: _Node | None = None,
            right: _Node | None = None,
            *,
            text: str = '',
    ) -> None:
        self.left = left
        self.right = right
        self.text = text
        if left is None or right is None:
            assert left is None and right is None, 'half a branch'
            self.length = len(text)
            self.newlines = text.count('\n')
            self.height = 1
        else:
            self.length = left.length + right.length
            self.newlines = left.newlines + right.newlines
            self.height = 1 + max(left.height, right.height)

    @property
    def is_leaf(self) -> bool:
        return self.left is None


def _leaf(s: str) -> _Node | None:
    return _Node(text=s) if s else None


def _balance(left: _Node, right: _Node) -> _Node:
    if left.height > right.height + 1:
        assert left.left is not None and left.right is not None
        if left.left.height >= left.right.height:
            return _Node(left.left, _Node(left.right, right))
        else:
            inner = left.right
            assert inner.left is not None and inner.right is not None
            return _Node(
                _Node(left.left, inner.left),
                _Node(inner.right, right),
            )
    elif right.height > left.height + 1:
        assert right.left is not None and right.right is not None
        if right.right.height >= right.left.height:
            return _Node(_Node(left, right.left), right.right)
        else:
            inner = right.left
            assert inner.left is not None and inner.right is not None
            return _Node(
                _Node(left, inner.left),
                _Node(inner.right, right.right),
            )
    else:
        return _Node(left, right)


def _join(a: _Node | None, b: _Node | None) -> _Node | None:
    if a is None:
        return b
    elif b is None:
        return a
    elif a.is_leaf and b.is_leaf and a.length + b.length <= CHUNK:
        return _Node(text=a.text + b.text)
    # a lone leaf is pushed down the spine so small edits merge into the
    # neighbouring leaf instead of fragmenting the tree
    elif a.height > b.height + 1 or (b.is_leaf and not a.is_leaf):
        assert a.left is not None
        return _balance(a.left, _join_nonempty(a.right, b))
    elif b.height > a.height + 1 or (a.is_leaf and not b.is_leaf):
        assert b.right is not None
        return _balance(_join_nonempty(a, b.left), b.right)
    else:
        return _Node(a, b)


def _join_nonempty(a: _Node | None, b: _Node | None) -> _Node:
    ret = _join(a, b)
    assert ret is not None
    return ret


def _split(n: _Node | None, idx: int) -> tuple[_Node | None, _Node | None]:
    if n is None:
        return None, None
    elif n.is_leaf:
        return _leaf(n.text[:idx]), _leaf(n.text[idx:])

    assert n.left is not None and n.right is not None
    if idx < n.left.length:
        l1, l2 = _split(n.left, idx)
        return l1, _join(l2, n.right)
    else:
        r1, r2 = _split(n.right, idx - n.left.length)
        return _join(n.left, r1), r2


def _build(s: str) -> _Node | None:
    nodes = [_Node(text=s[i:i + CHUNK]) for i in range(0, len(s), CHUNK)]
    if not nodes:
        return None
    while len(nodes) > 1:
        nodes = [
            _join_nonempty(*nodes[i:i + 2]) if i + 1 < len(nodes)
            else nodes[i]
            for i in range(0, len(nodes), 2)
        ]
    return nodes[0]


def _collect(n: _Node | None, start: int, end: int, out: list[str]) -> None:
    if n is None or start >= end:
        return
    elif n.is_leaf:
        out.append(n.text[start:end])
        return

    assert n.left is not None
    left_len = n.left.length
    if start < left_len:
        _collect(n.left, start, min(end, left_len), out)
    if end > left_len:
        _collect(n.right, max(start - left_len, 0), end - left_len, out)


class Rope:
    """an immutable-node rope: edits build new spines and share the rest,
    so `copy` is O(1) and old copies never observe later edits
    """

    def __init__(self, text: str = '') -> None:
        self._root = _build(text)

    @classmethod
    def _from_root(cls, root: _Node | None) -> Rope:
        ret = cls()
        ret._root = root
        return ret

    def __repr__(self) -> str:
        return f'{type(self).__name__}({str(self)!r})'

    def __str__(self) -> str:
        return ''.join(self.chunks())

    def __len__(self) -> int:
        return self.len_chars()

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Rope):
            return self._root is other._root or str(self) == str(other)
        elif isinstance(other, str):
            return str(self) == other
        else:
            return NotImplemented

    def copy(self) -> Rope:
        return self._from_root(self._root)

    def chunks(self) -> Iterator[str]:
        stack = [self._root]
        while stack:
            n = stack.pop()
            if n is None:
                continue
            elif n.is_leaf:
                yield n.text
            else:
                stack.append(n.right)
                stack.append(n.left)

    @property
    def height(self) -> int:
        return self._root.height if self._root is not None else 0

    # counting

    def len_chars(self) -> int:
        return self._root.length if self._root is not None else 0

    def len_lines(self) -> int:
        newlines = self._root.newlines if self._root is not None else 0
        return newlines + 1

    def _newline_pos(self, k: int) -> int:
        n = self._root
        assert n is not None
        offset = 0
        while not n.is_leaf:
            assert n.left is not None and n.right is not None
            if k < n.left.newlines:
                n = n.left
            else:
                k -= n.left.newlines
                offset += n.left.length
                n = n.right
        pos = -1
        for _ in range(k + 1):
            pos = n.text.index('\n', pos + 1)
        return offset + pos

    def line_to_char(self, line: int) -> int:
        if not 0 <= line <= self.len_lines():
            raise IndexError(f'line {line} out of range')
        elif line == 0:
            return 0
        elif line == self.len_lines():
            return self.len_chars()
        else:
            return self._newline_pos(line - 1) + 1

    def char_to_line(self, idx: int) -> int:
        if not 0 <= idx <= self.len_chars():
            raise IndexError(f'char {idx} out of range')
        n = self._root
        line = 0
        while n is not None and not n.is_leaf:
            assert n.left is not None
            if idx < n.left.length:
                n = n.left
            else:
                line += n.left.newlines
                idx -= n.left.length
                n = n.right
        if n is not None:
            line += n.text.count('\n', 0, idx)
        return line

    # reading

    def slice(self, start: int, end: int) -> str:
        if not 0 <= start <= end <= self.len_chars():
            raise IndexError(f'slice {start}:{end} out of range')
        out: list[str] = []
        _collect(self._root, start, end, out)
        return ''.join(out)

    def line(self, line: int) -> str:
        """the line including its trailing newline (if it has one)"""
        if not 0 <= line < self.len_lines():
            raise IndexError(f'line {line} out of range')
        return self.slice(self.line_to_char(line), self.line_to_char(line + 1))

    # editing

    def insert(self, idx: int, s: str) -> None:
        if not 0 <= idx <= self.len_chars():
            raise IndexError(f'insert {idx} out of range')
        if s:
            left, right = _split(self._root, idx)
            self._root = _join(_join(left, _build(s)), right)

    def remove(self, start: int, end: int) -> None:
        if not 0 <= start <= end <= self.len_chars():
            raise IndexError(f'remove {start}:{end} out of range')
        if start != end:
            left, rest = _split(self._root, start)
            _, right = _split(rest, end - start)
            self._root = _join(left, right)
