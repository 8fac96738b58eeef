from __future__ import annotations

import wcwidth


def char_width(c: str) -> int:
    # control and combining characters still take up a cell in our model
    return 2 if wcwidth.wcwidth(c) == 2 else 1


def tab_stop(x: int, tab_width: int) -> int:
    return x + tab_width - x % tab_width


def str_width(s: str, tab_width: int, start: int = 0) -> int:
    x = start
    for c in s:
        if c == '\t':
            x = tab_stop(x, tab_width)
        else:
            x += char_width(c)
    return x - start


def expand_tabs(s: str, tab_width: int) -> str:
    """like `str.expandtabs` but with tab stops counted in display cells"""
    parts = []
    x = 0
    for c in s:
        if c == '\t':
            width = tab_stop(x, tab_width) - x
            parts.append(' ' * width)
            x += width
        else:
            parts.append(c)
            x += char_width(c)
    return ''.join(parts)


def trim(s: str, start: int, length: int, tab_width: int) -> str:
    """cut `length` display cells out of `s` starting at column `start`

    a wide character split by either edge is replaced by a space
    """
    s = expand_tabs(s, tab_width)
    if start >= str_width(s, tab_width):
        return ''

    x = i = 0
    while x < start:
        x += char_width(s[i])
        i += 1

    w = x - start
    if w > length:
        return ' ' * length
    parts = [' ' * w]
    for c in s[i:]:
        c_width = char_width(c)
        if w + c_width > length:
            if w < length:
                parts.append(' ')
            break
        parts.append(c)
        w += c_width
    return ''.join(parts)


def tab_boundaries_backward(line: str, tab_width: int) -> list[int]:
    """where runs of `tab_width` leading spaces (typed as tabs) end"""
    ret = []
    spaces = ' ' * tab_width
    at = 0
    while line.startswith(spaces, at):
        at += tab_width
        ret.append(at)
    return ret
