from __future__ import annotations

import argparse
import sys
from typing import Sequence

from kaolin.document import Document
from kaolin.errors import DocumentError
from kaolin.loc import Loc
from kaolin.loc import Size
from kaolin.perf import perf_log


def _positive_int(s: str) -> int:
    ret = int(s)
    if ret < 1:
        raise argparse.ArgumentTypeError(f'must be positive: {s}')
    return ret


def _show(doc: Document) -> None:
    doc.load_to(doc.offset.y + doc.size.h)
    end = min(doc.offset.y + doc.size.h, doc.len_lines())
    for y in range(doc.offset.y, end):
        line = doc.line_trim(y, doc.offset.x, doc.size.w)
        print(f'{doc.line_number(y)} {line}'.rstrip())


def _find(doc: Document, pattern: str) -> None:
    doc.move_to(Loc(0, 0))
    inc = 0
    while True:
        match = doc.next_match(pattern, inc)
        if match is None:
            return
        print(f'{match.loc.y + 1}:{match.loc.x + 1}: {match.text}')
        doc.move_to(match.loc)
        inc = max(len(match.text), 1)


def _replace(doc: Document, pattern: str, into: str) -> None:
    count = doc.replace_all(pattern, into)
    if count:
        doc.save()
    occurrences = 'occurrences' if count != 1 else 'occurrence'
    print(f'replaced {count} {occurrences}')


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument('filename')
    parser.add_argument('--tab-width', type=_positive_int, default=4)
    parser.add_argument('--width', type=_positive_int, default=80)
    parser.add_argument('--height', type=_positive_int, default=24)
    parser.add_argument('--find', metavar='PATTERN')
    parser.add_argument('--replace', metavar='REPL')
    parser.add_argument('--perf-log')
    args = parser.parse_args(argv)

    if args.replace is not None and args.find is None:
        parser.error('--replace requires --find')

    with perf_log(args.perf_log) as perf:
        try:
            doc = Document.open(
                Size(args.width, args.height),
                args.filename,
                tab_width=args.tab_width,
                perf=perf,
            )
            if args.find is None:
                _show(doc)
            elif args.replace is None:
                _find(doc, args.find)
            else:
                _replace(doc, args.find, args.replace)
        except DocumentError as e:
            print(e, file=sys.stderr)
            return 1
    return 0


if __name__ == '__main__':
    raise SystemExit(main())
