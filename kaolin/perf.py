from __future__ import annotations

import contextlib
import cProfile
import time
from typing import Generator
from typing import NamedTuple


class Record(NamedTuple):
    name: str
    duration: float


class Perf:
    """times document operations when profiling is enabled"""

    def __init__(self) -> None:
        self._prof: cProfile.Profile | None = None
        self._current: str | None = None
        self.records: list[Record] = []

    @property
    def enabled(self) -> bool:
        return self._prof is not None

    def enable(self) -> None:
        self._prof = cProfile.Profile()

    @contextlib.contextmanager
    def timed(self, name: str) -> Generator[None, None, None]:
        if self._prof is None:
            yield
        else:
            # operations are timed whole, they never nest
            assert self._current is None, (self._current, name)
            self._current = name
            start = time.monotonic()
            self._prof.enable()
            try:
                yield
            finally:
                self._prof.disable()
                self.records.append(Record(name, time.monotonic() - start))
                self._current = None

    def save(self, filename: str) -> None:
        assert self._prof is not None
        self._prof.dump_stats(f'{filename}.pstats')
        with open(filename, 'w', encoding='UTF-8') as f:
            f.write('μs\tevent\n')
            for record in self.records:
                f.write(f'{int(record.duration * 1e6)}\t{record.name}\n')


@contextlib.contextmanager
def perf_log(filename: str | None) -> Generator[Perf, None, None]:
    perf = Perf()
    if filename is None:
        yield perf
    else:
        perf.enable()
        try:
            yield perf
        finally:
            perf.save(filename)
