from __future__ import annotations

from typing import Iterator
from typing import Optional
from typing import TYPE_CHECKING

from .ranges import Range

if TYPE_CHECKING:
    from .pool import IndexPool


class IndexIter(Iterator[int]):
    """Iterator over every in-use index of a pool, in ascending order.

    Walks ``[start, maximum())`` and jumps over the free ranges. Advancing
    it after the pool was mutated raises ``RuntimeError``.
    """

    _pool: IndexPool
    _version: int
    _free_ranges: Iterator[Range]
    _next_range: Optional[Range]
    _index: int
    _end: int

    def __init__(
        self,
        pool: IndexPool,
        free_ranges: Iterator[Range],
        end: int,
        start: int = 0,
    ):
        self._pool = pool
        self._version = pool._version
        self._free_ranges = free_ranges
        self._next_range = next(free_ranges, None)
        self._index = start
        self._end = end

        if self._next_range is not None and self._next_range.contains(start):
            self._skip_range()

    def _skip_range(self) -> None:
        assert self._next_range is not None
        self._index = self._next_range.max + 1
        self._next_range = next(self._free_ranges, None)

    def __iter__(self) -> IndexIter:
        return self

    def __next__(self) -> int:
        if self._pool._version != self._version:
            raise RuntimeError("IndexPool mutated during iteration")
        if self._index >= self._end:
            raise StopIteration

        value = self._index
        self._index += 1
        if self._next_range is not None and self._index == self._next_range.min:
            self._skip_range()
        return value


class IndexAfterIter(IndexIter):
    """Iterator over the in-use indices greater than or equal to ``after``."""

    def __init__(
        self, pool: IndexPool, free_ranges: Iterator[Range], after: int, end: int
    ):
        super().__init__(pool, free_ranges, end, start=after)
