from __future__ import annotations

from bisect import bisect_left
from typing import Iterator
from typing import List
from typing import Optional

from .ranges import Range


class FreeSet:
    """Ordered set of reclaimed identifiers, stored as coalesced ranges.

    The stored ranges are kept sorted by ``min`` and are pairwise disjoint
    and non-adjacent: freeing an identifier next to a stored range extends
    that range instead of adding a new one. Lookups go through
    :py:func:`bisect.bisect_left` with the ordering of :py:class:`Range`,
    where a probe compares "equal" to every stored range it intersects.

    Iterators returned by :py:meth:`iter` and :py:meth:`iter_from` raise
    ``RuntimeError`` when advanced after the set was mutated.
    """

    _ranges: List[Range]
    _version: int
    __slots__ = ["_ranges", "_version"]

    def __init__(self) -> None:
        self._ranges = []
        self._version = 0

    def _find(self, value: int) -> int:
        # position of the first stored range with max >= value
        return bisect_left(self._ranges, Range.singleton(value))

    def _find_containing(self, value: int) -> Optional[int]:
        idx = self._find(value)
        if idx < len(self._ranges) and self._ranges[idx].contains(value):
            return idx
        return None

    def mark_free(self, free: Range) -> bool:
        """Adds ``free`` to the set, coalescing it with its neighbours.

        Returns ``False`` and leaves the set untouched if any identifier of
        ``free`` is already free.
        """
        probe = free.with_min_minus_one() if free.min > 0 else free
        start = bisect_left(self._ranges, probe)
        probe = probe.with_max_plus_one()

        end = start
        merged = free
        while end < len(self._ranges):
            stored = self._ranges[end]
            if not stored.intersects(probe):
                break
            if stored.intersects(free):
                return False
            merged = merged.merge(stored)
            end += 1

        self._ranges[start:end] = [merged]
        self._version += 1
        return True

    def mark_used(self, value: int) -> bool:
        """Removes ``value`` from the set, splitting the range holding it.

        Returns ``False`` if ``value`` was not free.
        """
        idx = self._find_containing(value)
        if idx is None:
            return False

        stored = self._ranges[idx]
        remainder: List[Range] = []
        if stored.min < value:
            remainder.append(Range(stored.min, value - 1))
        if value < stored.max:
            remainder.append(Range(value + 1, stored.max))
        self._ranges[idx : idx + 1] = remainder
        self._version += 1
        return True

    def take_lowest(self) -> Optional[int]:
        """Removes and returns the lowest free identifier, if any."""
        if not self._ranges:
            return None

        lowest = self._ranges[0]
        if lowest.min == lowest.max:
            del self._ranges[0]
        else:
            self._ranges[0] = Range(lowest.min + 1, lowest.max)
        self._version += 1
        return lowest.min

    def is_free(self, value: int) -> bool:
        return self._find_containing(value) is not None

    def peek_last(self) -> Optional[Range]:
        if not self._ranges:
            return None
        return self._ranges[-1]

    def remove_last(self) -> Range:
        if not self._ranges:
            raise IndexError("remove_last() on an empty FreeSet")
        self._version += 1
        return self._ranges.pop()

    def iter(self) -> Iterator[Range]:
        """Yields the stored ranges in ascending order."""
        return self._iter_from_position(0, self._version)

    def iter_from(self, key: int) -> Iterator[Range]:
        """Yields the range containing ``key`` (if any) and every range
        above it, in ascending order."""
        return self._iter_from_position(self._find(key), self._version)

    def _iter_from_position(
        self, position: int, version: int
    ) -> Iterator[Range]:
        ranges = self._ranges
        while position < len(ranges):
            if self._version != version:
                raise RuntimeError("FreeSet mutated during iteration")
            yield ranges[position]
            position += 1
        if self._version != version:
            raise RuntimeError("FreeSet mutated during iteration")

    def clear(self) -> None:
        self._ranges.clear()
        self._version += 1

    def count(self) -> int:
        """Number of free identifiers held by the set."""
        return sum(len(r) for r in self._ranges)

    def __iter__(self) -> Iterator[Range]:
        return self.iter()

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.is_free(value)

    def __len__(self) -> int:
        return len(self._ranges)

    def __repr__(self) -> str:
        return "%s(%r)" % (self.__class__.__name__, self._ranges)
