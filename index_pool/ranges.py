from __future__ import annotations

from typing import Any
from typing import Iterator


class Range:
    """Closed interval ``[min, max]`` of identifiers, with ``min <= max``.

    Ranges are immutable values. Equality and hashing are structural, but
    ordering is the one used by :py:class:`~index_pool.free_set.FreeSet`:
    ``a < b`` holds iff every identifier of ``a`` is below every identifier
    of ``b``. Two ranges are therefore mutually not-less exactly when they
    intersect, which lets :py:mod:`bisect` find the stored range containing
    (or following) a probe. That ordering is only a total order on disjoint
    ranges.

    >>> Range(1, 3) < Range(5, 5)
    True
    >>> Range(1, 3) < Range(3, 4) or Range(3, 4) < Range(1, 3)
    False
    """

    _min: int
    _max: int
    __slots__ = ["_min", "_max"]

    def __init__(self, min: int, max: int):
        if min > max:
            raise ValueError(f"Range min {min} is greater than max {max}")
        self._min = min
        self._max = max

    @staticmethod
    def singleton(value: int) -> Range:
        return Range(value, value)

    @property
    def min(self) -> int:
        return self._min

    @property
    def max(self) -> int:
        return self._max

    def with_min_minus_one(self) -> Range:
        """The range grown by one on the low side, used to probe for the
        neighbour ending right below ``min``."""
        return Range(self._min - 1, self._max)

    def with_max_plus_one(self) -> Range:
        """The range grown by one on the high side, used to probe for the
        neighbour starting right above ``max``."""
        return Range(self._min, self._max + 1)

    def contains(self, value: int) -> bool:
        return self._min <= value <= self._max

    def merge(self, other: Range) -> Range:
        """Smallest range covering both. Only meaningful when the two
        overlap or are adjacent."""
        return Range(min(self._min, other._min), max(self._max, other._max))

    def intersects(self, other: Range) -> bool:
        return self._min <= other._max and other._min <= self._max

    def adjacent_below(self, value: int) -> bool:
        return self._max + 1 == value

    def adjacent_above(self, value: int) -> bool:
        return self._min == value + 1

    def __contains__(self, value: object) -> bool:
        return isinstance(value, int) and self.contains(value)

    def __len__(self) -> int:
        return self._max - self._min + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self._min, self._max + 1))

    def __lt__(self, other: Range) -> bool:
        return self._max < other._min

    def __gt__(self, other: Range) -> bool:
        return other._max < self._min

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Range):
            return NotImplemented
        return self._min == other._min and self._max == other._max

    def __hash__(self) -> int:
        return hash((self._min, self._max))

    def __repr__(self) -> str:
        return f"Range({self._min}, {self._max})"
