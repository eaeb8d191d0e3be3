from __future__ import annotations

import functools
import logging
from typing import ClassVar
from typing import Iterator
from typing import List

from typing_extensions import Literal
from typing_extensions import Self

from ._utils import check_index
from ._utils import log_obj
from .free_set import FreeSet
from .iter import IndexAfterIter
from .iter import IndexIter
from .ranges import Range

_logger = logging.getLogger(__name__)
_log_obj = functools.partial(log_obj, _logger)

ErrorCode = Literal["ALREADY_IN_USE", "ALREADY_RETURNED"]


class IndexPoolError(RuntimeError):
    code: ErrorCode
    explanation: str
    index: int

    def __init__(self, index: int, message: str, code: ErrorCode):
        super(RuntimeError, self).__init__(message)
        self.index = index
        self.code = code
        self.explanation = message


class AlreadyReturned(IndexPoolError):
    """An index was returned to the pool while it was not in use."""

    description: ClassVar[str] = (
        "An index was tried to be returned to the pool, "
        "but it was already marked as free."
    )

    def __init__(self, index: int):
        super().__init__(index, self.description, "ALREADY_RETURNED")


class AlreadyInUse(IndexPoolError):
    """A specific index was requested while it was already in use."""

    description: ClassVar[str] = (
        "An index was requested which was already marked as in use."
    )

    def __init__(self, index: int):
        super().__init__(index, self.description, "ALREADY_IN_USE")


class IndexPool:
    """A pool which manages allocation of unique indices.

    It acts like a pseudo memory allocator over the natural numbers:
    :py:meth:`new_id` always hands out the lowest index not in use, and
    :py:meth:`return_id` gives an index back so it can be handed out again.

    >>> pool = IndexPool()
    >>> a, b, c = pool.new_id(), pool.new_id(), pool.new_id()
    >>> data = [""] * pool.maximum()
    >>> data[a], data[b], data[c] = "apple", "banana", "coconut"
    >>> pool.return_id(b)
    >>> p = pool.new_id()
    >>> data[p] = "pineapple"
    >>> data
    ['apple', 'pineapple', 'coconut']

    Everything at or above :py:meth:`maximum` is free. Indices returned
    below it are kept in a :py:class:`~index_pool.free_set.FreeSet` of
    coalesced ranges, and returning the topmost index pulls the maximum
    back down across any free range that becomes flush with it.

    The pool is not thread safe. Mutating it while iterating over
    :py:meth:`all_indices` or :py:meth:`all_indices_after` makes the
    iterator raise ``RuntimeError``.
    """

    _next_id: int
    _in_use: int
    _free_set: FreeSet
    _version: int
    __slots__ = ["_next_id", "_in_use", "_free_set", "_version"]

    def __init__(self, initial_index: int = 0):
        """Constructs an empty pool whose first :py:meth:`new_id` is
        ``initial_index``.

        The ``[0, initial_index)`` range can be thought of either as a base
        offset or as pre-allocated indices. It is not counted by
        :py:meth:`in_use`, and :py:meth:`is_free` reports them as taken.
        Any of them may still be passed to :py:meth:`return_id`, after which
        it becomes issuable. Such a return decrements :py:meth:`in_use`
        (never below zero) although nothing was issued, so from then on
        :py:meth:`in_use` under-counts by one.
        """
        self._next_id = check_index(initial_index, "initial_index")
        self._in_use = 0
        self._free_set = FreeSet()
        self._version = 0

    @classmethod
    def new(cls) -> Self:
        return cls()

    @classmethod
    def with_initial_index(cls, index: int) -> Self:
        return cls(index)

    @property
    def _log_prefix(self) -> str:
        return "%s<%s>: " % (self.__class__.__name__, id(self))

    def _dbg(self, msg: str, *args: object) -> None:
        _log_obj(self, logging.DEBUG, msg, *args)

    def new_id(self) -> int:
        """Allocates the lowest index which is not in use."""
        self._in_use += 1
        self._version += 1

        index = self._free_set.take_lowest()
        if index is not None:
            return index

        index = self._next_id
        self._next_id += 1
        return index

    def request_id(self, index: int) -> None:
        """Allocates the specific ``index``.

        Raises :py:class:`AlreadyInUse` if it is already allocated, in
        which case the pool is left unchanged.
        """
        check_index(index)
        if index == self._next_id:
            self._next_id += 1
        elif index > self._next_id:
            self._free_set.mark_free(Range(self._next_id, index - 1))
            self._next_id = index + 1
        elif not self._free_set.mark_used(index):
            self._dbg("refused request of index %d, already in use", index)
            raise AlreadyInUse(index)

        self._in_use += 1
        self._version += 1

    def return_id(self, index: int) -> None:
        """Gives ``index`` back to the pool so that it may be handed out
        again.

        Raises :py:class:`AlreadyReturned` if the index was not in use, in
        which case the pool is left unchanged. Whether ignoring that error
        is okay is up to the caller.
        """
        check_index(index)
        if index >= self._next_id:
            self._dbg("refused return of index %d, above maximum", index)
            raise AlreadyReturned(index)

        if index + 1 == self._next_id:
            self._next_id -= 1
        elif not self._free_set.mark_free(Range.singleton(index)):
            self._dbg("refused return of index %d, already free", index)
            raise AlreadyReturned(index)

        # indices below the initial index are returned without being issued
        if self._in_use > 0:
            self._in_use -= 1
        self._version += 1

        while self._collapse_next():
            pass

    def _collapse_next(self) -> bool:
        last = self._free_set.peek_last()
        if last is None or not last.adjacent_below(self._next_id):
            return False

        self._free_set.remove_last()
        self._dbg("collapsed maximum from %d to %d", self._next_id, last.min)
        self._next_id = last.min
        return True

    def is_free(self, index: int) -> bool:
        """Checks if ``index`` is currently free."""
        check_index(index)
        return index >= self._next_id or self._free_set.is_free(index)

    def maximum(self) -> int:
        """Upper bound on the allocated indices: the highest index in use
        plus one. Useful to size a list indexed by the pool's indices."""
        return self._next_id

    def in_use(self) -> int:
        """Number of indices currently in use."""
        return self._in_use

    def clear(self) -> None:
        self._free_set.clear()
        self._in_use = 0
        self._next_id = 0
        self._version += 1
        self._dbg("cleared")

    def all_indices(self) -> IndexIter:
        """Iterates over every index in use, in ascending order."""
        return IndexIter(self, self._free_set.iter(), self._next_id)

    def all_indices_after(self, after: int) -> IndexAfterIter:
        """Iterates over every index in use which is ``>= after``, in
        ascending order."""
        check_index(after, "after")
        return IndexAfterIter(
            self, self._free_set.iter_from(after), after, self._next_id
        )

    def free_ranges(self) -> List[Range]:
        """The ranges of free indices below :py:meth:`maximum`, ascending."""
        return list(self._free_set.iter())

    def __len__(self) -> int:
        return self._in_use

    def __contains__(self, index: object) -> bool:
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            return False
        return not self.is_free(index)

    def __iter__(self) -> Iterator[int]:
        return self.all_indices()

    def __repr__(self) -> str:
        return "%s(next_id=%d, in_use=%d, free=%r)" % (
            self.__class__.__name__,
            self._next_id,
            self._in_use,
            self.free_ranges(),
        )
