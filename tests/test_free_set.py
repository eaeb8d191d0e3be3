import pytest

from index_pool import FreeSet
from index_pool import Range


def ranges(free_set):
    return list(free_set.iter())


def test_empty(free_set):
    assert len(free_set) == 0
    assert free_set.count() == 0
    assert free_set.peek_last() is None
    assert free_set.take_lowest() is None
    assert not free_set.is_free(0)
    assert ranges(free_set) == []


def test_mark_free_isolated(free_set):
    assert free_set.mark_free(Range.singleton(2))
    assert free_set.mark_free(Range.singleton(6))
    assert ranges(free_set) == [Range(2, 2), Range(6, 6)]


def test_mark_free_coalesces_below(free_set):
    free_set.mark_free(Range.singleton(2))
    assert free_set.mark_free(Range.singleton(3))
    assert ranges(free_set) == [Range(2, 3)]


def test_mark_free_coalesces_above(free_set):
    free_set.mark_free(Range.singleton(3))
    assert free_set.mark_free(Range.singleton(2))
    assert ranges(free_set) == [Range(2, 3)]


def test_mark_free_coalesces_both_sides(free_set):
    free_set.mark_free(Range(0, 1))
    free_set.mark_free(Range(3, 5))
    assert free_set.mark_free(Range.singleton(2))
    assert ranges(free_set) == [Range(0, 5)]
    assert free_set.count() == 6


def test_mark_free_at_zero(free_set):
    free_set.mark_free(Range.singleton(1))
    assert free_set.mark_free(Range.singleton(0))
    assert ranges(free_set) == [Range(0, 1)]


def test_mark_free_range(free_set):
    free_set.mark_free(Range.singleton(0))
    free_set.mark_free(Range.singleton(9))
    assert free_set.mark_free(Range(3, 6))
    assert ranges(free_set) == [Range(0, 0), Range(3, 6), Range(9, 9)]


@pytest.mark.parametrize("value", [2, 3, 4])
def test_mark_free_already_free(free_set, value):
    free_set.mark_free(Range(2, 4))
    assert not free_set.mark_free(Range.singleton(value))
    assert ranges(free_set) == [Range(2, 4)]


def test_mark_free_partial_overlap_leaves_set_unchanged(free_set):
    free_set.mark_free(Range(2, 4))
    free_set.mark_free(Range(8, 8))
    assert not free_set.mark_free(Range(4, 6))
    assert ranges(free_set) == [Range(2, 4), Range(8, 8)]


def test_mark_used_splits(free_set):
    free_set.mark_free(Range(2, 6))
    assert free_set.mark_used(4)
    assert ranges(free_set) == [Range(2, 3), Range(5, 6)]
    assert free_set.mark_used(2)
    assert ranges(free_set) == [Range(3, 3), Range(5, 6)]
    assert free_set.mark_used(6)
    assert ranges(free_set) == [Range(3, 3), Range(5, 5)]
    assert free_set.mark_used(3)
    assert ranges(free_set) == [Range(5, 5)]


def test_mark_used_not_free(free_set):
    free_set.mark_free(Range(2, 3))
    assert not free_set.mark_used(1)
    assert not free_set.mark_used(4)
    assert ranges(free_set) == [Range(2, 3)]


def test_take_lowest(free_set):
    free_set.mark_free(Range(1, 2))
    free_set.mark_free(Range.singleton(5))
    assert free_set.take_lowest() == 1
    assert free_set.take_lowest() == 2
    assert free_set.take_lowest() == 5
    assert free_set.take_lowest() is None
    assert len(free_set) == 0


def test_is_free(free_set):
    free_set.mark_free(Range(1, 3))
    free_set.mark_free(Range(7, 7))
    assert [v for v in range(10) if free_set.is_free(v)] == [1, 2, 3, 7]
    assert 7 in free_set
    assert 8 not in free_set


def test_peek_and_remove_last(free_set):
    free_set.mark_free(Range(1, 3))
    free_set.mark_free(Range(7, 8))
    assert free_set.peek_last() == Range(7, 8)
    assert free_set.remove_last() == Range(7, 8)
    assert free_set.peek_last() == Range(1, 3)
    free_set.remove_last()
    with pytest.raises(IndexError):
        free_set.remove_last()


def test_iter_from(free_set):
    free_set.mark_free(Range(1, 3))
    free_set.mark_free(Range(6, 7))
    free_set.mark_free(Range(10, 10))
    assert list(free_set.iter_from(0)) == [Range(1, 3), Range(6, 7), Range(10, 10)]
    assert list(free_set.iter_from(2)) == [Range(1, 3), Range(6, 7), Range(10, 10)]
    assert list(free_set.iter_from(4)) == [Range(6, 7), Range(10, 10)]
    assert list(free_set.iter_from(7)) == [Range(6, 7), Range(10, 10)]
    assert list(free_set.iter_from(11)) == []


def test_clear(free_set):
    free_set.mark_free(Range(1, 3))
    free_set.clear()
    assert len(free_set) == 0
    assert not free_set.is_free(2)


def test_mutation_during_iteration(free_set):
    free_set.mark_free(Range(1, 1))
    free_set.mark_free(Range(3, 3))
    it = free_set.iter()
    assert next(it) == Range(1, 1)
    free_set.mark_free(Range(5, 5))
    with pytest.raises(RuntimeError):
        next(it)


def test_mutation_before_first_step(free_set):
    free_set.mark_free(Range(1, 1))
    it = free_set.iter()
    free_set.take_lowest()
    with pytest.raises(RuntimeError):
        next(it)


def test_repr(free_set):
    free_set.mark_free(Range(1, 3))
    assert repr(free_set) == "FreeSet([Range(1, 3)])"
