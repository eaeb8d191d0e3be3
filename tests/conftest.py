import pytest

import index_pool


@pytest.fixture
def pool():
    return index_pool.IndexPool()


def _allocated(count):
    p = index_pool.IndexPool()
    for _ in range(count):
        p.new_id()
    return p


@pytest.fixture
def pool3():
    return _allocated(3)


@pytest.fixture
def pool5():
    return _allocated(5)


@pytest.fixture
def free_set():
    return index_pool.FreeSet()
