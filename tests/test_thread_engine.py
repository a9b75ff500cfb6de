import random
import threading

import pytest

from primelist.context import ThreadContext
from primelist.errors import ArgumentError
from primelist.primality import is_prime
from primelist.thread_engine import WorkCursor, run_shared


@pytest.mark.parametrize("merge", ["local", "critical"])
def test_six_values_two_threads(merge):
    result = run_shared(ThreadContext(threads=2, merge=merge), [2, 3, 4, 5, 6, 7])
    assert result.count == 4
    assert result.primes == [2, 3, 5, 7]
    assert result.engine == "threads"


@pytest.mark.parametrize("merge", ["local", "critical"])
@pytest.mark.parametrize("threads", [1, 2, 3, 8])
@pytest.mark.parametrize("chunk", [1, 4])
def test_result_does_not_depend_on_pool_shape(threads, chunk, merge):
    rng = random.Random(99)
    values = [rng.randint(1, 2000) for _ in range(150)]
    expected = [v for v in values if is_prime(v)]

    result = run_shared(ThreadContext(threads=threads, chunk=chunk, merge=merge), values)
    assert result.count == len(expected)
    assert result.primes == expected


def test_empty_list():
    result = run_shared(ThreadContext(threads=4), [])
    assert result.count == 0
    assert result.primes == []


def test_cursor_hands_out_each_index_once():
    cursor = WorkCursor(103, chunk=5)
    claimed = []
    lock = threading.Lock()

    def drain():
        block = cursor.claim()
        while block is not None:
            with lock:
                claimed.extend(block)
            block = cursor.claim()

    workers = [threading.Thread(target=drain) for _ in range(6)]
    for w in workers:
        w.start()
    for w in workers:
        w.join()

    assert sorted(claimed) == list(range(103))


def test_cursor_last_block_is_short():
    cursor = WorkCursor(5, chunk=3)
    assert cursor.claim() == range(0, 3)
    assert cursor.claim() == range(3, 5)
    assert cursor.claim() is None


@pytest.mark.parametrize("kwargs", [{"threads": 0}, {"chunk": 0}, {"merge": "atomic"}])
def test_invalid_context(kwargs):
    with pytest.raises(ArgumentError):
        ThreadContext(**kwargs)
