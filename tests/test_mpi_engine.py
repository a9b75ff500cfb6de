import random

import pytest

from primelist.mpi_engine import evaluate_chunk, run_distributed
from primelist.primality import is_prime
from primelist.results import SENTINEL


def _run(ranks, size, values):
    return ranks(size, lambda ctx: run_distributed(ctx, values if ctx.is_root else None))


def test_evaluate_chunk_patches_composites():
    local = evaluate_chunk([4, 7, 10, 13])
    assert local.count == 2
    assert local.values == [SENTINEL, 7, SENTINEL, 13]


def test_only_root_gets_a_result(ranks):
    results = _run(ranks, 3, [2, 3, 4, 5, 6, 7])
    assert results[0] is not None
    assert results[1:] == [None, None]


def test_two_ranks_six_values(ranks):
    result = _run(ranks, 2, [2, 3, 4, 5, 6, 7])[0]
    assert result.count == 4
    assert result.primes == [2, 3, 5, 7]
    assert result.engine == "mpi"


def test_five_values_example(ranks):
    result = _run(ranks, 2, [4, 7, 10, 13, 9])[0]
    assert result.count == 2
    assert result.primes == [7, 13]


@pytest.mark.parametrize("size", [1, 2, 3, 4, 5])
def test_count_does_not_depend_on_rank_count(ranks, size):
    rng = random.Random(1234)
    values = [rng.randint(1, 500) for _ in range(37)]     # 37 is not divisible by 2..5
    expected = [v for v in values if is_prime(v)]

    result = _run(ranks, size, values)[0]
    assert result.count == len(expected)
    assert result.primes == expected


def test_trailing_remainder_is_not_dropped(ranks):
    # 7 items over 3 ranks: the last item would be lost by a plain N // W scatter
    result = _run(ranks, 3, [4, 6, 8, 9, 10, 12, 13])[0]
    assert result.primes == [13]


def test_empty_list(ranks):
    result = _run(ranks, 3, [])[0]
    assert result.count == 0
    assert result.primes == []


def test_more_ranks_than_items(ranks):
    result = _run(ranks, 4, [11])[0]
    assert result.primes == [11]
