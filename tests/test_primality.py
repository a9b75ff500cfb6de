import pytest

from primelist.primality import is_prime


@pytest.mark.parametrize("n", [2, 3, 5, 7, 11, 13, 97, 7919])
def test_primes(n):
    assert is_prime(n)


@pytest.mark.parametrize("n", [0, 1, 4, 6, 8, 9, 10, 25, 7917])
def test_composites_and_edge_values(n):
    assert not is_prime(n)


def test_negative_numbers_are_not_prime():
    assert not is_prime(-7)


def test_matches_slow_definition():
    primes = [n for n in range(200) if is_prime(n)]
    expected = [n for n in range(2, 200) if all(n % d for d in range(2, n))]
    assert primes == expected
