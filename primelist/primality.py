"""Primality Evaluator (plain trial division)."""


def is_prime(n: int) -> bool:
    """
    Return True iff n is prime.

    Tests every divisor in [2, n) and stops at the first hit. No square-root
    bound and no sieve: cost is O(n) per number.
    """
    if n <= 1:
        return False
    for divisor in range(2, n):      # empty range for 2, so it falls through
        if n % divisor == 0:
            return False
    return True
