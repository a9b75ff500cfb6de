"""
Random list generator.

Writes a list file in the loader's format with N random integers drawn
uniformly from [1, MAX_INT_NUMBER].

Usage: primelist-gen 100000 [--output list.txt] [--seed 42]
"""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from primelist.cli import ListArgumentParser
from primelist.errors import EXIT_OK, ArgumentError, PrimeListError
from primelist.listfile import save_list

MAX_INT_NUMBER = 10000
LIST_FILENAME = "list.txt"


def generate_list(count: int, rng: Optional[random.Random] = None, upper: int = MAX_INT_NUMBER) -> List[int]:
    """Return `count` random integers from [1, upper]."""
    if count < 0:
        raise ArgumentError(f"list length must not be negative, got {count}")
    if upper < 1:
        raise ArgumentError(f"upper bound must be at least 1, got {upper}")
    rng = rng or random.Random()
    return [rng.randint(1, upper) for _ in range(count)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, generate the list and write it."""
    parser = ListArgumentParser(
        prog="primelist-gen",
        description="Generate a list of random positive integers",
        usage_hint="Program needs exactly one argument - positive integer list length!",
    )
    parser.add_argument("count", help="number of integers to generate")
    parser.add_argument("--output", default=LIST_FILENAME, help=f"list file to write (default: {LIST_FILENAME})")
    parser.add_argument("--seed", type=int, default=None, help="seed for reproducible lists")
    parser.add_argument("--max", dest="upper", type=int, default=MAX_INT_NUMBER,
                        help=f"largest value to draw (default: {MAX_INT_NUMBER})")

    try:
        args = parser.parse_args(argv)
        if not (args.count.isascii() and args.count.isdigit()):
            raise ArgumentError(f"{args.count} is not a positive integer number")
        count = int(args.count)

        print(f"Generating list of {count} positive integers")
        values = generate_list(count, random.Random(args.seed), args.upper)
        save_list(args.output, values)
    except PrimeListError as exc:
        if str(exc):
            print(exc)
        return exc.exit_code

    print("Done...")
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
