"""
primelist - find the primes in a large list of positive integers.

Two execution models compute the same result:
  - mpi_engine:    separate processes exchanging data through MPI collectives
  - thread_engine: a thread pool sharing one list, with dynamic scheduling
"""

from primelist.errors import (
    PrimeListError,
    ArgumentError,
    ConfigError,
    FileError,
    ParseError,
    AggregationError,
)
from primelist.partition import Partition, partition, split
from primelist.primality import is_prime
from primelist.results import SENTINEL, LocalResult, GlobalResult

__version__ = "0.1.0"

__all__ = [
    "PrimeListError",
    "ArgumentError",
    "ConfigError",
    "FileError",
    "ParseError",
    "AggregationError",
    "Partition",
    "partition",
    "split",
    "is_prime",
    "SENTINEL",
    "LocalResult",
    "GlobalResult",
]
