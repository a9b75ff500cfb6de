"""
Partial and global results, plus the Aggregator that merges them.

LocalResult   - what one worker produces for its share of the list
GlobalResult  - the merged answer handed to the writer (root only)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from primelist.errors import AggregationError

logger = logging.getLogger(__name__)

# Marks a composite in a sentinel-patched chunk (list entries are never negative)
SENTINEL = -1

# Engine tags written in the output header
ENGINE_MPI = "mpi"
ENGINE_THREADS = "threads"


@dataclass
class LocalResult:
    """
    Result of one worker.

    Distributed workers fill `values` (their chunk with composites replaced
    by SENTINEL); shared-memory workers fill `positions` (global indices of
    the primes they found).
    """

    count: int = 0
    values: List[int] = field(default_factory=list)
    positions: List[int] = field(default_factory=list)


@dataclass
class GlobalResult:
    """Total prime count and the retained primes in original list order."""

    count: int
    primes: List[int]
    engine: str


# ----------------------------------------------------------
# Distributed merge: reduced count + gathered chunks
# ----------------------------------------------------------
def merge_gathered(count: int, chunks: Iterable[Sequence[int]], engine: str = ENGINE_MPI) -> GlobalResult:
    """
    Concatenate gathered chunks in rank order and drop the sentinels.

    `count` is the value the reduce collective produced; it has to agree with
    the number of non-sentinel values that came back.
    """
    primes = [value for chunk in chunks for value in chunk if value != SENTINEL]
    if len(primes) != count:
        raise AggregationError(
            f"reduced count {count} does not match {len(primes)} gathered primes"
        )
    return GlobalResult(count=count, primes=primes, engine=engine)


# ----------------------------------------------------------
# Shared-memory merge: per-thread results over one list
# ----------------------------------------------------------
def merge_positions(values: Sequence[int], partials: Iterable[LocalResult], engine: str = ENGINE_THREADS) -> GlobalResult:
    """
    Merge per-thread results once, after the pool has finished.

    Threads claim indices dynamically, so each thread's positions are
    scattered over the list; sorting them restores the original order.
    """
    total = 0
    positions: List[int] = []
    for local in partials:
        total += local.count
        positions.extend(local.positions)

    if len(positions) != total:
        raise AggregationError(
            f"summed count {total} does not match {len(positions)} flagged positions"
        )
    if len(set(positions)) != len(positions):
        raise AggregationError("an index was evaluated by more than one thread")

    positions.sort()
    logger.debug("merged %d primes from shared-memory workers", total)
    return GlobalResult(count=total, primes=[values[i] for i in positions], engine=engine)
