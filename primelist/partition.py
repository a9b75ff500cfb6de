"""
Partitioner: split the index range [0, N) into one contiguous block per worker.

Fair block split: every worker gets N // W items and the first N % W workers
get one extra, so no element is ever dropped even when W does not divide N.
"""

from __future__ import annotations

from typing import List, NamedTuple, Sequence

from primelist.errors import ArgumentError


class Partition(NamedTuple):
    """Half-open index range [start, stop) owned by worker `index`."""

    index: int
    start: int
    stop: int

    def __len__(self) -> int:
        return self.stop - self.start

    def as_range(self) -> range:
        return range(self.start, self.stop)


def partition(total: int, workers: int) -> List[Partition]:
    """
    Divide `total` items among `workers` workers.

    Args:
        total:   number of items (N), must be >= 0
        workers: number of workers (W), must be >= 1

    Returns:
        W partitions in worker order, covering [0, total) exactly once.
        With W > N the trailing partitions are empty.
    """
    if workers <= 0:
        raise ArgumentError(f"worker count must be positive, got {workers}")
    if total < 0:
        raise ArgumentError(f"list length must not be negative, got {total}")

    base = total // workers          # items every worker gets
    remainder = total % workers      # first `remainder` workers get one more

    parts = []
    for idx in range(workers):
        start = idx * base + min(idx, remainder)
        stop = start + base + (1 if idx < remainder else 0)
        parts.append(Partition(idx, start, stop))
    return parts


def split(values: Sequence[int], parts: Sequence[Partition]) -> List[List[int]]:
    """Slice `values` into one list per partition (the scatter payload)."""
    return [list(values[p.start:p.stop]) for p in parts]
