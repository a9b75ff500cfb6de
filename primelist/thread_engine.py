"""
Shared-memory engine (thread pool over one list).

Indices are handed out dynamically: a free thread pulls the next `chunk`
unclaimed indices from a shared cursor, like OpenMP's schedule(dynamic).
Nothing is pre-split, so no Partition objects exist here.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence

from primelist.context import MERGE_CRITICAL, ThreadContext
from primelist.primality import is_prime
from primelist.results import ENGINE_THREADS, GlobalResult, LocalResult, merge_positions

logger = logging.getLogger(__name__)


class WorkCursor:
    """Lock-guarded cursor over [0, total); each claim returns the next block."""

    def __init__(self, total: int, chunk: int = 1):
        self._total = total
        self._chunk = chunk
        self._next = 0
        self._lock = threading.Lock()

    def claim(self) -> Optional[range]:
        """Next unclaimed block of indices, or None once the list is exhausted."""
        with self._lock:
            start = self._next
            if start >= self._total:
                return None
            self._next = min(start + self._chunk, self._total)
            return range(start, self._next)


class SharedTally:
    """Counter and output list updated together inside one critical section."""

    def __init__(self):
        self.result = LocalResult()
        self._lock = threading.Lock()

    def record(self, index: int) -> None:
        with self._lock:
            self.result.count += 1
            self.result.positions.append(index)


def _worker_local(values: Sequence[int], cursor: WorkCursor) -> LocalResult:
    # Own accumulator, no locking except the claim itself
    local = LocalResult()
    block = cursor.claim()
    while block is not None:
        for i in block:
            if is_prime(values[i]):
                local.count += 1
                local.positions.append(i)
        block = cursor.claim()
    return local


def _worker_critical(values: Sequence[int], cursor: WorkCursor, tally: SharedTally) -> int:
    checked = 0
    block = cursor.claim()
    while block is not None:
        for i in block:
            checked += 1
            if is_prime(values[i]):
                tally.record(i)
        block = cursor.claim()
    return checked


def run_shared(ctx: ThreadContext, values: Sequence[int]) -> GlobalResult:
    """
    Check every element of `values` with a pool of ctx.threads threads.

    With merge="local" each thread keeps its own LocalResult and the results
    are merged once after the pool joins. With merge="critical" all threads
    update one shared tally under a lock.
    """
    cursor = WorkCursor(len(values), ctx.chunk)
    logger.debug(
        "checking %d items with %d threads (chunk=%d, merge=%s)",
        len(values), ctx.threads, ctx.chunk, ctx.merge,
    )

    with ThreadPoolExecutor(max_workers=ctx.threads, thread_name_prefix="primelist") as pool:
        if ctx.merge == MERGE_CRITICAL:
            tally = SharedTally()
            futures = [pool.submit(_worker_critical, values, cursor, tally) for _ in range(ctx.threads)]
            checked = [f.result() for f in futures]
            logger.debug("items checked per thread: %s", checked)
            partials: List[LocalResult] = [tally.result]
        else:
            futures = [pool.submit(_worker_local, values, cursor) for _ in range(ctx.threads)]
            partials = [f.result() for f in futures]
            logger.debug("primes per thread: %s", [p.count for p in partials])

    return merge_positions(values, partials, engine=ENGINE_THREADS)
