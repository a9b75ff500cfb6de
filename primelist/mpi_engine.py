"""
Distributed-memory engine (MPI collectives).

Every rank calls run_distributed() with the same context. Flow:
  1) root broadcasts N to all ranks
  2) root splits [0, N) fairly and scatters one chunk per rank (root included)
  3) each rank checks its chunk in isolation, patching composites to SENTINEL
  4) reduce sums the local prime counts at root
  5) gather concatenates the patched chunks at root, in rank order
  6) barrier: nobody proceeds to teardown before everybody is done
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from primelist.context import MPIContext
from primelist.partition import partition, split
from primelist.primality import is_prime
from primelist.results import ENGINE_MPI, SENTINEL, GlobalResult, LocalResult, merge_gathered

logger = logging.getLogger(__name__)


def evaluate_chunk(chunk: Sequence[int]) -> LocalResult:
    """Check one rank's chunk; composites are overwritten with SENTINEL."""
    local = LocalResult(values=list(chunk))
    for i, value in enumerate(local.values):
        if is_prime(value):
            local.count += 1
        else:
            local.values[i] = SENTINEL
    return local


def run_distributed(ctx: MPIContext, values: Optional[Sequence[int]] = None) -> Optional[GlobalResult]:
    """
    Run the collective pipeline on this rank.

    Args:
        ctx:    MPI context of the calling rank
        values: the full IntegerList on root; ignored on other ranks

    Returns:
        GlobalResult on root, None on every other rank.
    """
    comm = ctx.comm
    rank = ctx.rank
    size = ctx.size

    # ---- Step 1: everybody learns N ----
    total = comm.bcast(len(values) if ctx.is_root else None, root=ctx.root)

    # ---- Step 2: fair block split, scattered from root ----
    chunks: Optional[List[List[int]]] = None
    if ctx.is_root:
        parts = partition(total, size)
        chunks = split(values, parts)
        logger.debug("scattering %d items over %d ranks: %s", total, size, [len(p) for p in parts])
    chunk = comm.scatter(chunks, root=ctx.root)

    # ---- Step 3: local compute, no communication ----
    local = evaluate_chunk(chunk)
    logger.debug("rank %d: %d of %d items prime", rank, local.count, len(chunk))

    # ---- Step 4 + 5: combine at root ----
    count = comm.reduce(local.count, op=ctx.reduce_op, root=ctx.root)
    gathered = comm.gather(local.values, root=ctx.root)

    # ---- Step 6: wait for all ranks ----
    comm.barrier()

    if not ctx.is_root:
        return None
    return merge_gathered(count, gathered, engine=ENGINE_MPI)
