"""
Execution contexts passed explicitly into the engines.

MPIContext    - communicator, rank, group size and the reduce operation
ThreadContext - pool size, dynamic-scheduling chunk and merge policy
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from primelist.errors import ArgumentError

MERGE_LOCAL = "local"        # per-thread accumulation, merged once at the end
MERGE_CRITICAL = "critical"  # one shared counter + list behind a lock
MERGE_POLICIES = (MERGE_LOCAL, MERGE_CRITICAL)


@dataclass
class MPIContext:
    """
    One process' view of the process group.

    `comm` only needs mpi4py's lower-case collective API (bcast, scatter,
    reduce, gather, barrier, Get_rank, Get_size).
    """

    comm: Any
    reduce_op: Any
    root: int = 0

    @classmethod
    def world(cls) -> "MPIContext":
        """Context over MPI.COMM_WORLD, the group fixed at launch."""
        # Importing mpi4py.MPI initialises MPI, so only the MPI entry point does it
        from mpi4py import MPI

        return cls(comm=MPI.COMM_WORLD, reduce_op=MPI.SUM)

    @property
    def rank(self) -> int:
        return self.comm.Get_rank()

    @property
    def size(self) -> int:
        return self.comm.Get_size()

    @property
    def is_root(self) -> bool:
        return self.rank == self.root


@dataclass
class ThreadContext:
    """Fixed-size pool settings for the shared-memory engine."""

    threads: int = 4
    chunk: int = 1
    merge: str = MERGE_LOCAL

    def __post_init__(self):
        if self.threads <= 0:
            raise ArgumentError(f"thread count must be positive, got {self.threads}")
        if self.chunk <= 0:
            raise ArgumentError(f"chunk size must be positive, got {self.chunk}")
        if self.merge not in MERGE_POLICIES:
            raise ArgumentError(
                f"unknown merge policy {self.merge!r}, expected one of {', '.join(MERGE_POLICIES)}"
            )
