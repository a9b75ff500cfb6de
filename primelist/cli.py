"""
Console entry points.

    primelist-threads LIST_FILE            shared-memory engine (thread pool)
    mpiexec -n 4 primelist-mpi LIST_FILE   distributed engine (MPI ranks)

Both read the list, check every element, write "primes_found=K(tag)" plus
the primes to the output file and return a distinct exit code per failure
category (see primelist.errors).
"""

from __future__ import annotations

import argparse
import logging
import os
import time
from contextlib import ExitStack, suppress
from typing import Optional, Sequence

from primelist.config import apply_overrides, load_settings
from primelist.context import MERGE_POLICIES, MPIContext, ThreadContext
from primelist.errors import EXIT_OK, AggregationError, ArgumentError, ParserExit, PrimeListError
from primelist.listfile import load_list, open_output, write_result
from primelist.mpi_engine import run_distributed
from primelist.results import GlobalResult
from primelist.thread_engine import run_shared

logger = logging.getLogger(__name__)

USAGE_HINT = (
    "Program needs exactly one argument - filename of list "
    "containing positive integer numbers!"
)


class ListArgumentParser(argparse.ArgumentParser):
    """argparse that raises instead of calling sys.exit (usage errors and --help)."""

    def __init__(self, *args, usage_hint: str = USAGE_HINT, **kwargs):
        super().__init__(*args, **kwargs)
        self.usage_hint = usage_hint

    def error(self, message):
        raise ArgumentError(f"{self.usage_hint} ({message})")

    def exit(self, status=0, message=None):
        raise ParserExit(message or "", status)


def build_parser(prog: str, description: str, threads: bool = False) -> ListArgumentParser:
    parser = ListArgumentParser(prog=prog, description=description)
    parser.add_argument("list_file", help="list file starting with a list_len=N line")
    parser.add_argument("--output", default=None, help="result file (default: prime_list.txt)")
    parser.add_argument("--config", default=None, help="INI file with a [primelist] section")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    if threads:
        parser.add_argument("--threads", type=int, default=None, help="worker threads (default: 4)")
        parser.add_argument("--chunk", type=int, default=None,
                            help="indices claimed per request (default: 1)")
        parser.add_argument("--merge", choices=MERGE_POLICIES, default=None,
                            help="how threads combine results (default: local)")
    return parser


def discard_output(path: str) -> None:
    """Remove an output file that was opened but never written."""
    with suppress(FileNotFoundError):
        os.remove(path)


def setup_logging(verbose: bool, rank: Optional[int] = None) -> None:
    prefix = "" if rank is None else f"[rank {rank}] "
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=f"{prefix}%(levelname)s %(name)s: %(message)s",
    )


# ----------------------------------------------------------
# Console report
# ----------------------------------------------------------
def print_banner(title: str) -> None:
    print(f" {title} ".center(62, "-"))
    print("Finds all the primes in the large list of positive integers\n")


def print_report(result: GlobalResult, elapsed: float) -> None:
    print(f"Elapsed: {elapsed:.6f} s")
    print(f"{result.count} primes found...")
    print("Done...")


# ----------------------------------------------------------
# Shared-memory entry point
# ----------------------------------------------------------
def main_threads(argv: Optional[Sequence[str]] = None) -> int:
    """Run the thread-pool engine; returns the process exit code."""
    print_banner("Threads")
    parser = build_parser("primelist-threads", "Find primes with a shared-memory thread pool", threads=True)

    try:
        args = parser.parse_args(argv)
        setup_logging(args.verbose)
        settings = apply_overrides(
            load_settings(args.config),
            output=args.output, threads=args.threads, chunk=args.chunk, merge=args.merge,
        )
        ctx = ThreadContext(threads=settings.threads, chunk=settings.chunk, merge=settings.merge)

        values = load_list(args.list_file)
        print(f"Loading list of {len(values)} integer numbers...")

        # Output is opened before the parallel phase so a bad path aborts early
        with open_output(settings.output) as handle:
            start = time.perf_counter()
            result = run_shared(ctx, values)
            elapsed = time.perf_counter() - start
            write_result(handle, result)
    except PrimeListError as exc:
        if isinstance(exc, AggregationError):
            discard_output(settings.output)
        if str(exc):
            print(exc)
        return exc.exit_code

    print_report(result, elapsed)
    return EXIT_OK


# ----------------------------------------------------------
# Distributed entry point
# ----------------------------------------------------------
def main_mpi(argv: Optional[Sequence[str]] = None, ctx: Optional[MPIContext] = None) -> int:
    """
    Run the MPI engine on this rank; returns the process exit code.

    Only root parses arguments and touches files. Root broadcasts the start-up
    status so that every rank stops with the same code when root fails or
    only printed --help.
    """
    if ctx is None:
        ctx = MPIContext.world()
    comm = ctx.comm

    status, stop, verbose = EXIT_OK, False, False
    values = None
    handle = None
    settings = None

    try:
        with ExitStack() as stack:
            if ctx.is_root:
                print_banner("MPI")
                try:
                    args = build_parser("primelist-mpi", "Find primes with MPI ranks").parse_args(argv)
                    verbose = args.verbose
                    settings = apply_overrides(load_settings(args.config), output=args.output)

                    values = load_list(args.list_file)
                    print(f"Loading list of {len(values)} integer numbers...")
                    handle = stack.enter_context(open_output(settings.output))
                except PrimeListError as exc:
                    if str(exc):
                        print(exc)
                    status, stop = exc.exit_code, True

            status, stop, verbose = comm.bcast((status, stop, verbose), root=ctx.root)
            if stop:
                return status
            setup_logging(verbose, ctx.rank)

            start = time.perf_counter()
            result = run_distributed(ctx, values)
            elapsed = time.perf_counter() - start

            if not ctx.is_root:
                return EXIT_OK
            write_result(handle, result)
    except PrimeListError as exc:
        # Only root holds files and merges, so only root can get here
        if isinstance(exc, AggregationError):
            discard_output(settings.output)
        print(exc)
        return exc.exit_code

    logger.debug("%d ranks finished", ctx.size)
    print_report(result, elapsed)
    return EXIT_OK
