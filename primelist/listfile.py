"""
Loader and Writer for the plain-text list files.

Input format:
    list_len=<N>
    <integer>        (exactly N lines, decimal, non-negative)

Output format:
    primes_found=<count>(<engine-tag>)
    <prime>          (one per line, in original list order)
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import IO, Iterable, Iterator, List

from primelist.errors import (
    EXIT_ENTRY,
    EXIT_HEADER,
    EXIT_INPUT_CLOSE,
    EXIT_INPUT_OPEN,
    EXIT_LENGTH,
    EXIT_OUTPUT_CLOSE,
    EXIT_OUTPUT_OPEN,
    FileError,
    ParseError,
)
from primelist.results import GlobalResult

logger = logging.getLogger(__name__)

HEADER_PREFIX = "list_len="
RESULT_HEADER = "primes_found={count}({engine})\n"


def _is_number(text: str) -> bool:
    """Decimal digits only (no sign, no spaces, no empty string)."""
    return text.isascii() and text.isdigit()


@contextmanager
def _scoped_file(path: str, mode: str, open_code: int, close_code: int) -> Iterator[IO[str]]:
    """Open `path`, always close it, and map both failures to FileError."""
    try:
        handle = open(path, mode, encoding="ascii", errors="replace")
    except OSError as exc:
        verb = "open" if "r" in mode else "open/create"
        raise FileError(f'Couldn\'t {verb} "{path}" file ({exc.strerror})', open_code) from exc
    try:
        yield handle
    finally:
        try:
            handle.close()
        except OSError as exc:
            raise FileError(f'Couldn\'t close "{path}" file ({exc.strerror})', close_code) from exc


# ----------------------------------------------------------
# Loader
# ----------------------------------------------------------
def parse_header(line: str) -> int:
    """Return N from a "list_len=N" line."""
    text = line.rstrip("\r\n")
    if not text.startswith(HEADER_PREFIX) or len(text) == len(HEADER_PREFIX):
        raise ParseError(
            f'Error in the first line - "{text}" not matching "list_len=X" pattern!', EXIT_HEADER
        )
    value = text[len(HEADER_PREFIX):]
    if not _is_number(value):
        raise ParseError(
            f'Error in the first line - "{value}" is not a correct list length value', EXIT_LENGTH
        )
    return int(value)


def parse_list(lines: Iterable[str]) -> List[int]:
    """
    Parse a whole list file given as an iterable of lines.

    Reads the header and then exactly N entries; anything after the N-th
    entry is ignored. A missing or non-numeric entry is a ParseError.
    """
    it = iter(lines)
    first = next(it, None)
    if first is None:
        raise ParseError('Error in the first line - empty file, expected "list_len=X"', EXIT_HEADER)
    total = parse_header(first)

    values: List[int] = []
    for lineno in range(2, total + 2):
        line = next(it, None)
        if line is None:
            raise ParseError(
                f"List ends after {len(values)} of {total} declared integers", EXIT_ENTRY
            )
        text = line.rstrip("\r\n")
        if not _is_number(text):
            raise ParseError(f'Line {lineno}: "{text}" is not a positive integer', EXIT_ENTRY)
        values.append(int(text))
    return values


def load_list(path: str) -> List[int]:
    """Read and parse the list file at `path`."""
    with _scoped_file(path, "r", EXIT_INPUT_OPEN, EXIT_INPUT_CLOSE) as handle:
        values = parse_list(handle)
    logger.info("loaded %d integers from %s", len(values), path)
    return values


# ----------------------------------------------------------
# Writer
# ----------------------------------------------------------
def open_output(path: str):
    """Scoped output handle; open and close failures become FileError."""
    return _scoped_file(path, "w", EXIT_OUTPUT_OPEN, EXIT_OUTPUT_CLOSE)


def write_result(handle: IO[str], result: GlobalResult) -> None:
    """Write the header line and the retained primes."""
    handle.write(RESULT_HEADER.format(count=result.count, engine=result.engine))
    for value in result.primes:
        handle.write(f"{value}\n")


def save_result(path: str, result: GlobalResult) -> None:
    with open_output(path) as handle:
        write_result(handle, result)


def save_list(path: str, values: List[int]) -> None:
    """Write an input-format list file (used by the generator)."""
    with open_output(path) as handle:
        handle.write(f"{HEADER_PREFIX}{len(values)}\n")
        for value in values:
            handle.write(f"{value}\n")
