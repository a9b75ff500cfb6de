"""
Error taxonomy and process exit codes.

Every error here is detected before the parallel phase starts and aborts
the whole run. The CLI turns them into a message plus a distinct exit code.
"""

from typing import Optional

# ----------------------------------------------------------
# Exit codes (one per failure category)
# ----------------------------------------------------------
EXIT_OK = 0
EXIT_ARGUMENTS = 1       # wrong argument count / bad option value
EXIT_INPUT_OPEN = 2      # input list file cannot be opened
EXIT_HEADER = 3          # first line does not match "list_len=X"
EXIT_LENGTH = 4          # X in "list_len=X" is not a number
EXIT_OUTPUT_OPEN = 5     # output file cannot be opened/created
EXIT_INPUT_CLOSE = 6     # input list file close failed
EXIT_OUTPUT_CLOSE = 7    # output file close failed
EXIT_ENTRY = 8           # non-numeric list entry or list shorter than declared
EXIT_INTERNAL = 9        # partial results could not be merged consistently


class PrimeListError(Exception):
    """Base class for all categorised failures; carries the exit code."""

    exit_code = EXIT_ARGUMENTS

    def __init__(self, message: str, exit_code: Optional[int] = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ArgumentError(PrimeListError):
    """Wrong command-line arity or an invalid argument value."""

    exit_code = EXIT_ARGUMENTS


class ConfigError(ArgumentError):
    """A value in the config file cannot be used."""


class ParserExit(PrimeListError):
    """argparse stopped early (--help); carries argparse's own exit status."""

    exit_code = EXIT_OK


class FileError(PrimeListError):
    """Open or close failure on the input or output file."""

    exit_code = EXIT_INPUT_OPEN


class ParseError(PrimeListError):
    """Header pattern mismatch, non-numeric length or non-numeric element."""

    exit_code = EXIT_HEADER


class AggregationError(PrimeListError):
    """Merged partial results disagree with each other."""

    exit_code = EXIT_INTERNAL
