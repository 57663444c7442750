"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Fatal error types. Anything raised from here aborts the whole run: the CLI prints
a single diagnostic line and exits with a non-zero status. Discrepancies found
while comparing (missing entries, wrong hashes, gaps) are never raised.
"""


class BraheError(RuntimeError):
    """Base class for every unrecoverable condition."""


class ListingError(BraheError):
    """A directory could not be listed."""


class HashingError(BraheError):
    """A file could not be opened or read while computing its digest."""


class DatabaseError(BraheError):
    """The hash database is missing, malformed, or could not be written."""


class FileOperationError(BraheError):
    """Copy, delete, trash or mkdir failed."""


class GapPatternError(BraheError, ValueError):
    """The --find-gaps pattern could not be parsed."""
