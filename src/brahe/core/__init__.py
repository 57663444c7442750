"""
Core comparison engine: listing, hashing, progress, and the tree walkers.

- TreeComparatorImpl: haystack comparison of a source tree against N targets
- HashDatabase + DatabaseBuilderImpl/DatabaseCheckerImpl: sharded content-addressed record
- DedupeEngineImpl: removes repeated content inside one tree
- GapFinderImpl: reports missing numbers in file name sequences
- ProgressTracker: lock-protected counters shared by all of the above

No console or CLI dependencies: suitable for use as a library.
"""

from .errors import (
    BraheError, ListingError, HashingError, DatabaseError, FileOperationError, GapPatternError)
from .models import (
    Configuration, DirectoryEntry, DigestResult, GapPattern, Mode, ProgressState, DATABASE_DIR_NAME)
from .progress import ProgressTracker, split_progress
from .hasher import hash_file, hash_files_concurrently
from .scanner import list_directory
from .comparer import TreeComparatorImpl
from .database import HashDatabase, DatabaseBuilderImpl, DatabaseCheckerImpl
from .dedupe import DedupeEngineImpl
from .gaps import GapFinderImpl

__all__ = [
    "BraheError",
    "ListingError",
    "HashingError",
    "DatabaseError",
    "FileOperationError",
    "GapPatternError",
    "Configuration",
    "DirectoryEntry",
    "DigestResult",
    "GapPattern",
    "Mode",
    "ProgressState",
    "DATABASE_DIR_NAME",
    "ProgressTracker",
    "split_progress",
    "hash_file",
    "hash_files_concurrently",
    "list_directory",
    "TreeComparatorImpl",
    "HashDatabase",
    "DatabaseBuilderImpl",
    "DatabaseCheckerImpl",
    "DedupeEngineImpl",
    "GapFinderImpl",
]
