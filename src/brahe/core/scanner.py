"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/scanner.py
Directory listing and the pieces every tree walker shares.
Features:
- Lists immediate entries only; recursion is left to the walkers
- Keeps the order the filesystem returns, no sorting
- Symlinks are never treated as directories
- Applies the configured ignore rules (system artifacts, hash database)
"""

import logging
import os
from typing import Callable, List, Optional

from brahe.core.errors import ListingError
from brahe.core.models import Configuration, DirectoryEntry
from brahe.core.progress import ProgressTracker

logger = logging.getLogger(__name__)

Reporter = Callable[[str], None]


def list_directory(path: str) -> List[DirectoryEntry]:
    """
    Lists the immediate entries of one directory.

    Raises:
        ListingError: If the directory cannot be read
    """
    try:
        with os.scandir(path) as it:
            entries = [DirectoryEntry(name=e.name, is_dir=e.is_dir(follow_symlinks=False)) for e in it]
    except OSError as e:
        raise ListingError(f"Failed to list directory: {path} - {e}") from e

    logger.debug(f"Listed {len(entries)} entries in {path}")
    return entries


class TreeWalkerBase:
    """
    Base class for the comparator, database walkers and dedupe engine.
    Holds the run configuration, the shared progress tracker and where
    discrepancies get reported.
    """

    def __init__(
        self,
        config: Configuration,
        tracker: ProgressTracker,
        reporter: Optional[Reporter] = None
    ):
        self.config = config
        self.tracker = tracker
        self._reporter = reporter

    def report(self, message: str) -> None:
        """Sends a discrepancy to the operator's console (or the log when headless)."""
        if self._reporter:
            self._reporter(message)
        else:
            logger.info(message)

    def is_ignored(self, full_path: str, entry: DirectoryEntry) -> bool:
        """
        Directories are ignored by absolute path, files by name.
        """
        if entry.is_dir:
            return full_path in self.config.ignored_dir_paths
        return entry.name in self.config.ignored_file_names

    def skip_ignored(self, full_path: str, chunk: float) -> None:
        """Counts an ignored entry and consumes its share of progress."""
        logger.debug(f"Ignoring {full_path}")
        self.tracker.increment("ignored")
        self.tracker.add_progress(chunk)

    @staticmethod
    def descend_depth(depth: int) -> Optional[int]:
        """
        Depth to pass to a child directory, or None when the limit is reached.
        -1 means unlimited and never reaches 0.
        """
        if depth == 0:
            return None
        return depth - 1
