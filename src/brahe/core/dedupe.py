"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/dedupe.py
Deletes files whose content was already seen earlier in the same walk.

The first occurrence in listing order survives. The set of seen digests is
owned by the caller and shared by reference across the whole recursion, so
duplicates in sibling subdirectories are found too.
"""

import logging
import os
from typing import Optional, Set

from brahe.core.hasher import hash_file
from brahe.core.models import Configuration
from brahe.core.progress import ProgressTracker, split_progress
from brahe.core.scanner import Reporter, TreeWalkerBase, list_directory
from brahe.services.file_service import FileService

logger = logging.getLogger(__name__)


class DedupeEngineImpl(TreeWalkerBase):
    """
    Counter usage: "matched" = duplicate removed, "mismatched" = first/unique occurrence.
    """

    def __init__(
        self,
        config: Configuration,
        tracker: ProgressTracker,
        reporter: Optional[Reporter] = None
    ):
        super().__init__(config, tracker, reporter)
        self._remove = FileService.move_to_trash if config.use_trash else FileService.delete_file

    def dedupe(self, budget: float, dir_path: str, depth: int, seen: Set[bytes]) -> None:
        """
        Args:
            budget: Share of the progress scale to consume
            dir_path: Directory to walk
            depth: Remaining levels to descend (-1 = unlimited)
            seen: Digests already encountered; updated in place

        Raises:
            ListingError, HashingError, FileOperationError
        """
        entries = list_directory(dir_path)
        chunk, extra = split_progress(budget, len(entries))

        for entry in entries:
            full_path = os.path.join(dir_path, entry.name)
            self.tracker.set_current_path(full_path)

            if self.is_ignored(full_path, entry):
                self.skip_ignored(full_path, chunk)
                continue

            if entry.is_dir:
                child_depth = self.descend_depth(depth)
                if child_depth is not None:
                    self.dedupe(chunk, full_path, child_depth, seen)
                else:
                    self.tracker.add_progress(chunk)
                continue

            digest = hash_file(full_path).digest
            if digest in seen:
                self._remove(full_path)
                self.report(f"Duplicate removed: {full_path}")
                self.tracker.increment("matched")
            else:
                seen.add(digest)
                self.tracker.increment("mismatched")
            self.tracker.add_progress(chunk)

        self.tracker.add_progress(extra)
        self.tracker.set_current_path("")
