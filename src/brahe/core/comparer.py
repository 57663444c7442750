"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/comparer.py
Recursive haystack comparison of one source tree against N target trees.

The source listing at each level is the complete list of things to check.
Targets may hold any number of extra entries; those are never reported.
For every source entry each target is judged independently:
  missing         -> reported, counted as "missing"
  wrong kind      -> reported, counted as "mismatched", excluded from further checks
  present         -> counted as "matched", then recursed into (directories) or
                     hashed alongside the source copy (files)
"""

import logging
import os
from typing import Dict, List

from brahe.core.hasher import average_throughput, hash_files_concurrently
from brahe.core.models import DirectoryEntry
from brahe.core.progress import split_progress
from brahe.core.scanner import TreeWalkerBase, list_directory

logger = logging.getLogger(__name__)


def _kind(is_dir: bool) -> str:
    return "directory" if is_dir else "file"


class TreeComparatorImpl(TreeWalkerBase):
    """Compares directory_paths[0] (source) against directory_paths[1:] (targets)."""

    def compare(self, budget: float, dir_paths: List[str], depth: int) -> None:
        """
        Compares one directory level and recurses into matching subdirectories.

        Args:
            budget: Share of the 0-100 progress scale this call must consume
            dir_paths: Source directory followed by the target directories
            depth: Remaining levels to descend (-1 = unlimited, 0 = this level only)

        Raises:
            ListingError: If any directory cannot be listed
            HashingError: If any file copy cannot be read
        """
        source_dir = dir_paths[0]
        source_entries = list_directory(source_dir)
        target_listings: List[Dict[str, bool]] = [
            {e.name: e.is_dir for e in list_directory(target_dir)}
            for target_dir in dir_paths[1:]
        ]

        chunk, extra = split_progress(budget, len(source_entries))

        for entry in source_entries:
            full_path = os.path.join(source_dir, entry.name)
            self.tracker.set_current_path(full_path)

            if self.is_ignored(full_path, entry):
                self.skip_ignored(full_path, chunk)
                continue

            candidates = self._locate_in_targets(entry, full_path, dir_paths, target_listings)

            if entry.is_dir:
                child_depth = self.descend_depth(depth)
                if len(candidates) > 1 and child_depth is not None:
                    self.compare(chunk, candidates, child_depth)
                else:
                    self.tracker.add_progress(chunk)
            else:
                if self.config.compare_contents and len(candidates) > 1:
                    self._compare_contents(candidates)
                self.tracker.add_progress(chunk)

        self.tracker.add_progress(extra)
        self.tracker.set_current_path("")

    def _locate_in_targets(
        self,
        entry: DirectoryEntry,
        full_path: str,
        dir_paths: List[str],
        target_listings: List[Dict[str, bool]]
    ) -> List[str]:
        """
        Searches every target listing for the source entry.

        Returns:
            The source path followed by each target path holding an entry of the same kind
        """
        candidates = [full_path]
        for target_dir, listing in zip(dir_paths[1:], target_listings):
            target_path = os.path.join(target_dir, entry.name)

            if entry.name not in listing:
                self.report(f"Missing: {target_path}")
                self.tracker.increment("missing")
                continue

            if listing[entry.name] != entry.is_dir:
                self.report(
                    f"Type mismatch: {target_path} is a {_kind(listing[entry.name])}, "
                    f"expected {_kind(entry.is_dir)}"
                )
                self.tracker.increment("mismatched")
                continue

            self.tracker.increment("matched")
            candidates.append(target_path)

        return candidates

    def _compare_contents(self, candidates: List[str]) -> None:
        """
        Hashes the source copy and every target copy concurrently, then checks
        each target digest against the source one. A wrong hash turns the
        tentative presence match into a mismatch.
        """
        results = hash_files_concurrently(candidates)
        expected = results[0]

        for result in results[1:]:
            if result.digest != expected.digest:
                self.report(
                    f"Hash wrong for file: {result.path} - Expected {expected.hex} - Got {result.hex}"
                )
                self.tracker.increment("matched", -1)
                self.tracker.increment("mismatched")

        logger.debug(f"Checked {average_throughput(results):.4f} MB/s {expected.hex} {expected.path}")
