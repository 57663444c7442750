"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/gaps.py
Finds which numbers of a file name sequence are absent from directories.
"""

import logging
import os
from typing import Dict, List

from brahe.core.models import GapPattern
from brahe.core.progress import split_progress
from brahe.core.scanner import TreeWalkerBase, list_directory

logger = logging.getLogger(__name__)


class GapFinderImpl(TreeWalkerBase):
    """Checks each directory independently against the configured pattern."""

    def find_gaps(self, budget: float, dir_paths: List[str]) -> Dict[str, List[str]]:
        """
        Progress is split across the entries of all directories combined, with
        the remainder added once at the end.

        Returns:
            Missing names per directory, in ascending sequence order
        """
        pattern: GapPattern = self.config.gap_pattern
        listings = [(dir_path, list_directory(dir_path)) for dir_path in dir_paths]
        total_entries = sum(len(entries) for _, entries in listings)
        chunk, extra = split_progress(budget, total_entries)

        gaps: Dict[str, List[str]] = {}
        for dir_path, entries in listings:
            found = {name: False for name in pattern.expected_names()}
            self.tracker.set_current_path(dir_path)

            for entry in entries:
                if not entry.is_dir and entry.name in found and not found[entry.name]:
                    found[entry.name] = True
                    self.tracker.increment("matched")
                self.tracker.add_progress(chunk)

            missing = [name for name, was_found in found.items() if not was_found]
            for name in missing:
                self.report(f"Missing: {os.path.join(dir_path, name)}")
                self.tracker.increment("missing")

            logger.debug(f"{dir_path}: {len(found) - len(missing)} found, {len(missing)} missing")
            gaps[dir_path] = missing

        self.tracker.add_progress(extra)
        self.tracker.set_current_path("")
        return gaps
