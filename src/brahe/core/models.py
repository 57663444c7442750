"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models shared by the comparator, the hash database, the dedupe engine and
the gap finder.
"""

import os
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set

from brahe.core.errors import GapPatternError


DATABASE_DIR_NAME = "BraheDB"

SYSTEM_DIR_NAMES = ("$RECYCLE.BIN", "$Recycle.Bin", "System Volume Information", "found.000")
SYSTEM_FILE_NAMES = ("Thumbs.db",)


# =============================
# Enums
# =============================

class Mode(Enum):
    """Which engine a run dispatches to."""
    COMPARE = "compare"
    BUILD_DATABASE = "build-db"
    CHECK_DATABASE = "check-db"
    DEDUPE = "delete-dupes"
    FIND_GAPS = "find-gaps"

    @property
    def display_name(self) -> str:
        """Human-readable name for console output."""
        mapping = {
            Mode.COMPARE: "Compare trees",
            Mode.BUILD_DATABASE: "Build hash database",
            Mode.CHECK_DATABASE: "Check against hash database",
            Mode.DEDUPE: "Delete duplicates",
            Mode.FIND_GAPS: "Find sequence gaps",
        }
        return mapping.get(self, self.value)

    @property
    def min_entries(self) -> int:
        """Number of directory arguments the mode needs."""
        if self in (Mode.DEDUPE, Mode.FIND_GAPS):
            return 1
        return 2

    def __repr__(self) -> str:
        return self.value


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of a listed directory."""
    name: str
    is_dir: bool


@dataclass(frozen=True)
class DigestResult:
    """Digest of one file plus how fast it was read."""
    path: str
    digest: bytes
    mb_per_sec: float

    @property
    def hex(self) -> str:
        return self.digest.hex()


@dataclass(frozen=True)
class ProgressState:
    """
    Point-in-time copy of the progress tracker.
    percent_complete runs from 0 to 100 over a whole invocation.
    """
    percent_complete: float = 0.0
    current_path: str = ""
    matched: int = 0
    mismatched: int = 0
    missing: int = 0
    ignored: int = 0
    copied: int = 0


_GAP_RANGE_RE = re.compile(r"^(\d+):(\d+)-(\d+)$")


@dataclass(frozen=True)
class GapPattern:
    """
    Numbered file name pattern, e.g. 'IMG_/4:14-155/.JPG' describes
    IMG_0014.JPG .. IMG_0155.JPG (inclusive).
    """
    prefix: str
    suffix: str
    width: int
    begin: int
    end: int

    @classmethod
    def parse(cls, pattern: str) -> "GapPattern":
        """
        Parse PREFIX/WIDTH:BEGIN-END/SUFFIX.

        Raises:
            GapPatternError: If there are not exactly two slashes or the range is malformed
        """
        pieces = pattern.split("/")
        if len(pieces) != 3:
            raise GapPatternError(f"Expected two forward slashes in gap pattern: '{pattern}'")

        match = _GAP_RANGE_RE.match(pieces[1].strip())
        if not match:
            raise GapPatternError(
                f"Failed to extract gap range from '{pieces[1]}'. Expected WIDTH:BEGIN-END, e.g. 4:14-155"
            )

        width, begin, end = (int(group) for group in match.groups())
        if begin > end:
            raise GapPatternError(f"Gap range begins after it ends: {begin}-{end}")

        return cls(prefix=pieces[0], suffix=pieces[2], width=width, begin=begin, end=end)

    def format_name(self, number: int) -> str:
        return f"{self.prefix}{str(number).zfill(self.width)}{self.suffix}"

    def expected_names(self) -> List[str]:
        """All names in the range, in ascending numeric order."""
        return [self.format_name(n) for n in range(self.begin, self.end + 1)]


def default_ignored_dir_paths(entries: List[str]) -> Set[str]:
    """System artifact directories directly under each configured root."""
    return {os.path.join(entry, name) for entry in entries for name in SYSTEM_DIR_NAMES}


def database_dir_paths(entries: List[str]) -> Set[str]:
    """Hash database directories directly under each configured root."""
    return {os.path.join(entry, DATABASE_DIR_NAME) for entry in entries}


@dataclass
class Configuration:
    """
    Everything one run needs, resolved from the command line.
    Built once and treated as read-only afterwards.
    """
    entries: List[str]
    mode: Mode = Mode.COMPARE
    depth: int = -1
    compare_contents: bool = True
    include_system_names: bool = False
    ignored_dir_paths: Optional[Set[str]] = None
    ignored_file_names: Optional[Set[str]] = None
    gap_pattern: Optional[GapPattern] = None
    copy_destination: Optional[str] = None
    use_trash: bool = False

    def __post_init__(self):
        """Validate the combination of options and fill in ignore defaults."""
        if not self.entries:
            raise ValueError("At least one directory is required")

        if len(self.entries) < self.mode.min_entries:
            raise ValueError(
                f"Expected at least {self.mode.min_entries} directories, got {len(self.entries)}"
            )

        if self.depth < -1:
            raise ValueError("Depth must be -1 (unlimited) or a non-negative integer")

        if not self.compare_contents and self.mode in (Mode.BUILD_DATABASE, Mode.CHECK_DATABASE):
            raise ValueError(
                "Can't deal with the hash database without looking at file contents! Check your options."
            )

        if self.mode is Mode.FIND_GAPS and self.gap_pattern is None:
            raise ValueError("Gap finding requires a gap pattern")

        if self.copy_destination and self.mode is not Mode.CHECK_DATABASE:
            raise ValueError("A copy destination can only be used when checking the hash database")

        if self.use_trash and self.mode is not Mode.DEDUPE:
            raise ValueError("Moving to trash only applies when deleting duplicates")

        if self.ignored_dir_paths is None:
            self.ignored_dir_paths = set() if self.include_system_names else default_ignored_dir_paths(self.entries)
            self.ignored_dir_paths |= database_dir_paths(self.entries)

        if self.ignored_file_names is None:
            self.ignored_file_names = set() if self.include_system_names else set(SYSTEM_FILE_NAMES)

    @property
    def source(self) -> str:
        return self.entries[0]

    @property
    def targets(self) -> List[str]:
        return self.entries[1:]
