"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/database.py
Sharded content-addressed record of files, and the two walks that use it.

Layout under a top-level directory:
    <top>/BraheDB/<first digest byte, 2 hex>/<remaining digest bytes, hex>
Each entry file lists, one per line, the absolute paths that produced the digest.
Entries are append-only and a path is never written twice.
"""

import logging
import os
from abc import ABC, abstractmethod
from typing import List, Optional

from brahe.core.errors import DatabaseError
from brahe.core.hasher import hash_file
from brahe.core.models import Configuration, DATABASE_DIR_NAME
from brahe.core.progress import ProgressTracker, split_progress
from brahe.core.scanner import Reporter, TreeWalkerBase, list_directory
from brahe.services.file_service import FileService

logger = logging.getLogger(__name__)


class HashDatabase:
    """Minimal content-addressable store rooted at one directory."""

    def __init__(self, root: str):
        self.root = root

    @classmethod
    def under(cls, top_dir: str) -> "HashDatabase":
        """Database stored directly under a configured top-level directory."""
        return cls(os.path.join(top_dir, DATABASE_DIR_NAME))

    def initialize(self) -> None:
        """
        Creates the storage directory. Safe to call when it already exists.

        Raises:
            DatabaseError: On any other I/O failure, or if the path is not a directory
        """
        try:
            os.mkdir(self.root)
            logger.debug(f"Created hash database at {self.root}")
        except FileExistsError:
            if not os.path.isdir(self.root):
                raise DatabaseError(f"Hash database path exists but is not a directory: {self.root}")
        except OSError as e:
            raise DatabaseError(f"Failed to create hash database directory: {self.root} - {e}") from e

    def verify_exists(self) -> None:
        """
        Raises:
            DatabaseError: If the storage directory is absent (build before check) or not a directory
        """
        if not os.path.exists(self.root):
            raise DatabaseError(f"Hash database not found: {self.root}. Build it first with --build-db")
        if not os.path.isdir(self.root):
            raise DatabaseError(f"Hash database path is not a directory: {self.root}")

    def shard_path(self, digest: bytes) -> str:
        return os.path.join(self.root, digest[:1].hex())

    def entry_path(self, digest: bytes) -> str:
        if len(digest) < 2:
            raise DatabaseError(f"Digest too short for the database layout: {digest.hex()}")
        return os.path.join(self.shard_path(digest), digest[1:].hex())

    def record_entry(self, digest: bytes, origin_path: str) -> bool:
        """
        Adds origin_path to the entry for digest.

        Returns:
            True if the path was newly written, False if it was already listed

        Raises:
            DatabaseError: If the shard or entry file cannot be created, read or written
        """
        shard = self.shard_path(digest)
        entry = self.entry_path(digest)
        try:
            os.makedirs(shard, exist_ok=True)
            with open(entry, "a+", encoding="utf-8", errors="surrogateescape", newline="\n") as f:
                f.seek(0)
                if origin_path in f.read().splitlines():
                    return False
                f.write(origin_path + "\n")
        except OSError as e:
            raise DatabaseError(f"Failed to write hash database entry {entry}: {e}") from e

        logger.debug(f"Recorded {digest.hex()} -> {origin_path}")
        return True

    def has_entry(self, digest: bytes) -> bool:
        """Membership test on the shard/file pair only; contents are not read."""
        return os.path.isfile(self.entry_path(digest))

    def read_entry(self, digest: bytes) -> List[str]:
        """Paths recorded for digest, empty when there is no entry."""
        entry = self.entry_path(digest)
        try:
            with open(entry, "r", encoding="utf-8", errors="surrogateescape") as f:
                return [line for line in f.read().splitlines() if line]
        except FileNotFoundError:
            return []
        except OSError as e:
            raise DatabaseError(f"Failed to read hash database entry {entry}: {e}") from e


class DatabaseWalkerBase(TreeWalkerBase, ABC):
    """Single-tree walk that hashes every file; subclasses decide what to do with the digest."""

    def __init__(
        self,
        config: Configuration,
        tracker: ProgressTracker,
        database: HashDatabase,
        reporter: Optional[Reporter] = None
    ):
        super().__init__(config, tracker, reporter)
        self.database = database

    def walk(self, budget: float, dir_path: str, depth: int) -> None:
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
                    self.walk(chunk, full_path, child_depth)
                else:
                    self.tracker.add_progress(chunk)
            else:
                self.process_file(full_path, hash_file(full_path).digest)
                self.tracker.add_progress(chunk)

        self.tracker.add_progress(extra)
        self.tracker.set_current_path("")

    @abstractmethod
    def process_file(self, path: str, digest: bytes) -> None:
        """Handles one hashed file of the walked tree."""


class DatabaseBuilderImpl(DatabaseWalkerBase):
    """Records every file of a source tree. New writes count as "copied", re-adds as "matched"."""

    def build(self, budget: float, source_dir: str, depth: int) -> None:
        self.walk(budget, source_dir, depth)

    def process_file(self, path: str, digest: bytes) -> None:
        if self.database.record_entry(digest, path):
            self.tracker.increment("copied")
        else:
            self.tracker.increment("matched")


class DatabaseCheckerImpl(DatabaseWalkerBase):
    """
    Checks every file of a target tree for membership in the database.
    Files not found are copied to the configured destination, or reported.
    """

    def check(self, budget: float, target_dir: str, depth: int) -> None:
        self.walk(budget, target_dir, depth)

    def process_file(self, path: str, digest: bytes) -> None:
        if self.database.has_entry(digest):
            self.tracker.increment("matched")
            return

        if not self.config.copy_destination:
            self.report(f"Not in database: {path}")
            self.tracker.increment("missing")
            return

        destination = os.path.join(self.config.copy_destination, self.relative_path(path))
        FileService.ensure_directory(os.path.dirname(destination))
        FileService.copy_file(path, destination)
        self.tracker.increment("copied")

    def relative_path(self, path: str) -> str:
        """
        Path relative to the deepest configured entry that contains it.
        Falls back to the bare file name when no entry contains it.
        """
        best = None
        for entry in self.config.entries:
            if path.startswith(entry.rstrip(os.sep) + os.sep):
                if best is None or len(entry) > len(best):
                    best = entry
        if best is None:
            return os.path.basename(path)
        return os.path.relpath(path, best)
