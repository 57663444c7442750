"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/file_service.py
File operations used by the walkers: verbatim copy, permanent delete and
moving to the system trash. Every failure is raised as FileOperationError.
"""
import logging
import os
import shutil
from pathlib import Path

from send2trash import send2trash

from brahe.core.errors import FileOperationError

logger = logging.getLogger(__name__)


class FileService:
    """
    Thin wrappers around filesystem mutations so callers get one error type
    and tests have one place to patch.
    """

    @staticmethod
    def copy_file(src: str, dst: str) -> None:
        """
        Copies file bytes to a new file. Refuses to overwrite an existing destination.
        Data is flushed to disk before returning.
        """
        try:
            with open(src, "rb") as fin, open(dst, "xb") as fout:
                shutil.copyfileobj(fin, fout)
                fout.flush()
                os.fsync(fout.fileno())
        except OSError as e:
            raise FileOperationError(f"Failed to copy {src} to {dst}: {e}") from e
        logger.debug(f"Copied {src} -> {dst}")

    @staticmethod
    def ensure_directory(path: str) -> None:
        """Creates a directory and any missing parents."""
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            raise FileOperationError(f"Failed to create directory {path}: {e}") from e

    @staticmethod
    def delete_file(file_path: str) -> None:
        """Permanently removes a file."""
        try:
            os.remove(file_path)
        except OSError as e:
            raise FileOperationError(f"Failed to delete {file_path}: {e}") from e
        logger.debug(f"Deleted {file_path}")

    @staticmethod
    def move_to_trash(file_path: str) -> None:
        """Moves a file to the system trash."""
        path = Path(file_path).resolve()

        if not path.exists():
            raise FileOperationError(f"File not found: {path}")

        try:
            send2trash(str(path))
        except Exception as e:
            raise FileOperationError(f"Failed to move to trash: {e}") from e
        logger.debug(f"Moved to trash {path}")
