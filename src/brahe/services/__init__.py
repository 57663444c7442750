"""File operations and console output services."""

from .file_service import FileService
from .console import Console, StatusDisplay

__all__ = ["FileService", "Console", "StatusDisplay"]
