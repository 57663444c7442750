"""
brahe: directory tree verification tool.

Core features:
- Haystack comparison of a source tree against N targets (structure + BLAKE2b-256 content)
- Sharded hash database: record a source once, check later copies against it
- Duplicate removal inside one tree (permanent or via the system trash)
- Gap detection in numbered file sequences
"""

# Get version
try:
    from importlib.metadata import version as _version
    __version__ = _version("brahe")
except Exception:
    __version__ = "0.0.0"

# Public API: only what users should import directly
from brahe.commands import BraheCommand
from brahe.core import Configuration, GapPattern, Mode, ProgressState, ProgressTracker, BraheError
from brahe.services.file_service import FileService

__all__ = [
    "BraheCommand",
    "Configuration",
    "GapPattern",
    "Mode",
    "ProgressState",
    "ProgressTracker",
    "BraheError",
    "FileService",
    "__version__",
]
