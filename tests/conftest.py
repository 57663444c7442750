"""
Shared fixtures for brahe tests.
Creates isolated temporary directory trees with controlled file contents.
"""
import os
import pytest
import tempfile
from pathlib import Path
from typing import Callable, Dict, List
import sys

# Add src/ to sys.path so 'brahe' is importable without installing
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from brahe.core.models import Configuration, Mode
from brahe.core.progress import ProgressTracker


@pytest.fixture
def temp_dir():
    """Creates isolated temporary directory, auto-cleanup after test."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_tree(root: Path, layout: Dict) -> Path:
    """
    Materializes a nested dict: str/bytes values become files, dict values directories.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        path = root / name
        if isinstance(content, dict):
            write_tree(path, content)
        elif isinstance(content, str):
            path.write_text(content)
        else:
            path.write_bytes(content)
    return root


@pytest.fixture
def make_tree(temp_dir) -> Callable[[str, Dict], Path]:
    """Returns a factory creating named trees under the temp dir."""
    def _make(name: str, layout: Dict) -> Path:
        return write_tree(temp_dir / name, layout)
    return _make


@pytest.fixture
def make_undecodable_file() -> Callable[[Path, bytes], str]:
    """
    Returns a factory writing a file whose name is not valid UTF-8.
    The returned path carries the name the way os.scandir reports it.
    """
    def _make(directory: Path, name: bytes, content: bytes = b"data") -> str:
        if sys.platform == "win32":
            pytest.skip("byte file names are POSIX only")
        raw_path = os.path.join(os.fsencode(str(directory)), name)
        try:
            with open(raw_path, "wb") as f:
                f.write(content)
        except OSError:
            pytest.skip("filesystem rejects non-UTF-8 file names")
        return os.fsdecode(raw_path)
    return _make


@pytest.fixture
def tracker() -> ProgressTracker:
    return ProgressTracker()


@pytest.fixture
def reports() -> List[str]:
    """Collects reported discrepancies; pass reports.append as the reporter."""
    return []


@pytest.fixture
def make_config() -> Callable[..., Configuration]:
    """Builds a Configuration from Path entries, defaulting to compare mode."""
    def _make(*entries: Path, **kwargs) -> Configuration:
        kwargs.setdefault("mode", Mode.COMPARE)
        return Configuration(entries=[str(e) for e in entries], **kwargs)
    return _make
