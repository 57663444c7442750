"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/progress.py
Process-wide progress and statistics counters.

Progress is an additive real number on [0, 100] rather than a files-done count:
tree sizes are unknown up front, so every recursive call receives a budget,
splits it evenly among its children and adds the rounding remainder back once.
"""

import threading
from typing import Tuple

from brahe.core.models import ProgressState

COUNTERS = ("matched", "mismatched", "missing", "ignored", "copied")


def split_progress(budget: float, count: int) -> Tuple[float, float]:
    """
    Splits a progress budget across `count` children.

    Returns:
        (chunk, extra) where chunk * count + extra == budget
    """
    if count <= 0:
        return 0.0, budget
    chunk = budget / count
    extra = budget - chunk * count
    return chunk, extra


class ProgressTracker:
    """
    Shared counters, every mutation serialized by one lock.
    Walkers update it; the status display samples it through snapshot().
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._progress = 0.0
        self._current_path = ""
        self._counters = {name: 0 for name in COUNTERS}

    def add_progress(self, delta: float) -> None:
        with self._lock:
            self._progress += delta

    def set_current_path(self, path: str) -> None:
        with self._lock:
            self._current_path = path

    def increment(self, counter: str, amount: int = 1) -> None:
        """Adds `amount` (may be negative) to one of the named counters."""
        if counter not in self._counters:
            raise KeyError(f"Unknown counter: {counter}")
        with self._lock:
            self._counters[counter] += amount

    def snapshot(self) -> ProgressState:
        """Consistent copy of all fields taken under the lock."""
        with self._lock:
            return ProgressState(
                percent_complete=self._progress,
                current_path=self._current_path,
                **self._counters,
            )
