"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

services/console.py
Console output shared by discrepancy reports and the live status line.

Reports are printed as timestamped lines; while the status line is shown it is
redrawn underneath every report so the two never interleave. StatusDisplay is
a background thread that samples the ProgressTracker every 100 ms; it only
reads the tracker and never changes comparison state.
"""
import sys
import threading
import time
from typing import Optional, TextIO

from brahe.core.models import ProgressState
from brahe.core.progress import ProgressTracker
from brahe.utils.convert_utils import ConvertUtils

MAX_LINE_WIDTH = 120
REFRESH_INTERVAL = 0.1  # seconds


class Console:
    """Serializes writes to one stream and owns the current status line."""

    def __init__(self, stream: Optional[TextIO] = None, width: int = MAX_LINE_WIDTH):
        self.stream = stream or sys.stdout
        self.width = width
        self._lock = threading.Lock()
        self._status_line = ""
        self._show = False

    def show(self) -> None:
        with self._lock:
            self._show = True

    def hide(self) -> None:
        """Erases the status line and stops redrawing it."""
        with self._lock:
            if self._show:
                self.stream.write("\r" + " " * (self.width - 1) + "\r")
                self.stream.flush()
            self._show = False

    def write(self, message: str) -> None:
        """Prints a timestamped message, keeping the status line below it."""
        lines = (ConvertUtils.timestamp_prefix() + message).rstrip("\n").split("\n")
        text = "".join(ConvertUtils.fit_width(line, self.width) + "\n" for line in lines)

        with self._lock:
            if self._show:
                self.stream.write("\r")
            self.stream.write(text)
            if self._show:
                self.stream.write(self._status_line)
            self.stream.flush()

    def set_status_line(self, line: str) -> None:
        line = ConvertUtils.fit_width(line, self.width)
        with self._lock:
            self._status_line = line
            if self._show:
                self.stream.write("\r" + line)
                self.stream.flush()


def format_status_line(state: ProgressState, elapsed: float, width: int = MAX_LINE_WIDTH) -> str:
    """
    '[00:01:05] [12.34% 5√ 1D 0M 0I 0C] <tail of current path>' fit to width.
    √ matched, D mismatched (different), M missing, I ignored, C copied.
    """
    head = (
        f"[{ConvertUtils.seconds_to_clock(elapsed)}] "
        f"[{state.percent_complete:.2f}% {state.matched}√ {state.mismatched}D "
        f"{state.missing}M {state.ignored}I {state.copied}C] "
    )
    return head + ConvertUtils.tail(state.current_path, width - len(head) - 1)


def format_summary(state: ProgressState, elapsed: float) -> str:
    return (
        f"Completed in {ConvertUtils.seconds_to_clock(elapsed)} with {state.matched} matches, "
        f"{state.mismatched} mismatches, {state.missing} missing, {state.ignored} ignored, "
        f"{state.copied} copied."
    )


class StatusDisplay(threading.Thread):
    """
    Periodically renders the tracker to the console status line.
    stop() asks for one final render, plus the completion summary when the run
    finished; join() waits for it.
    """

    def __init__(self, tracker: ProgressTracker, console: Console, interval: float = REFRESH_INTERVAL):
        super().__init__(name="brahe-status", daemon=True)
        self.tracker = tracker
        self.console = console
        self.interval = interval
        self.start_time = time.time()
        self._stop_event = threading.Event()
        self._completed = False

    def elapsed(self) -> float:
        return time.time() - self.start_time

    def render(self) -> None:
        state = self.tracker.snapshot()
        self.console.set_status_line(format_status_line(state, self.elapsed(), self.console.width))

    def run(self) -> None:
        while not self._stop_event.wait(self.interval):
            self.render()
        self.render()
        self.console.hide()
        if self._completed:
            self.console.write(format_summary(self.tracker.snapshot(), self.elapsed()))

    def stop(self, completed: bool = True) -> None:
        """
        Signals that no more work is coming.
        An aborted run (completed=False) only clears the status line.
        """
        self._completed = completed
        self._stop_event.set()
