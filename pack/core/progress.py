"""
Progress reporting for sync operations.

The orchestrator never prints directly; it hands structured events to a
ProgressTracker. The base tracker is silent, ConsoleProgress renders events
as human-readable lines.
"""

import threading
import time
from dataclasses import dataclass
from typing import Union

from .formatting import format_duration


@dataclass(frozen=True)
class Started:
    """A stage began. stage is "index" or "download"."""
    stage: str
    total: int


@dataclass(frozen=True)
class Progress:
    """Item `index` of `total` in a stage (1-based)."""
    stage: str
    index: int
    total: int
    name: str


@dataclass(frozen=True)
class Skipped:
    """A package was skipped without failing the run."""
    name: str
    reason: str


@dataclass(frozen=True)
class Done:
    """A stage finished with `count` items produced."""
    stage: str
    count: int


ProgressEvent = Union[Started, Progress, Skipped, Done]


class ProgressTracker:
    """Base class for thread-safe progress tracking. Silent by default."""

    def __init__(self):
        self.lock = threading.Lock()

    def emit(self, event: ProgressEvent):
        """Receive a progress event."""

    def write(self, msg: str):
        """Write a message (thread-safe)."""
        with self.lock:
            print(msg)


class ConsoleProgress(ProgressTracker):
    """Prints a line per event."""

    def __init__(self):
        super().__init__()
        self.start_time = time.time()

    def emit(self, event: ProgressEvent):
        if isinstance(event, Started):
            self.start_time = time.time()
            if event.stage == "index":
                self.write(f"Fetching {event.total} packages from the index...")
            else:
                self.write(f"Syncing {event.total} packages...")
        elif isinstance(event, Progress):
            self.write(f"  [{event.index}/{event.total}] {event.name}")
        elif isinstance(event, Skipped):
            self.write(f"  SKIP: {event.name} ({event.reason})")
        elif isinstance(event, Done):
            elapsed = format_duration(time.time() - self.start_time)
            self.write(f"Done: {event.count} packages in {elapsed}")


class RecordingProgress(ProgressTracker):
    """Keeps every event in memory. Handy for tests and callers that post-process."""

    def __init__(self):
        super().__init__()
        self.events: list = []

    def emit(self, event: ProgressEvent):
        with self.lock:
            self.events.append(event)
