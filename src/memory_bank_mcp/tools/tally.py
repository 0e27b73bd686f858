"""Accumulator for task names reported across track_progress calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..documents import ProgressSnapshot


def _extend_unique(target: list[str], items: Iterable[str] | None) -> None:
    for item in items or ():
        if item not in target:
            target.append(item)


@dataclass(slots=True)
class ProgressTally:
    """Process-lifetime tally that flushes once ``threshold`` calls have been recorded."""

    threshold: int = 10
    calls: int = 0
    completed: list[str] = field(default_factory=list)
    in_progress: list[str] = field(default_factory=list)
    blocked: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.threshold < 1:
            raise ValueError("threshold must be >= 1")

    @property
    def empty(self) -> bool:
        return self.calls == 0 and not (self.completed or self.in_progress or self.blocked)

    def record(self, snapshot: ProgressSnapshot) -> ProgressSnapshot | None:
        """Fold a snapshot into the tally.

        Returns the accumulated snapshot and resets the tally when the call
        count reaches the threshold, otherwise None.
        """

        _extend_unique(self.completed, snapshot.completed)
        _extend_unique(self.in_progress, snapshot.in_progress)
        _extend_unique(self.blocked, snapshot.blocked)
        self.calls += 1
        if self.calls < self.threshold:
            return None

        flushed = ProgressSnapshot(
            completed=list(self.completed),
            in_progress=list(self.in_progress),
            blocked=list(self.blocked) or None,
        )
        self.reset()
        return flushed

    def reset(self) -> None:
        self.calls = 0
        self.completed.clear()
        self.in_progress.clear()
        self.blocked.clear()


__all__ = ["ProgressTally"]
