"""Progress reporting for long-running stages."""

from __future__ import annotations

from typing import Callable, Optional

ProgressCallback = Callable[[int], None]


class ProgressReporter:
    """Clamp updates to 0-100 integers and forward only increases.

    Stages write to this instead of calling the raw callback so that the
    orchestrator always sees a monotonic sequence.
    """

    def __init__(self, callback: Optional[ProgressCallback] = None) -> None:
        self._callback = callback
        self.last = -1

    def __call__(self, percent: float) -> None:
        value = int(round(max(0.0, min(100.0, percent))))
        if value <= self.last:
            return
        self.last = value
        if self._callback is not None:
            self._callback(value)

    def span(self, start: float, end: float) -> "ProgressReporter":
        """Child reporter mapping its own 0-100 onto [start, end] of this one."""
        return _SpanReporter(self, start, end)


class _SpanReporter(ProgressReporter):
    def __init__(self, parent: ProgressReporter, start: float, end: float) -> None:
        super().__init__(None)
        self._parent = parent
        self._start = start
        self._end = end

    def __call__(self, percent: float) -> None:
        p = max(0.0, min(100.0, percent))
        self._parent(self._start + (self._end - self._start) * p / 100.0)


def as_reporter(callback: Optional[ProgressCallback | ProgressReporter]) -> ProgressReporter:
    if isinstance(callback, ProgressReporter):
        return callback
    return ProgressReporter(callback)
