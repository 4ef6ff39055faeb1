"""A chronometer with a duration and progress."""

from __future__ import annotations

from .chronometer import AbstractChronometer


class AbstractTimer(AbstractChronometer):
    """A chronometer that runs for a given duration."""

    def __init__(self, duration: float) -> None:
        super().__init__()
        self._duration = 0.0
        self.duration = duration

    @property
    def duration(self) -> float:
        """The duration in seconds (never negative)."""
        return self._duration

    @duration.setter
    def duration(self, duration: float) -> None:
        self._duration = max(float(duration), 0.0)

    def start(self, duration: float | None = None) -> None:
        """Starts or restarts the timer, optionally with a new duration."""
        if duration is not None:
            self.duration = duration
        super().start()

    def progress(self) -> float:
        """Returns the fraction of the duration elapsed, in [0, 1]."""
        if self._duration <= 0:
            return 1.0
        return min(max(self.elapsed() / self._duration, 0.0), 1.0)

    def is_finished(self) -> bool:
        """Returns True once the elapsed time has reached the duration."""
        return self._elapsed_time >= self._duration

    def map_to(self, to_low: float, to_high: float) -> float:
        """Maps the progress to the range [to_low, to_high]."""
        return to_low + self.progress() * (to_high - to_low)