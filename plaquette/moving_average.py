"""Exponential moving average with an optional time window."""

from __future__ import annotations

UINT_MAX = 2**32 - 1
INFINITE_TIME_WINDOW = -1.0


def apply_update(running_value: float, new_value: float, alpha: float) -> float:
    """Returns *running_value* moved towards *new_value* by mixing factor *alpha*."""
    return running_value - alpha * (running_value - new_value)


def apply_amend_update(
    running_value: float, previous_value: float, new_value: float, alpha: float
) -> float:
    """Returns *running_value* with its latest update redone using *new_value*."""
    return running_value + alpha * (new_value - previous_value)


def compute_alpha(sample_rate: float, time_window: float, n_samples: int = UINT_MAX) -> float:
    """Returns the mixing factor for a sample rate, time window and sample count."""
    if time_window < 0:
        return 1.0 / (n_samples + 1)
    target = time_window * sample_rate
    if n_samples < target - 1:
        return 1.0 / (n_samples + 1)
    # Plain averaging during warm-up, then the standard 2 / (N + 1) factor capped at 1.
    return 2.0 / (target + 1) if target > 1.0 else 1.0


class MovingAverage:
    """An exponential moving average; a time window of None means infinite."""

    def __init__(self, time_window: float | None = None) -> None:
        self._value = 0.0
        self._n_samples = 0
        self._smooth_time = INFINITE_TIME_WINDOW
        if time_window is not None:
            self.time_window = time_window
        self.reset()

    @property
    def time_window(self) -> float:
        """The smoothing window in seconds (negative when infinite)."""
        return self._smooth_time

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._smooth_time = max(float(seconds), 0.0)

    def infinite_time_window(self) -> None:
        """Switches to an infinite smoothing window."""
        self._smooth_time = INFINITE_TIME_WINDOW

    def time_window_is_infinite(self) -> bool:
        """Returns True if the smoothing window is infinite."""
        return self._smooth_time == INFINITE_TIME_WINDOW

    @property
    def cutoff(self) -> float:
        """The cutoff frequency in Hz (0 when the window is infinite)."""
        return 0.0 if self.time_window_is_infinite() else 1.0 / self._smooth_time

    @cutoff.setter
    def cutoff(self, hz: float) -> None:
        if hz <= 0:
            self.infinite_time_window()
        else:
            self.time_window = 1.0 / hz

    @property
    def n_samples(self) -> int:
        """Number of samples processed since the last reset."""
        return self._n_samples

    def alpha(self, sample_rate: float) -> float:
        """Returns the mixing factor for the given sample rate."""
        return compute_alpha(sample_rate, self._smooth_time, self._n_samples)

    def reset(self) -> None:
        """Restarts the sample count; the next update replaces the value."""
        self._n_samples = 0

    def update(self, value: float, sample_rate: float = 1.0, force_alpha: bool = False) -> float:
        """Adds *value*; with *force_alpha*, *sample_rate* is used as alpha directly."""
        alpha = sample_rate if force_alpha else self.alpha(sample_rate)
        self._value = apply_update(self._value, value, alpha)
        if self._n_samples < UINT_MAX:
            self._n_samples += 1
        return self._value

    def get(self) -> float:
        """Returns the current average."""
        return self._value

    def amend_update(
        self,
        previous_value: float,
        new_value: float,
        sample_rate: float = 1.0,
        force_alpha: bool = False,
    ) -> None:
        """Replaces the latest sample *previous_value* by *new_value*."""
        alpha = sample_rate if force_alpha else self.alpha(sample_rate)
        self._value = apply_amend_update(self._value, previous_value, new_value, alpha)