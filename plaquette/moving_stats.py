"""Moving mean, variance and standard deviation over an exponential window."""

from __future__ import annotations

import math

from .moving_average import MovingAverage, apply_update

FLT_MIN = 1.1754943508222875e-38


class MovingStats:
    """Tracks running mean and variance; a time window of None means infinite."""

    def __init__(self, time_window: float | None = None) -> None:
        self._avg = MovingAverage(time_window)
        self._mean2 = 0.0

    @property
    def time_window(self) -> float:
        """The smoothing window in seconds (negative when infinite)."""
        return self._avg.time_window

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._avg.time_window = seconds

    @property
    def cutoff(self) -> float:
        """The cutoff frequency in Hz (0 when the window is infinite)."""
        return self._avg.cutoff

    @cutoff.setter
    def cutoff(self, hz: float) -> None:
        self._avg.cutoff = hz

    def infinite_time_window(self) -> None:
        """Switches to an infinite smoothing window."""
        self._avg.infinite_time_window()

    def time_window_is_infinite(self) -> bool:
        """Returns True if the smoothing window is infinite."""
        return self._avg.time_window_is_infinite()

    def reset(self) -> None:
        """Resets the statistics."""
        self._avg.reset()
        self._mean2 = 0.0

    def update(self, value: float, sample_rate: float = 1.0) -> float:
        """Adds *value* and returns it normalized with the updated statistics."""
        alpha = self._avg.alpha(sample_rate)
        self._avg.update(value, alpha, True)
        self._mean2 = apply_update(self._mean2, value * value, alpha)
        return self.normalize(value)

    def mean(self) -> float:
        """Returns the moving mean."""
        return self._avg.get()

    def var(self) -> float:
        """Returns the moving variance."""
        mean = self.mean()
        return self._mean2 - mean * mean

    def std_dev(self) -> float:
        """Returns the moving standard deviation."""
        return math.sqrt(max(self.var(), 0.0))

    def normalize(self, value: float) -> float:
        """Returns *value* as a z-score under the current statistics."""
        return (value - self.mean()) / max(self.std_dev(), FLT_MIN)

    def is_outlier(self, value: float, n_std_dev: float = 1.5) -> bool:
        """Returns True if *value* lies at least *n_std_dev* deviations from the mean."""
        return abs(self.normalize(value)) >= abs(n_std_dev)

    def is_low_outlier(self, value: float, n_std_dev: float = 1.5) -> bool:
        """Returns True if *value* lies at least *n_std_dev* deviations below the mean."""
        return self.normalize(value) <= -abs(n_std_dev)

    def is_high_outlier(self, value: float, n_std_dev: float = 1.5) -> bool:
        """Returns True if *value* lies at least *n_std_dev* deviations above the mean."""
        return self.normalize(value) >= abs(n_std_dev)