"""Adaptive normalizer: rescales values to a target mean and standard deviation."""

from __future__ import annotations

from .core import FLT_MIN, Engine
from .moving_average import apply_amend_update, apply_update
from .moving_filter import MovingFilter
from .moving_stats import MovingStats

DEFAULT_MEAN = 0.5
DEFAULT_STD_DEV = 0.15
DEFAULT_MEAN2 = DEFAULT_STD_DEV * DEFAULT_STD_DEV + DEFAULT_MEAN * DEFAULT_MEAN
# Keeps the default normalizer within [0, 1].
DEFAULT_CLAMP_STD_DEV = 0.5 / DEFAULT_STD_DEV - FLT_MIN
NO_CLAMP = 0.0


def _map_float(value: float, from_low: float, from_high: float, to_low: float, to_high: float) -> float:
    if from_low == from_high:
        return (to_low + to_high) / 2
    return to_low + (value - from_low) * (to_high - to_low) / (from_high - from_low)


class Normalizer(MovingFilter, MovingStats):
    """Normalizes values on the fly using moving estimates of mean and standard deviation.

    Without *mean* and *std_dev* the output is centred on 0.5 with a deviation of 0.15.
    A *time_window* of None means an infinite window.
    """

    def __init__(
        self,
        mean: float | None = None,
        std_dev: float | None = None,
        time_window: float | None = None,
        engine: Engine | None = None,
    ) -> None:
        MovingStats.__init__(self, time_window)
        MovingFilter.__init__(self, engine)

        if mean is None and std_dev is None:
            target_mean, target_std = DEFAULT_MEAN, DEFAULT_STD_DEV
            mean2 = DEFAULT_MEAN2
        else:
            target_mean = DEFAULT_MEAN if mean is None else float(mean)
            target_std = DEFAULT_STD_DEV if std_dev is None else float(std_dev)
            if time_window is None:
                mean2 = DEFAULT_MEAN2
            else:
                mean2 = target_std * target_std - target_mean * target_mean

        self._current_mean_step = target_mean
        self._current_mean2_step = mean2
        self._value = target_mean
        self._target_mean = target_mean
        self._target_std_dev = abs(target_std)
        self._clamp_std_dev = NO_CLAMP
        self.clamp()

    @property
    def target_mean(self) -> float:
        """The mean of the normalized output."""
        return self._target_mean

    @target_mean.setter
    def target_mean(self, mean: float) -> None:
        self._target_mean = float(mean)

    @property
    def target_std_dev(self) -> float:
        """The standard deviation of the normalized output (never negative)."""
        return self._target_std_dev

    @target_std_dev.setter
    def target_std_dev(self, std_dev: float) -> None:
        self._target_std_dev = abs(float(std_dev))

    @property
    def time_window(self) -> float:
        """The time window in seconds (negative when infinite)."""
        return self._avg.time_window

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._avg.time_window = seconds

    def infinite_time_window(self) -> None:
        """Switches to an infinite time window."""
        MovingStats.infinite_time_window(self)

    def time_window_is_infinite(self) -> bool:
        """Returns True if the time window is infinite."""
        return MovingStats.time_window_is_infinite(self)

    def reset(self) -> None:
        """Resets the statistics."""
        MovingStats.reset(self)
        MovingFilter.reset(self)

    def put(self, value: float) -> float:
        """Pushes *value* and returns it normalized to the target distribution."""
        value = float(value)
        self._count_value()

        if self.is_calibrating():
            if self._n_values_step == 1:
                normalized = self.update(value, self.sample_rate)
            else:
                # Several values in one step: redo this step's update with their average.
                prev_mean_step = self._current_mean_step
                prev_mean2_step = self._current_mean2_step
                step_alpha = 1.0 / self._n_values_step
                self._current_mean_step = apply_update(self._current_mean_step, value, step_alpha)
                self._current_mean2_step = apply_update(
                    self._current_mean2_step, value * value, step_alpha
                )
                alpha = self._avg.alpha(self.sample_rate)
                self._avg.amend_update(prev_mean_step, self._current_mean_step, alpha, True)
                self._mean2 = apply_amend_update(
                    self._mean2, prev_mean2_step, self._current_mean2_step, alpha
                )
                normalized = self.normalize(value)
        else:
            normalized = self.normalize(value)

        result = normalized * self._target_std_dev + self._target_mean
        if self.is_clamped():
            result = self._clamp(result)
        self._value = result
        return self._value

    def step(self) -> None:
        """Repeats the last step's values when nothing was put during the step."""
        if self._n_values_step == 0:
            alpha = self._avg.alpha(self.sample_rate)
            self._avg.update(self._current_mean_step, alpha, True)
            self._mean2 = apply_update(self._mean2, self._current_mean2_step, alpha)
        else:
            self._n_values_step = 0

    def update(self, value: float, sample_rate: float = 1.0) -> float:
        """Adds *value* to the statistics and returns its z-score."""
        value = float(value)
        alpha = self._avg.alpha(sample_rate)
        self._avg.update(value, alpha, True)
        self._current_mean_step = value
        self._current_mean2_step = value * value
        self._mean2 = apply_update(self._mean2, self._current_mean2_step, alpha)
        return self.normalize(value)

    def low_outlier_threshold(self, n_std_dev: float = 1.5) -> float:
        """Returns the output value below which a value is a low outlier."""
        return self._target_mean - abs(n_std_dev) * self._target_std_dev

    def high_outlier_threshold(self, n_std_dev: float = 1.5) -> float:
        """Returns the output value above which a value is a high outlier."""
        return self._target_mean + abs(n_std_dev) * self._target_std_dev

    def is_clamped(self) -> bool:
        """Returns True if the output is clamped."""
        return self._clamp_std_dev != NO_CLAMP

    def clamp(self, n_std_dev: float = DEFAULT_CLAMP_STD_DEV) -> None:
        """Clamps the output to target mean +/- *n_std_dev* target deviations."""
        self._clamp_std_dev = abs(float(n_std_dev))

    def no_clamp(self) -> None:
        """Removes clamping."""
        self._clamp_std_dev = NO_CLAMP

    def map_to(self, to_low: float, to_high: float) -> float:
        """Maps the value from the clamping range to [to_low, to_high]."""
        n_std = DEFAULT_CLAMP_STD_DEV if self._clamp_std_dev == NO_CLAMP else self._clamp_std_dev
        spread = self._target_std_dev * n_std
        return _map_float(self.get() - self._target_mean, -spread, spread, to_low, to_high)

    def _clamp(self, value: float) -> float:
        spread = self._clamp_std_dev * self._target_std_dev
        return min(max(value, self._target_mean - spread), self._target_mean + spread)