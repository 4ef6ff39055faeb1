"""Rescales a signal into [0, 1] using its observed minimum and maximum."""

from __future__ import annotations

from .core import FLT_MAX, Engine
from .moving_average import apply_update, compute_alpha
from .moving_filter import INFINITE_TIME_WINDOW, MovingFilter


def _map_to01_constrained(value: float, low: float, high: float) -> float:
    if low == high:
        return 0.5
    return min(max((value - low) / (high - low), 0.0), 1.0)


class MinMaxScaler(MovingFilter):
    """Maps values into [0, 1] from the min and max seen; None means an infinite window."""

    def __init__(self, time_window: float | None = None, engine: Engine | None = None) -> None:
        super().__init__(engine)
        self._time_window = INFINITE_TIME_WINDOW
        self._min_value = FLT_MAX
        self._max_value = -FLT_MAX
        self._current_value_step = 0.0
        if time_window is None:
            self.infinite_time_window()
        else:
            self.time_window = time_window
        self.reset()

    @property
    def min_value(self) -> float:
        """The current minimum."""
        return self._min_value

    @property
    def max_value(self) -> float:
        """The current maximum."""
        return self._max_value

    @property
    def time_window(self) -> float:
        """The decay window in seconds (negative when infinite)."""
        return self._time_window

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._time_window = max(float(seconds), 0.0)

    def infinite_time_window(self) -> None:
        """Switches to an infinite window: min and max never decay."""
        self._time_window = INFINITE_TIME_WINDOW

    def time_window_is_infinite(self) -> bool:
        """Returns True if the window is infinite."""
        return self._time_window == INFINITE_TIME_WINDOW

    def reset(self) -> None:
        """Forgets the min and max and sets the value back to 0.5."""
        super().reset()
        self._min_value = FLT_MAX
        self._max_value = -FLT_MAX
        self._value = 0.5
        self._current_value_step = 0.0

    def put(self, value: float) -> float:
        """Pushes *value* and returns it rescaled into [0, 1]."""
        value = float(value)
        if self.is_calibrating():
            self._min_value = min(self._min_value, value)
            self._max_value = max(self._max_value, value)
            self._count_value()
            if self._n_values_step == 1:
                self._current_value_step = value
            else:
                self._current_value_step = apply_update(
                    self._current_value_step, value, 1.0 / self._n_values_step
                )
        self._value = _map_to01_constrained(value, self._min_value, self._max_value)
        return self._value

    def step(self) -> None:
        """Decays min and max towards the latest values when the window is finite."""
        if self._n_values_step > 0 or self._min_value != FLT_MAX:
            self._n_values_step = 0
            if not self.time_window_is_infinite():
                alpha = compute_alpha(self.sample_rate, self._time_window)
                self._min_value = apply_update(self._min_value, self._current_value_step, alpha)
                self._max_value = apply_update(self._max_value, self._current_value_step, alpha)