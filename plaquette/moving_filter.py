"""Base class for adaptive filters that calibrate over a time window."""

from __future__ import annotations

from abc import abstractmethod

from .core import AnalogSource, Engine

INFINITE_TIME_WINDOW = -1.0

# Per-step value counter saturates here.
_MAX_VALUES_STEP = 127


class MovingFilter(AnalogSource):
    """An analog unit that filters values put into it and can pause its calibration."""

    def __init__(self, engine: Engine | None = None) -> None:
        super().__init__(0.0, engine)
        self._is_calibrating = True
        self._n_values_step = 0

    @property
    @abstractmethod
    def time_window(self) -> float:
        """The time window in seconds (negative when infinite)."""

    @abstractmethod
    def infinite_time_window(self) -> None:
        """Switches to an infinite time window."""

    @abstractmethod
    def time_window_is_infinite(self) -> bool:
        """Returns True if the time window is infinite."""

    @property
    def cutoff(self) -> float:
        """The cutoff frequency in Hz (0 when the window is infinite)."""
        return 0.0 if self.time_window_is_infinite() else 1.0 / self.time_window

    @cutoff.setter
    def cutoff(self, hz: float) -> None:
        if hz <= 0:
            self.infinite_time_window()
        else:
            self.time_window = 1.0 / hz

    def reset(self) -> None:
        """Resets the filter."""
        self._n_values_step = 0

    def resume_calibrating(self) -> None:
        """Lets put() update the filter statistics (the default)."""
        self._is_calibrating = True

    def pause_calibrating(self) -> None:
        """Makes put() filter values without updating the statistics."""
        self._is_calibrating = False

    def toggle_calibrating(self) -> None:
        """Switches calibration on or off."""
        self._is_calibrating = not self._is_calibrating

    def is_calibrating(self) -> bool:
        """Returns True if the filter is calibrating."""
        return self._is_calibrating

    def _count_value(self) -> None:
        if self._n_values_step < _MAX_VALUES_STEP:
            self._n_values_step += 1