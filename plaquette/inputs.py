"""Smoothing and debouncing behaviour for inputs that read raw values."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from .core import Engine, default_engine
from .moving_average import MovingAverage

NO_SMOOTH_WINDOW = 0.0
DEFAULT_SMOOTH_WINDOW = 0.1
NO_DEBOUNCE_WINDOW = 0.0
DEFAULT_DEBOUNCE_WINDOW = 0.005


class DebounceMode(IntEnum):
    """How a debounced input decides that its state has changed."""

    STABLE = 0
    LOCK_OUT = 1
    PROMPT_DETECT = 2


class Smoothable(ABC):
    """An input whose raw readings are smoothed by an exponential moving average.

    Subclasses provide ``_read()``, which returns the raw value.
    """

    def __init__(self, smooth_time: float = NO_SMOOTH_WINDOW, engine: Engine | None = None) -> None:
        self._timing_engine = engine if engine is not None else default_engine()
        self._avg = MovingAverage(smooth_time)

    @abstractmethod
    def _read(self) -> float:
        """Returns the raw value."""

    @property
    def time_window(self) -> float:
        """The smoothing window in seconds."""
        return self._avg.time_window

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._avg.time_window = seconds

    @property
    def cutoff(self) -> float:
        """The smoothing cutoff frequency in Hz (0 when the window is infinite)."""
        return self._avg.cutoff

    @cutoff.setter
    def cutoff(self, hz: float) -> None:
        self._avg.cutoff = hz

    def smooth(self, smooth_time: float = DEFAULT_SMOOTH_WINDOW) -> None:
        """Applies smoothing over *smooth_time* seconds."""
        self.time_window = smooth_time

    def no_smooth(self) -> None:
        """Removes smoothing."""
        self.smooth(NO_SMOOTH_WINDOW)

    def smoothed(self) -> float:
        """Returns the smoothed value."""
        return self._avg.get()

    def reset_smoothing(self) -> None:
        """Restarts smoothing: the next reading replaces the value."""
        self._avg.reset()

    def update_smoothing(self) -> None:
        """Reads the raw value and folds it into the smoothed value."""
        rate = self._timing_engine.sample_rate
        self._avg.update(self._read(), self._avg.alpha(rate), True)


class Debounceable(ABC):
    """An input whose raw on/off state is debounced over a time window.

    Subclasses provide ``_is_on()``, which returns the raw state.
    """

    def __init__(
        self,
        debounce_time: float = NO_DEBOUNCE_WINDOW,
        mode: DebounceMode | int = DebounceMode.STABLE,
        engine: Engine | None = None,
    ) -> None:
        self._timing_engine = engine if engine is not None else default_engine()
        self._interval = 0.0
        self._start_time = 0.0
        self._debounced_state = False
        self._unstable_state = False
        self._changed_state = False
        self._debounce_mode = DebounceMode.STABLE
        self.time_window = debounce_time
        self.debounce_mode = mode

    @abstractmethod
    def _is_on(self) -> bool:
        """Returns the raw on/off state."""

    @property
    def time_window(self) -> float:
        """The debouncing window in seconds."""
        return self._interval

    @time_window.setter
    def time_window(self, seconds: float) -> None:
        self._interval = float(seconds)

    @property
    def debounce_mode(self) -> DebounceMode:
        """The debounce mode."""
        return self._debounce_mode

    @debounce_mode.setter
    def debounce_mode(self, mode: DebounceMode | int) -> None:
        self._debounce_mode = DebounceMode(mode)

    def debounce(self, debounce_time: float = DEFAULT_DEBOUNCE_WINDOW) -> None:
        """Applies debouncing over *debounce_time* seconds."""
        self.time_window = debounce_time

    def no_debounce(self) -> None:
        """Removes debouncing."""
        self.debounce(NO_DEBOUNCE_WINDOW)

    def debounced(self) -> bool:
        """Returns the debounced state."""
        return self._debounced_state

    def reset_debouncing(self) -> None:
        """Restarts the debounce timer and takes the current raw state if on."""
        self._start_time = self._seconds()
        if self._is_on():
            self._debounced_state = True
            self._unstable_state = True

    def update_debouncing(self) -> None:
        """Reads the raw state and updates the debounced state."""
        self._changed_state = False

        if not self._interval:
            if self._is_on() != self._debounced_state:
                self._change_state()
            return

        now = self._seconds()
        if self._debounce_mode == DebounceMode.STABLE:
            current = self._is_on()
            if current != self._unstable_state:
                self._start_time = now
                self._unstable_state = not self._unstable_state
            elif current != self._debounced_state and now - self._start_time >= self._interval:
                self._start_time = now
                self._change_state()

        elif self._debounce_mode == DebounceMode.LOCK_OUT:
            if now - self._start_time >= self._interval and self._is_on() != self._debounced_state:
                self._start_time = now
                self._change_state()

        else:
            current = self._is_on()
            if current != self._debounced_state and now - self._start_time >= self._interval:
                self._change_state()
            if current != self._unstable_state:
                self._start_time = now
                self._unstable_state = not self._unstable_state

    def _change_state(self) -> None:
        self._debounced_state = not self._debounced_state
        self._changed_state = True

    def _seconds(self) -> float:
        return self._timing_engine.seconds()