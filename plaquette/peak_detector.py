"""Detects when a signal crosses a threshold or peaks above it."""

from __future__ import annotations

from enum import IntEnum

from .core import FLT_MAX, DigitalUnit, Engine
from .events import EventCallback, EventType


class PeakMode(IntEnum):
    """Peak detection modes."""

    RISING = 0
    FALLING = 1
    MAX = 2
    MIN = 3


def _map_to01(value: float, low: float, high: float) -> float:
    if low == high:
        return 0.5
    return (value - low) / (high - low)


class PeakDetector(DigitalUnit):
    """Emits a one-step "on" when the signal crosses a threshold or falls back from a peak.

    In inverted modes (FALLING, MIN) thresholds are stored, and reported, negated.
    """

    def __init__(
        self,
        trigger_threshold: float,
        mode: PeakMode | int = PeakMode.MAX,
        engine: Engine | None = None,
    ) -> None:
        super().__init__(engine)
        self._trigger_threshold = float(trigger_threshold)
        self._reload_threshold = float(trigger_threshold)
        self._fallback_tolerance = 0.1
        self._mode = PeakMode.RISING
        self._peak_value = -FLT_MAX
        self._on_value = False
        self._was_low = True
        self._crossed = False
        self._first_run = True

        self.mode = mode
        self.trigger_threshold = trigger_threshold
        self.reload_threshold = trigger_threshold
        self.fallback_tolerance = 0.1
        self._reset()

    @property
    def trigger_threshold(self) -> float:
        """The threshold that triggers detection."""
        return self._trigger_threshold

    @trigger_threshold.setter
    def trigger_threshold(self, threshold: float) -> None:
        threshold = -threshold if self.mode_inverted() else float(threshold)
        if self._trigger_threshold != threshold:
            self._trigger_threshold = threshold
            self._reset()

    @property
    def reload_threshold(self) -> float:
        """The threshold the signal must go back past before another detection."""
        return self._reload_threshold

    @reload_threshold.setter
    def reload_threshold(self, threshold: float) -> None:
        threshold = -threshold if self.mode_inverted() else float(threshold)
        threshold = min(threshold, self._trigger_threshold)
        if self._reload_threshold != threshold:
            self._reload_threshold = threshold
            self._reset()

    @property
    def fallback_tolerance(self) -> float:
        """Relative drop after a peak, as a fraction of peak minus threshold, in [0, 1]."""
        return self._fallback_tolerance

    @fallback_tolerance.setter
    def fallback_tolerance(self, tolerance: float) -> None:
        self._fallback_tolerance = min(max(float(tolerance), 0.0), 1.0)

    @property
    def mode(self) -> PeakMode:
        """The detection mode."""
        return self._mode

    @mode.setter
    def mode(self, mode: PeakMode | int) -> None:
        was_inverted = self.mode_inverted()
        self._mode = PeakMode(min(max(int(mode), PeakMode.RISING), PeakMode.MIN))
        if self.mode_inverted() != was_inverted:
            self._trigger_threshold = -self._trigger_threshold
            self._reload_threshold = -self._reload_threshold

    def mode_inverted(self) -> bool:
        """Returns True for FALLING and MIN modes."""
        return self._mode in (PeakMode.FALLING, PeakMode.MIN)

    def mode_crossing(self) -> bool:
        """Returns True for RISING and FALLING modes."""
        return self._mode in (PeakMode.RISING, PeakMode.FALLING)

    def mode_apex(self) -> bool:
        """Returns True for MAX and MIN modes."""
        return not self.mode_crossing()

    def put(self, value: float) -> float:
        """Feeds *value* to the detector and returns 1.0 on detection, else 0.0."""
        value = float(value)
        if self.mode_inverted():
            value = -value

        high = value >= self._trigger_threshold

        if self._first_run:
            self._was_low = not high
            self._first_run = False
        else:
            crossing = high and self._was_low
            is_max = value > self._peak_value

            if crossing:
                self._was_low = False
                self._crossed = True
            elif value <= self._reload_threshold:
                self._was_low = True

            falling_back = False
            if self._crossed:
                if is_max:
                    self._peak_value = value
                elif (
                    _map_to01(value, self._peak_value, self._trigger_threshold)
                    >= self._fallback_tolerance
                    and self._peak_value != self._trigger_threshold
                ) or not high:
                    falling_back = True
                    self._crossed = False
                    self._peak_value = -FLT_MAX

            self._on_value = crossing if self.mode_crossing() else falling_back

        return self.get()

    def is_on(self) -> bool:
        """Returns True if a peak was detected by the last put()."""
        return self._on_value

    def on_bang(self, callback: EventCallback) -> None:
        """Registers *callback* for peak detection."""
        self.on_event(callback, EventType.BANG)

    def event_triggered(self, event_type: EventType) -> bool:
        """Returns True on the bang event when a peak was detected."""
        if event_type == EventType.BANG:
            return self._on_value
        return super().event_triggered(event_type)

    def _reset(self) -> None:
        self._peak_value = -FLT_MAX
        self._on_value = False
        self._crossed = False
        self._was_low = True
        self._first_run = True