"""A unit that moves smoothly from one value to another over time."""

from __future__ import annotations

import math
from enum import IntEnum
from typing import Callable

from .core import FLT_MAX, Engine, Unit
from .events import EventCallback, EventType
from .timer import AbstractTimer

Easing = Callable[[float], float]


class RampMode(IntEnum):
    """Whether a ramp is driven by its duration or by its speed."""

    DURATION = 0
    SPEED = 1


class _FinishState(IntEnum):
    NOT_FINISHED = 0
    JUST_FINISHED = 1
    POST_FINISHED = 2


def _ease_none(progress: float) -> float:
    return progress


class Ramp(Unit, AbstractTimer):
    """Tweens between a start and an end value, with optional easing."""

    def __init__(self, duration: float = 1.0, engine: Engine | None = None) -> None:
        self._from = 0.0
        self._to = 1.0
        self._value = 0.0
        self._easing: Easing = _ease_none
        self._mode = RampMode.DURATION
        self._finished_state = _FinishState.NOT_FINISHED
        AbstractTimer.__init__(self, duration)
        Unit.__init__(self, engine)

    def get(self) -> float:
        """Returns the current value of the ramp."""
        return self._value

    def put(self, value: float) -> float:
        """Forces the value; a running ramp carries on from it towards its end value."""
        value = float(value)
        if self._mode == RampMode.SPEED:
            self.from_to(value, self._to)
        else:
            p = self.progress()
            if p >= 1.0:
                self.from_to(value, self._to)
            else:
                self.from_to((value - p * self._to) / (1.0 - p), self._to)
        self._value = value
        return self._value

    @property
    def easing(self) -> Easing:
        """The easing function applied to the progress."""
        return self._easing

    @easing.setter
    def easing(self, easing: Easing | None) -> None:
        self._easing = easing if easing is not None else _ease_none

    def no_easing(self) -> None:
        """Removes easing (linear ramp)."""
        self._easing = _ease_none

    @property
    def mode(self) -> RampMode:
        """The ramp mode."""
        return self._mode

    @mode.setter
    def mode(self, mode: RampMode | int) -> None:
        self._mode = RampMode(min(max(int(mode), RampMode.DURATION), RampMode.SPEED))

    @property
    def from_value(self) -> float:
        """The start value."""
        return self._from

    @from_value.setter
    def from_value(self, value: float) -> None:
        self.from_to(value, self._to)

    @property
    def to_value(self) -> float:
        """The end value; setting it makes the ramp start from the current value."""
        return self._to

    @to_value.setter
    def to_value(self, value: float) -> None:
        self.from_to(self._value, value)

    def from_to(self, from_value: float, to_value: float) -> None:
        """Sets the start and end values; in speed mode the speed is kept."""
        if self._mode == RampMode.SPEED:
            current_speed = self.speed
            self._from = float(from_value)
            self._to = float(to_value)
            self.speed = current_speed
        else:
            self._from = float(from_value)
            self._to = float(to_value)

    @property
    def duration(self) -> float:
        """The duration in seconds; setting it switches to duration mode."""
        return self._duration

    @duration.setter
    def duration(self, duration: float) -> None:
        self.mode = RampMode.DURATION
        AbstractTimer.duration.fset(self, duration)

    @property
    def speed(self) -> float:
        """The rate of change per second; setting it switches to speed mode."""
        diff = abs(self._to - self._from)
        if self._duration > 0:
            return diff / self._duration
        if self._to == self._from:
            return 0.0
        return FLT_MAX

    @speed.setter
    def speed(self, speed: float) -> None:
        self.mode = RampMode.SPEED
        diff = abs(self._to - self._from)
        rate = abs(float(speed))
        if rate == 0:
            duration = math.inf if diff else 0.0
        else:
            duration = diff / rate
        AbstractTimer.duration.fset(self, duration)

    def start(self) -> None:
        """Starts or restarts the last ramp."""
        AbstractTimer.start(self)
        self._finished_state = _FinishState.NOT_FINISHED

    def go(
        self,
        to: float,
        duration_or_speed: float | None = None,
        easing: Easing | None = None,
        from_value: float | None = None,
    ) -> None:
        """Starts a new ramp to *to*, from *from_value* or else the current value.

        *duration_or_speed* is read according to the mode; by default the current
        duration or speed is kept.
        """
        if duration_or_speed is None:
            duration_or_speed = self._duration_or_speed()
        self.from_to(self._value if from_value is None else from_value, to)
        if easing is not None:
            self.easing = easing
        self._set_duration_or_speed(duration_or_speed)
        self.start()

    def finished(self) -> bool:
        """Returns True if the ramp finished on this step."""
        return self._finished_state == _FinishState.JUST_FINISHED

    def on_finish(self, callback: EventCallback) -> None:
        """Registers *callback* for the finish event."""
        self.on_event(callback, EventType.FINISH)

    def set(self, time: float) -> None:
        """Forces the elapsed time and recomputes the value."""
        AbstractTimer.set(self, time)
        self._value = self._compute()

    def begin(self) -> None:
        """Resets the elapsed time."""
        self.set(0.0)
        self._finished_state = _FinishState.NOT_FINISHED

    def step(self) -> None:
        """Refreshes the elapsed time and value, and tracks the finish event."""
        self.update()
        if self._is_running:
            self._value = self._compute()

        if self._finished_state == _FinishState.NOT_FINISHED:
            if self.is_finished():
                self._finished_state = _FinishState.JUST_FINISHED
        elif self._finished_state == _FinishState.JUST_FINISHED:
            self._finished_state = (
                _FinishState.POST_FINISHED if self.is_finished() else _FinishState.NOT_FINISHED
            )

    def event_triggered(self, event_type: EventType) -> bool:
        """Returns True on the finish event when the ramp just finished."""
        if event_type == EventType.FINISH:
            return self.finished()
        return super().event_triggered(event_type)

    def _time(self) -> float:
        return self.engine.seconds()

    def _compute(self) -> float:
        return self._from + self._easing(self.progress()) * (self._to - self._from)

    def _set_duration_or_speed(self, duration_or_speed: float) -> None:
        if self._mode == RampMode.DURATION:
            self.duration = duration_or_speed
        else:
            self.speed = duration_or_speed

    def _duration_or_speed(self) -> float:
        return self.duration if self._mode == RampMode.DURATION else self.speed