"""The engine that steps units, and the base unit classes."""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from typing import Callable, Iterable

from .events import EventCallback, EventManager, EventType

FLT_MAX = 3.4028234663852886e38
FLT_MIN = 1.1754943508222875e-38

Clock = Callable[[], float]


def analog_to_digital(value: float) -> bool:
    """Converts an analog value to a digital one (on when at least 0.5)."""
    return value >= 0.5


def digital_to_analog(value: bool) -> float:
    """Converts a digital value to 1.0 (on) or 0.0 (off)."""
    return float(bool(value))


def _constrain(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def _map_from01(value: float, to_low: float, to_high: float) -> float:
    return to_low + value * (to_high - to_low)


class Engine:
    """Holds units, steps them in order and keeps track of time and sample rate."""

    def __init__(self, clock: Clock | None = None) -> None:
        self._clock: Clock = clock if clock is not None else time.perf_counter
        self._origin = self._clock()
        self._reference = self._origin
        self._units: list[Unit] = []
        self._pending: list[Unit] = []
        self._events = EventManager()
        self._sample_rate = 0.0
        self._sample_period = math.inf
        self._target_sample_rate = 0.0
        self._n_steps = 0
        self._begin_completed = False
        self._first_run = True

    @property
    def events(self) -> EventManager:
        """The registry of event listeners."""
        return self._events

    @property
    def n_units(self) -> int:
        """Number of registered units."""
        return len(self._units)

    @property
    def units(self) -> tuple[Unit, ...]:
        """The registered units, in order."""
        return tuple(self._units)

    @property
    def n_steps(self) -> int:
        """Number of steps completed since begin()."""
        return self._n_steps

    @property
    def auto_sample_rate(self) -> bool:
        """True when the sample rate follows the measured step rate."""
        return self._target_sample_rate <= 0

    @property
    def sample_rate(self) -> float:
        """Current sample rate in Hz."""
        return self._sample_rate

    @sample_rate.setter
    def sample_rate(self, rate: float) -> None:
        self._target_sample_rate = max(float(rate), FLT_MIN)

    @property
    def sample_period(self) -> float:
        """Current sample period in seconds."""
        return self._sample_period

    @sample_period.setter
    def sample_period(self, period: float) -> None:
        if period > 0:
            self.sample_rate = 1.0 / period
        else:
            self.enable_auto_sample_rate()

    def enable_auto_sample_rate(self) -> None:
        """Lets the sample rate follow the measured step rate (the default)."""
        self._target_sample_rate = 0.0

    def begin(self) -> None:
        """Resets timing and calls begin() on every unit."""
        self._reference = self._clock()
        self._target_sample_rate = 0.0
        self._n_steps = 0
        self._first_run = True
        self._set_sample_rate(FLT_MAX)
        self._pending.clear()
        for unit in list(self._units):
            unit.begin()
        self._begin_completed = True

    def step(self) -> None:
        """Advances time, steps every unit and fires triggered events."""
        self._advance()
        self._pre_step()

    def end(self) -> None:
        """Closes the current step; needed only when the loop stops."""
        self._advance()

    def add(self, unit: Unit) -> None:
        """Registers *unit*; once begun, its begin() runs before the next step."""
        if any(existing is unit for existing in self._units):
            return
        self._units.append(unit)
        if self._begin_completed:
            self._pending.append(unit)

    def remove(self, unit: Unit) -> None:
        """Unregisters *unit* if it is registered."""
        self._units = [u for u in self._units if u is not unit]
        self._pending = [u for u in self._pending if u is not unit]

    def seconds(self, reference_time: bool = True) -> float:
        """Returns the time of the current step, or the real time, in seconds."""
        now = self._reference if reference_time else self._clock()
        return now - self._origin

    def _advance(self) -> None:
        if self._first_run:
            self._reference = self._clock()
            self._first_run = False
        else:
            self._post_step()

    def _pre_step(self) -> None:
        pending, self._pending = self._pending, []
        for unit in pending:
            unit.begin()
        for unit in list(self._units):
            unit.step()
        self._events.step()

    def _post_step(self) -> None:
        self._n_steps += 1
        now = self._clock()
        diff = now - self._reference
        true_rate = 1.0 / diff if diff > 0 else FLT_MAX
        if self.auto_sample_rate or true_rate < self._target_sample_rate:
            self._set_sample_rate(true_rate)
            self._reference = now
        else:
            target_time = self._reference + 1.0 / self._target_sample_rate
            remaining = target_time - self._clock()
            if remaining > 0:
                time.sleep(remaining)
            self._set_sample_rate(self._target_sample_rate)
            self._reference = target_time

    def _set_sample_rate(self, rate: float) -> None:
        self._sample_rate = max(rate, FLT_MIN)
        self._sample_period = 1.0 / self._sample_rate


_default_engine: Engine | None = None


def default_engine() -> Engine:
    """Returns the shared engine used by units created without one."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Engine()
    return _default_engine


class Unit(ABC):
    """A component registered with an engine; read with get(), written with put()."""

    def __init__(self, engine: Engine | None = None) -> None:
        self._engine = engine if engine is not None else default_engine()
        self._engine.add(self)

    @property
    def engine(self) -> Engine:
        """The engine this unit belongs to."""
        return self._engine

    @property
    def sample_rate(self) -> float:
        """The sample rate of this unit's engine."""
        return self._engine.sample_rate

    def begin(self) -> None:
        """Called when the engine begins."""

    def step(self) -> None:
        """Called on every engine step."""

    @abstractmethod
    def get(self) -> float:
        """Returns the unit's value."""

    def put(self, value: float) -> float:
        """Pushes *value* into the unit and returns its new value (read-only here)."""
        return self.get()

    def map_to(self, to_low: float, to_high: float) -> float:
        """Maps the value to a new range; unbounded units return get()."""
        return self.get()

    def clear_events(self) -> None:
        """Removes every event listener on this unit."""
        self._engine.events.clear_listeners(self)

    def on_event(self, callback: EventCallback, event_type: EventType) -> None:
        """Registers *callback* for *event_type* on this unit."""
        self._engine.events.add_listener(self, callback, event_type)

    def event_triggered(self, event_type: EventType) -> bool:
        """Returns True if *event_type* is triggered on this step."""
        return any(
            check() for kind, check in self._event_checks() if kind == event_type
        )

    def _event_checks(self) -> Iterable[tuple[EventType, Callable[[], bool]]]:
        # A plain unit triggers no events of its own.
        return ()

    def __float__(self) -> float:
        return float(self.get())

    def __bool__(self) -> bool:
        return analog_to_digital(self.get())

    def __rshift__(self, sink: Unit) -> Unit:
        if not isinstance(sink, Unit):
            return NotImplemented
        sink.put(self.get())
        return sink

    def __rrshift__(self, value: float | bool) -> Unit:
        if isinstance(value, bool):
            value = digital_to_analog(value)
        self.put(float(value))
        return self


class DigitalUnit(Unit):
    """A unit holding an on/off value."""

    @abstractmethod
    def is_on(self) -> bool:
        """Returns True if the unit is on."""

    def is_off(self) -> bool:
        """Returns True if the unit is off."""
        return not self.is_on()

    def get_int(self) -> int:
        """Returns 1 when on, 0 when off."""
        return 1 if self.is_on() else 0

    def get(self) -> float:
        """Returns 1.0 when on, 0.0 when off."""
        return float(self.get_int())

    def on(self) -> bool:
        """Switches the unit on."""
        return self.put_on(True)

    def off(self) -> bool:
        """Switches the unit off."""
        return self.put_on(False)

    def put(self, value: float) -> float:
        """Pushes an analog value, converted to on/off."""
        return digital_to_analog(self.put_on(analog_to_digital(value)))

    def put_on(self, value: bool) -> bool:
        """Pushes an on/off value (read-only here) and returns the state."""
        return self.is_on()

    def map_to(self, to_low: float, to_high: float) -> float:
        """Returns *to_low* when off and *to_high* when on."""
        return _map_from01(self.get(), to_low, to_high)

    def __bool__(self) -> bool:
        return self.is_on()


class AnalogSource(Unit):
    """A unit holding an analog value, normally in [0, 1]."""

    def __init__(self, initial_value: float = 0.0, engine: Engine | None = None) -> None:
        super().__init__(engine)
        self._value = _constrain(float(initial_value), 0.0, 1.0)

    def get(self) -> float:
        """Returns the value."""
        return self._value

    def map_to(self, to_low: float, to_high: float) -> float:
        """Maps the value from [0, 1] to [to_low, to_high]."""
        return _map_from01(self.get(), to_low, to_high)


class DigitalSource(DigitalUnit):
    """A digital unit that remembers how its value last changed."""

    def __init__(self, initial_value: bool = False, engine: Engine | None = None) -> None:
        super().__init__(engine)
        self._on_value = bool(initial_value)
        self._change_state = 0

    def is_on(self) -> bool:
        """Returns True if the unit is on."""
        return self._on_value

    def rose(self) -> bool:
        """Returns True if the value last went from off to on."""
        return self.change_state() > 0

    def fell(self) -> bool:
        """Returns True if the value last went from on to off."""
        return self.change_state() < 0

    def changed(self) -> bool:
        """Returns True if the value last changed."""
        return self.change_state() != 0

    def toggle(self) -> bool:
        """Switches between on and off."""
        return self.put_on(not self.is_on())

    def change_state(self) -> int:
        """Returns 1 after a rise, -1 after a fall and 0 otherwise."""
        return self._change_state

    def on_rise(self, callback: EventCallback) -> None:
        """Registers *callback* for rise events."""
        self.on_event(callback, EventType.RISE)

    def on_fall(self, callback: EventCallback) -> None:
        """Registers *callback* for fall events."""
        self.on_event(callback, EventType.FALL)

    def on_change(self, callback: EventCallback) -> None:
        """Registers *callback* for change events."""
        self.on_event(callback, EventType.CHANGE)

    def event_triggered(self, event_type: EventType) -> bool:
        """Returns True if a change, rise or fall event is triggered."""
        if event_type == EventType.CHANGE:
            return self.changed()
        if event_type == EventType.RISE:
            return self.rose()
        if event_type == EventType.FALL:
            return self.fell()
        return super().event_triggered(event_type)

    def _set_on(self, new_on_value: bool) -> None:
        new_on_value = bool(new_on_value)
        self._change_state = int(new_on_value) - int(self._on_value)
        self._on_value = new_on_value