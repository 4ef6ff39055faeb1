"""Chronometers that measure elapsed time and can be paused and resumed."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .core import Engine, Unit


class AbstractChronometer(ABC):
    """Measures elapsed time against a clock that subclasses provide."""

    def __init__(self) -> None:
        self._start_time = 0.0
        self._offset_time = 0.0
        self._elapsed_time = 0.0
        self._is_running = False

    @abstractmethod
    def _time(self) -> float:
        """Returns the current absolute time in seconds."""

    def start(self) -> None:
        """Starts or restarts the chronometer from zero."""
        self.set(0.0)
        self._is_running = True

    def stop(self) -> None:
        """Stops the chronometer and resets it to zero."""
        self.set(0.0)
        self._is_running = False

    def pause(self) -> None:
        """Interrupts the chronometer, keeping the elapsed time."""
        if self._is_running:
            self._offset_time = self.elapsed()
            self._is_running = False

    def resume(self) -> None:
        """Resumes the chronometer after a pause."""
        if not self._is_running:
            self._start_time = self._time()
            self._is_running = True

    def toggle_pause(self) -> None:
        """Pauses if running, resumes otherwise."""
        if self._is_running:
            self.pause()
        else:
            self.resume()

    def elapsed(self) -> float:
        """Returns the elapsed time in seconds."""
        return self._elapsed_time

    def has_passed(self, timeout: float) -> bool:
        """Returns True if the elapsed time has reached *timeout*."""
        return self.elapsed() >= timeout

    def set(self, time: float) -> None:
        """Forces the elapsed time to *time* seconds."""
        self._elapsed_time = self._offset_time = float(time)
        self._start_time = self._time()

    def add(self, time: float) -> None:
        """Adds (or, if negative, subtracts) *time* seconds."""
        self.set(self._elapsed_time + time)

    def is_running(self) -> bool:
        """Returns True if the chronometer is running."""
        return self._is_running

    def update(self) -> None:
        """Refreshes the elapsed time from the clock."""
        self._elapsed_time = self._offset_time
        if self._is_running:
            self._elapsed_time += self._time() - self._start_time


class Chronometer(Unit, AbstractChronometer):
    """A unit whose value is the time elapsed since it started, in seconds."""

    def __init__(self, engine: Engine | None = None) -> None:
        AbstractChronometer.__init__(self)
        Unit.__init__(self, engine)

    def get(self) -> float:
        """Returns the elapsed time in seconds."""
        return self.elapsed()

    def put(self, value: float) -> float:
        """Sets the elapsed time and returns it."""
        self.set(value)
        return self.get()

    def begin(self) -> None:
        """Stops and resets the chronometer."""
        self.stop()

    def step(self) -> None:
        """Refreshes the elapsed time."""
        self.update()

    def _time(self) -> float:
        return self.engine.seconds()