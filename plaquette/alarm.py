"""A timer unit that switches on once its duration has elapsed."""

from __future__ import annotations

from .core import DigitalSource, Engine
from .events import EventCallback, EventType
from .timer import AbstractTimer


class Alarm(DigitalSource, AbstractTimer):
    """Becomes on after a given duration."""

    def __init__(self, duration: float = 1.0, engine: Engine | None = None) -> None:
        DigitalSource.__init__(self, False, engine)
        AbstractTimer.__init__(self, duration)

    def finished(self) -> bool:
        """Returns True if the alarm went off on this step."""
        return self.rose()

    def on_finish(self, callback: EventCallback) -> None:
        """Registers *callback* for the finish event."""
        self.on_event(callback, EventType.FINISH)

    def set(self, time: float) -> None:
        """Forces the elapsed time and updates the on state."""
        super().set(time)
        self._set_on(self.is_finished())

    def begin(self) -> None:
        """Resets the elapsed time."""
        self.set(0.0)

    def step(self) -> None:
        """Refreshes the elapsed time and, while running, the on state."""
        self.update()
        if self._is_running:
            self._set_on(self.is_finished())

    def event_triggered(self, event_type: EventType) -> bool:
        """Returns True if the finish event, or a digital event, is triggered."""
        if event_type == EventType.FINISH:
            return self.finished()
        return super().event_triggered(event_type)

    def _time(self) -> float:
        return self.engine.seconds()