"""Event types and the listener registry that fires callbacks on unit events."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable

EventCallback = Callable[[], Any]


class EventType(IntEnum):
    """Kinds of events a unit can emit."""

    NONE = 0
    CHANGE = 1
    RISE = 2
    FALL = 3
    BANG = 4
    FINISH = 5


@dataclass(frozen=True)
class _Listener:
    unit: Any
    callback: EventCallback
    event_type: EventType


class EventManager:
    """Keeps (unit, callback, event type) listeners and fires them on each step."""

    def __init__(self) -> None:
        self._listeners: list[_Listener] = []

    def __len__(self) -> int:
        return len(self._listeners)

    def add_listener(self, unit: Any, callback: EventCallback, event_type: EventType) -> None:
        """Registers *callback* to be called when *unit* triggers *event_type*."""
        self._listeners.append(_Listener(unit, callback, EventType(event_type)))

    def clear_listeners(self, unit: Any) -> None:
        """Removes every listener attached to *unit*."""
        self._listeners = [listener for listener in self._listeners if listener.unit is not unit]

    def step(self) -> None:
        """Calls the callback of every listener whose event has been triggered."""
        for listener in self._listeners:
            if listener.unit.event_triggered(listener.event_type):
                listener.callback()