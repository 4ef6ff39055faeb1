"""Draws a signal as a line of text per value."""

from __future__ import annotations

import math
import sys
from typing import TextIO

from .core import AnalogSource, Engine


def _round_half_away(value: float) -> int:
    return int(math.floor(abs(value) + 0.5)) * (1 if value >= 0 else -1)


def _map_to01(value: float, low: float, high: float) -> float:
    if low == high:
        return 0.5
    return (value - low) / (high - low)


class OscilloscopeOut(AnalogSource):
    """Writes each value put into it as a text bar of *precision* columns."""

    def __init__(
        self,
        min_value: float = 0.0,
        max_value: float = 1.0,
        precision: int = 100,
        stream: TextIO | None = None,
        engine: Engine | None = None,
    ) -> None:
        if not 0 <= precision <= 255:
            raise ValueError(f"precision must be in [0, 255], got {precision}")
        super().__init__(0.0, engine)
        self._min_value = float(min_value)
        self._max_value = float(max_value)
        self._precision = int(precision)
        self._stream = stream

    @property
    def precision(self) -> int:
        """Number of columns in the bar."""
        return self._precision

    def put(self, value: float) -> float:
        """Writes *value* as a bar and returns it unchanged."""
        self._value = float(value)
        mapped = _map_to01(self._value, self._min_value, self._max_value)
        column = _round_half_away(mapped * self._precision)
        column = min(max(column, 0), self._precision - 1)
        bar = "".join("*" if i == column else " " for i in range(self._precision))
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(f"{self._min_value:.2f} |{bar}| {self._max_value:.2f}\n")
        return self._value