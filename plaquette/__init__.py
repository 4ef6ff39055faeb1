"""Signal-processing units driven by a stepping engine: chronometers, alarms, ramps, peak detection, filters and smoothing."""

__version__ = "0.1.0"