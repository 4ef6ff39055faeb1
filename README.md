# plaquette

Small building blocks for interactive, signal-driven programs. Each unit holds
a value and belongs to an `Engine`. The engine keeps the clock and the sample
rate, steps every registered unit once per loop, and then calls the callbacks
of any events the units raised.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `plaquette.core`
  - `Engine`: registers units (`add`, `remove`), runs `begin()`, `step()` and `end()`, and reports `seconds()`, `n_steps`, `n_units` and `units`. The sample rate follows the measured step rate by default. If you set `sample_rate` or `sample_period`, `step()` sleeps to keep that pace. `enable_auto_sample_rate()` goes back to the measured rate. The clock can be any zero-argument callable; the default is `time.perf_counter`.
  - `default_engine()`: returns the shared engine used by units created without one.
  - `Unit`, `DigitalUnit`, `AnalogSource` and `DigitalSource`: the base classes. They provide `get`, `put`, `map_to`, `on_event` and `clear_events`. Digital units add `is_on`, `on`, `off` and `toggle`, and `DigitalSource` adds `rose`, `fell`, `changed`, `on_rise`, `on_fall` and `on_change`. `value >> unit` and `unit >> other` push values into a unit.
  - `analog_to_digital(value)` is `value >= 0.5`. `digital_to_analog(value)` returns `1.0` or `0.0`.
- `plaquette.events`: `EventType` (`CHANGE`, `RISE`, `FALL`, `BANG`, `FINISH`) and `EventManager`, which keeps the listeners.
- `plaquette.moving_average`: `MovingAverage`, an exponential moving average. A time window of `None` means an infinite window. Also provides the functions `apply_update`, `apply_amend_update` and `compute_alpha`.
- `plaquette.moving_stats`: `MovingStats`, a moving mean, variance and standard deviation, with `normalize`, `is_outlier`, `is_low_outlier` and `is_high_outlier`.
- `plaquette.chronometer`: `AbstractChronometer` and the `Chronometer` unit. Both support `start`, `stop`, `pause`, `resume`, `toggle_pause`, `set`, `add`, `elapsed` and `has_passed`.
- `plaquette.timer`: `AbstractTimer`, a chronometer with a `duration`, `progress()`, `is_finished()` and `map_to`.
- `plaquette.alarm`: `Alarm`, a digital unit that turns on once its duration has elapsed. `on_finish` registers a callback.
- `plaquette.peak_detector`: `PeakDetector` with `PeakMode` (`RISING`, `FALLING`, `MAX`, `MIN`). It has a trigger threshold, a reload threshold and a fallback tolerance. `on_bang` registers a callback for detections. In the inverted modes (`FALLING`, `MIN`) the thresholds are stored and reported negated.
- `plaquette.ramp`: `Ramp` with `RampMode` (`DURATION`, `SPEED`). It tweens between `from_value` and `to_value`. `go(to, duration_or_speed=None, easing=None, from_value=None)` starts a new ramp, and `finished()` / `on_finish` report when it ends. An easing is any function from [0, 1] to a number; without one the ramp is linear.
- `plaquette.moving_filter`: `MovingFilter`, the base of the adaptive filters. Calibration can be paused, resumed or toggled.
- `plaquette.min_max_scaler`: `MinMaxScaler`, which rescales values into [0, 1] from the minimum and maximum seen. With a finite time window, both decay toward recent values.
- `plaquette.normalizer`: `Normalizer`, which rescales values to a target mean and standard deviation. The defaults are 0.5 and 0.15. The output is clamped by default (`clamp`, `no_clamp`), and outlier thresholds are available.
- `plaquette.oscilloscope`: `OscilloscopeOut`, which writes each value as a text bar to a stream (stdout by default).
- `plaquette.inputs`: the `Smoothable` and `Debounceable` bases and `DebounceMode` (`STABLE`, `LOCK_OUT`, `PROMPT_DETECT`). Subclasses supply `_read()` or `_is_on()`, then call `reset_smoothing`/`update_smoothing` or `reset_debouncing`/`update_debouncing` from their `begin`/`step`.

## Example

```python
from plaquette.core import Engine
from plaquette.normalizer import Normalizer
from plaquette.peak_detector import PeakDetector, PeakMode

engine = Engine()
normalizer = Normalizer(engine=engine)
detector = PeakDetector(0.7, PeakMode.MAX, engine=engine)
detector.on_bang(lambda: print("peak!"))

engine.begin()
for sample in [0.1, 0.2, 0.9, 1.4, 0.8, 0.3]:
    engine.step()
    detector.put(normalizer.put(sample))
engine.end()
```

Event callbacks run inside `Engine.step()`, after every unit has been stepped.
A detection made by `put()` is therefore reported on the next step.

## What the package does not do

The package does not read from or write to any hardware: it has no pin, PWM or
servo units. `Smoothable` and `Debounceable` provide only the smoothing and
debouncing logic. Where the raw readings come from is up to your subclass. The
package has no library of easing curves either; pass your own functions to
`Ramp`. It provides no command-line tool.