import pytest

from plaquette.core import FLT_MAX, Engine
from plaquette.min_max_scaler import MinMaxScaler
from plaquette.moving_filter import INFINITE_TIME_WINDOW


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_initial_state():
    scaler = MinMaxScaler(engine=Engine())
    assert scaler.get() == 0.5
    assert scaler.min_value == FLT_MAX
    assert scaler.max_value == -FLT_MAX
    assert scaler.time_window_is_infinite() is True
    assert scaler.time_window == INFINITE_TIME_WINDOW


def test_first_value_maps_to_middle():
    scaler = MinMaxScaler(engine=Engine())
    assert scaler.put(3.0) == 0.5
    assert scaler.min_value == 3.0
    assert scaler.max_value == 3.0


def test_rescales_between_min_and_max():
    scaler = MinMaxScaler(engine=Engine())
    scaler.put(0.0)
    assert scaler.put(10.0) == 1.0
    assert scaler.put(0.0) == 0.0
    assert scaler.put(5.0) == pytest.approx(0.5)
    assert scaler.min_value == 0.0
    assert scaler.max_value == 10.0


def test_output_stays_in_unit_range():
    scaler = MinMaxScaler(engine=Engine())
    for v in [4.0, -2.0, 7.5, 100.0, -50.0, 3.3]:
        out = scaler.put(v)
        assert 0.0 <= out <= 1.0


def test_paused_calibration_clamps_and_keeps_bounds():
    scaler = MinMaxScaler(engine=Engine())
    scaler.put(0.0)
    scaler.put(10.0)
    scaler.pause_calibrating()
    assert scaler.put(20.0) == 1.0
    assert scaler.put(-5.0) == 0.0
    assert scaler.min_value == 0.0
    assert scaler.max_value == 10.0


def test_reset_forgets_bounds():
    scaler = MinMaxScaler(engine=Engine())
    scaler.put(1.0)
    scaler.put(2.0)
    scaler.reset()
    assert scaler.min_value == FLT_MAX
    assert scaler.max_value == -FLT_MAX
    assert scaler.get() == 0.5


def test_negative_time_window_is_clamped_to_zero():
    scaler = MinMaxScaler(engine=Engine())
    scaler.time_window = -3.0
    assert scaler.time_window == 0.0
    assert scaler.time_window_is_infinite() is False


def test_cutoff_round_trip():
    scaler = MinMaxScaler(engine=Engine())
    scaler.cutoff = 2.0
    assert scaler.cutoff == pytest.approx(2.0)


def _run_decay(time_window):
    clock = FakeClock()
    engine = Engine(clock)
    scaler = MinMaxScaler(time_window, engine)
    engine.begin()
    engine.step()
    scaler.put(0.0)
    scaler.put(10.0)
    clock.now = 1.0
    engine.step()
    return scaler


def test_finite_window_decays_towards_recent_values():
    scaler = _run_decay(4.0)
    assert 0.0 < scaler.min_value < 5.0
    assert 5.0 < scaler.max_value < 10.0


def test_infinite_window_keeps_bounds():
    scaler = _run_decay(None)
    assert scaler.min_value == 0.0
    assert scaler.max_value == 10.0


def test_step_without_values_does_nothing():
    clock = FakeClock()
    engine = Engine(clock)
    scaler = MinMaxScaler(1.0, engine)
    engine.begin()
    engine.step()
    clock.now = 1.0
    engine.step()
    assert scaler.min_value == FLT_MAX
    assert scaler.max_value == -FLT_MAX