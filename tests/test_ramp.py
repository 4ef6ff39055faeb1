import math

import pytest

from plaquette.core import Engine
from plaquette.ramp import Ramp, RampMode


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def setup():
    clock = FakeClock()
    engine = Engine(clock)
    ramp = Ramp(1.0, engine)
    engine.begin()
    return clock, engine, ramp


def test_go_reaches_target(setup):
    clock, engine, ramp = setup
    ramp.go(10.0, 2.0)
    assert ramp.get() == 0.0
    clock.now = 1.0
    engine.step()
    assert ramp.get() == pytest.approx(5.0)
    assert ramp.is_finished() is False
    clock.now = 2.0
    engine.step()
    assert ramp.get() == pytest.approx(10.0)
    assert ramp.is_finished() is True


def test_finished_only_on_finishing_step(setup):
    clock, engine, ramp = setup
    calls = []
    ramp.on_finish(lambda: calls.append(True))
    ramp.go(10.0, 1.0)
    results = []
    for t in (0.5, 1.0, 1.5, 2.0):
        clock.now = t
        engine.step()
        results.append(ramp.finished())
    assert results == [False, True, False, False]
    assert len(calls) == 1


def test_speed_sets_mode_and_duration(setup):
    _, _, ramp = setup
    ramp.from_to(0.0, 10.0)
    ramp.speed = 5.0
    assert ramp.mode == RampMode.SPEED
    assert ramp.duration == pytest.approx(2.0)
    assert ramp.speed == pytest.approx(5.0)


def test_duration_switches_back_to_duration_mode(setup):
    _, _, ramp = setup
    ramp.from_to(0.0, 10.0)
    ramp.speed = 5.0
    ramp.duration = 3.0
    assert ramp.mode == RampMode.DURATION
    assert ramp.duration == 3.0


def test_from_to_in_speed_mode_keeps_speed(setup):
    _, _, ramp = setup
    ramp.from_to(0.0, 10.0)
    ramp.speed = 5.0
    before = ramp.duration
    ramp.from_to(0.0, 20.0)
    assert ramp.speed == pytest.approx(5.0)
    assert ramp.duration > before


def test_zero_speed(setup):
    _, _, ramp = setup
    ramp.from_to(0.0, 10.0)
    ramp.speed = 0.0
    assert ramp.duration == math.inf
    ramp.from_to(3.0, 3.0)
    ramp.duration = 0.0
    assert ramp.speed == 0.0


def test_negative_duration_clamped(setup):
    _, _, ramp = setup
    ramp.duration = -2.0
    assert ramp.duration == 0.0


def test_put_mid_ramp_continues_to_target(setup):
    clock, engine, ramp = setup
    ramp.go(10.0, 2.0)
    clock.now = 1.0
    engine.step()
    assert ramp.put(3.0) == 3.0
    assert ramp.get() == 3.0
    engine.step()
    assert ramp.get() == pytest.approx(3.0)
    clock.now = 2.0
    engine.step()
    assert ramp.get() == pytest.approx(10.0)


def test_put_in_speed_mode_sets_start(setup):
    _, _, ramp = setup
    ramp.from_to(0.0, 10.0)
    ramp.speed = 5.0
    ramp.put(4.0)
    assert ramp.from_value == 4.0
    assert ramp.to_value == 10.0
    assert ramp.get() == 4.0


def test_easing_is_applied(setup):
    clock, engine, ramp = setup
    ramp.go(10.0, 2.0, easing=lambda p: 0.0)
    clock.now = 1.0
    engine.step()
    assert ramp.get() == 0.0
    ramp.no_easing()
    clock.now = 2.0
    engine.step()
    assert ramp.get() == pytest.approx(10.0)


def test_mode_is_clamped(setup):
    _, _, ramp = setup
    ramp.mode = 5
    assert ramp.mode == RampMode.SPEED


def test_pause_freezes_value(setup):
    clock, engine, ramp = setup
    ramp.go(10.0, 2.0)
    clock.now = 1.0
    engine.step()
    frozen = ramp.get()
    ramp.pause()
    clock.now = 3.0
    engine.step()
    assert ramp.get() == frozen
    assert ramp.is_finished() is False


def test_start_restarts_from_start_value(setup):
    clock, engine, ramp = setup
    ramp.go(10.0, 1.0)
    clock.now = 2.0
    engine.step()
    ramp.start()
    assert ramp.get() == ramp.from_value
    assert ramp.is_running() is True


def test_go_with_explicit_start(setup):
    _, _, ramp = setup
    ramp.go(20.0, 1.0, from_value=5.0)
    assert ramp.get() == 5.0
    assert ramp.from_value == 5.0
    assert ramp.to_value == 20.0


def test_go_keeps_duration_when_omitted(setup):
    _, _, ramp = setup
    ramp.go(10.0, 4.0)
    ramp.go(0.0)
    assert ramp.duration == 4.0
    assert ramp.to_value == 0.0


def test_to_value_starts_from_current_value(setup):
    _, _, ramp = setup
    ramp.put(0.0)
    ramp.go(7.0, 1.0, from_value=2.0)
    ramp.to_value = 9.0
    assert ramp.from_value == ramp.get()
    assert ramp.to_value == 9.0