import pytest

from plaquette.chronometer import Chronometer
from plaquette.core import Engine


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def setup():
    clock = FakeClock()
    engine = Engine(clock)
    chrono = Chronometer(engine)
    engine.begin()
    return clock, engine, chrono


def test_begin_leaves_chronometer_stopped(setup):
    _, _, chrono = setup
    assert not chrono.is_running()
    assert chrono.get() == 0.0


def test_elapsed_follows_clock(setup):
    clock, engine, chrono = setup
    chrono.start()
    clock.now = 1.5
    engine.step()
    assert chrono.is_running()
    assert chrono.elapsed() == pytest.approx(1.5)
    assert float(chrono) == pytest.approx(1.5)


def test_stopped_chronometer_does_not_advance(setup):
    clock, engine, chrono = setup
    clock.now = 2.0
    engine.step()
    assert chrono.elapsed() == 0.0


def test_pause_freezes_and_resume_continues(setup):
    clock, engine, chrono = setup
    chrono.start()
    clock.now = 1.0
    engine.step()
    chrono.pause()
    frozen = chrono.elapsed()
    clock.now = 4.0
    engine.step()
    assert not chrono.is_running()
    assert chrono.elapsed() == frozen
    chrono.resume()
    clock.now = 5.0
    engine.step()
    assert chrono.elapsed() == pytest.approx(frozen + 1.0)


def test_toggle_pause_flips_running_state(setup):
    _, _, chrono = setup
    chrono.start()
    chrono.toggle_pause()
    assert not chrono.is_running()
    chrono.toggle_pause()
    assert chrono.is_running()


def test_stop_resets_to_zero(setup):
    clock, engine, chrono = setup
    chrono.start()
    clock.now = 3.0
    engine.step()
    chrono.stop()
    clock.now = 6.0
    engine.step()
    assert not chrono.is_running()
    assert chrono.elapsed() == 0.0


def test_put_sets_time(setup):
    _, _, chrono = setup
    assert chrono.put(3.25) == 3.25
    assert chrono.elapsed() == 3.25


def test_add_and_subtract_round_trip(setup):
    _, _, chrono = setup
    chrono.set(2.0)
    chrono.add(0.75)
    assert chrono.elapsed() == pytest.approx(2.75)
    chrono.add(-0.75)
    assert chrono.elapsed() == pytest.approx(2.0)


def test_has_passed(setup):
    _, _, chrono = setup
    chrono.set(2.0)
    assert chrono.has_passed(1.0)
    assert chrono.has_passed(2.0)
    assert not chrono.has_passed(5.0)


def test_set_while_running_keeps_offset(setup):
    clock, engine, chrono = setup
    chrono.start()
    chrono.set(10.0)
    clock.now = 2.0
    engine.step()
    assert chrono.elapsed() == pytest.approx(12.0)