import statistics

import pytest

from plaquette.moving_average import (
    MovingAverage,
    apply_amend_update,
    apply_update,
    compute_alpha,
)


def test_default_window_is_infinite():
    ma = MovingAverage()
    assert ma.time_window_is_infinite()
    assert ma.cutoff == 0


def test_negative_window_clamped_to_zero():
    ma = MovingAverage(-3.0)
    assert ma.time_window == 0
    assert not ma.time_window_is_infinite()


def test_cutoff_round_trip_and_zero_means_infinite():
    ma = MovingAverage(2.0)
    ma.cutoff = 4.0
    assert ma.cutoff == pytest.approx(4.0)
    ma.cutoff = 0
    assert ma.time_window_is_infinite()


def test_infinite_window_gives_arithmetic_mean():
    values = [3.0, -1.0, 7.5, 2.0, 0.25, 10.0]
    ma = MovingAverage()
    for v in values:
        ma.update(v)
    assert ma.get() == pytest.approx(statistics.mean(values))
    assert ma.n_samples == len(values)


def test_constant_input_stays_constant():
    ma = MovingAverage(0.5)
    for _ in range(50):
        result = ma.update(3.0, sample_rate=100.0)
    assert result == pytest.approx(3.0)
    assert ma.get() == pytest.approx(3.0)


def test_first_sample_has_full_weight():
    assert compute_alpha(10.0, -1.0, 0) == 1.0
    ma = MovingAverage(1.0)
    ma.update(42.0, sample_rate=10.0)
    assert ma.get() == pytest.approx(42.0)


def test_alpha_warm_up_matches_plain_average():
    assert compute_alpha(10.0, 1.0, 3) == pytest.approx(compute_alpha(10.0, -1.0, 3))


def test_alpha_constant_after_warm_up():
    assert compute_alpha(10.0, 1.0, 100) == pytest.approx(compute_alpha(10.0, 1.0, 1000))
    assert compute_alpha(10.0, 1.0) == pytest.approx(compute_alpha(10.0, 1.0, 100))


def test_alpha_capped_when_window_shorter_than_sample():
    assert compute_alpha(1.0, 0.5, 100) == 1.0


def test_apply_update_extremes():
    assert apply_update(5.0, 2.0, 1.0) == pytest.approx(2.0)
    assert apply_update(5.0, 2.0, 0.0) == pytest.approx(5.0)


def test_apply_amend_update_replaces_last_sample():
    running = apply_update(5.0, 2.0, 0.3)
    amended = apply_amend_update(running, 2.0, 7.0, 0.3)
    assert amended == pytest.approx(apply_update(5.0, 7.0, 0.3))


def test_amend_update_method_replaces_last_sample():
    a = MovingAverage()
    b = MovingAverage()
    for v in (1.0, 2.0, 3.0):
        a.update(v)
        b.update(v)
    a.update(4.0, 0.2, force_alpha=True)
    a.amend_update(4.0, 9.0, 0.2, force_alpha=True)
    b.update(9.0, 0.2, force_alpha=True)
    assert a.get() == pytest.approx(b.get())


def test_force_alpha_uses_rate_as_alpha():
    ma = MovingAverage()
    assert ma.update(10.0, 1.0, force_alpha=True) == pytest.approx(10.0)
    assert ma.update(20.0, 0.0, force_alpha=True) == pytest.approx(10.0)


def test_reset_restarts_count_and_next_update_replaces_value():
    ma = MovingAverage()
    ma.update(4.0)
    ma.update(8.0)
    before = ma.get()
    ma.reset()
    assert ma.n_samples == 0
    assert ma.get() == before
    ma.update(-5.0)
    assert ma.get() == pytest.approx(-5.0)