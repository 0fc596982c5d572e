import logging
import math

import pytest

from digifilter import lpf_coefficients, lp_first_order_coefficients


def test_lpf_coefficients_known_values():
    den, num = lpf_coefficients(ts=1.0, cutoff_freq=1.0 / (2.0 * math.pi))
    assert den == pytest.approx([1.0, -0.767, 0.278], abs=1e-3)
    assert num == pytest.approx([0.128, 0.255, 0.128], abs=1e-3)


def test_lpf_unity_dc_gain():
    den, num = lpf_coefficients(ts=0.01, cutoff_freq=5.0)
    assert sum(num) / sum(den) == pytest.approx(1.0)


def test_lpf_replaces_supplied_lists():
    den, num = [9.0], [9.0, 9.0, 9.0, 9.0]
    out_den, out_num = lpf_coefficients(0.02, 2.0, den, num)
    assert out_den is den and out_num is num
    assert len(den) == 3 and len(num) == 3
    assert den[0] == 1.0


def test_first_order_dead_time_taps():
    den, num = lp_first_order_coefficients(ts=0.1, settling_time=0.0, dead_time=0.2)
    assert den == [1.0, -0.0]
    assert den == [1.0, 0.0]
    assert num == [0.0, 0.0, 1.0]


def test_first_order_exponential_pole():
    den, num = lp_first_order_coefficients(ts=0.1, settling_time=1.0, dead_time=0.0)
    a = math.exp(-0.1)
    assert den == pytest.approx([1.0, -a])
    assert num == pytest.approx([1.0 - a])


@pytest.mark.parametrize("ts, settling_time, dead_time", [
    (-1.0, 1.0, 0.0),
    (0.0, 1.0, 0.0),
    (0.1, -1.0, 0.0),
    (0.1, 1.0, -0.5),
])
def test_first_order_invalid_is_noop(ts, settling_time, dead_time, caplog):
    d0, n0 = [1.0, -0.5], [0.0, 0.5]
    den, num = list(d0), list(n0)
    with caplog.at_level(logging.ERROR, logger="digifilter.coefficients"):
        out_den, out_num = lp_first_order_coefficients(ts, settling_time, dead_time, den, num)
    assert den == d0 and num == n0
    assert out_den is den and out_num is num
    assert "time cannot be negative" in caplog.text


def test_first_order_invalid_without_outputs_returns_empty():
    den, num = lp_first_order_coefficients(-1.0, 1.0, 0.0)
    assert den == [] and num == []
