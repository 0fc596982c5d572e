"""
Coefficient generators for the recursive filter.

Both functions return ``(denominators, numerators)``. Callers that keep their
own coefficient lists can pass them in; their contents are replaced in place
and the same list objects are returned.
"""
import logging
import math
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

Coefficients = Tuple[List[float], List[float]]


def _replace(target: Optional[List[float]], values: List[float]) -> List[float]:
    if target is None:
        return values
    target[:] = values
    return target


def lpf_coefficients(
    ts: float,
    cutoff_freq: float,
    denominators: Optional[List[float]] = None,
    numerators: Optional[List[float]] = None,
) -> Coefficients:
    """Second-order low-pass coefficients from a bilinear-transform design.

    Args:
        ts (float): Sampling period [s], must be positive.
        cutoff_freq (float): Cutoff frequency [Hz].

    Returns:
        (denominators, numerators), each of length 3.
    """
    wa = 2.0 * math.pi * cutoff_freq  # analog frequency in rad/s
    alpha = wa * ts / 2.0  # tan(wd / 2) approximation
    alpha_sqr = alpha * alpha
    tmp_term = math.sqrt(2.0) * alpha + alpha_sqr
    gain = alpha_sqr / (1.0 + tmp_term)

    den = [
        1.0,
        2.0 * (alpha_sqr - 1.0) / (1.0 + tmp_term),
        (1.0 - math.sqrt(2.0) * alpha + alpha_sqr) / (1.0 + tmp_term),
    ]
    num = [gain, 2.0 * gain, gain]
    return _replace(denominators, den), _replace(numerators, num)


def lp_first_order_coefficients(
    ts: float,
    settling_time: float,
    dead_time: float,
    denominators: Optional[List[float]] = None,
    numerators: Optional[List[float]] = None,
) -> Coefficients:
    """First-order low-pass coefficients delayed by a pure dead time.

    The dead time is encoded as ``floor(dead_time / ts)`` leading zero taps in
    the numerators. A zero settling time gives a pure delay with unit gain.

    Invalid parameters (``ts <= 0`` or a negative time) are logged and the
    output lists are returned untouched; nothing is raised.
    """
    if denominators is None:
        denominators = []
    if numerators is None:
        numerators = []

    if ts <= 0.0 or settling_time < 0.0 or dead_time < 0.0:
        logger.error(
            "time cannot be negative: ts=%s settling_time=%s dead_time=%s",
            ts, settling_time, dead_time,
        )
        return denominators, numerators

    k_d = int(math.floor(dead_time / ts))
    if settling_time == 0.0:
        a_term = 0.0
    else:
        a_term = math.exp(-ts / settling_time)

    denominators[:] = [1.0, -a_term]
    numerators[:] = [0.0] * k_d + [1.0 - a_term]
    return denominators, numerators
