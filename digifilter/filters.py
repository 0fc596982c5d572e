import logging
import numpy as np
from typing import Iterable

from .coefficients import lpf_coefficients, lp_first_order_coefficients
from .utils import ArrayLike, as_vector, readonly, shift_in

logger = logging.getLogger(__name__)

DOUBLE_EPSILON = 1.0e-6


class DigitalFilter:
    """Recursive (IIR) filter for a single scalar signal.

    Implements the difference equation

        a[0] * y[n] = sum_i b[i] * x[n-i] - sum_{i>=1} a[i] * y[n-i]

    where ``a`` are the denominators and ``b`` the numerators. The value
    handed back to the caller passes through a dead zone: changes smaller than
    ``dead_zone`` relative to the last reported value are suppressed. The
    recursion itself always feeds back the unclamped output.
    """

    def __init__(
        self,
        denominators: ArrayLike = (),
        numerators: ArrayLike = (),
        dead_zone: float = 0.0,
    ):
        self._denominators = as_vector(())
        self._numerators = as_vector(())
        self._y_values = np.zeros(0)
        self._x_values = np.zeros(0)
        self._dead_zone = 0.0
        self._last = 0.0

        self.set_coefficients(denominators, numerators)
        self.set_dead_zone(dead_zone)

    def set_denominators(self, denominators: ArrayLike):
        self._denominators = as_vector(denominators)
        self._y_values = np.zeros(self._denominators.size)

    def set_numerators(self, numerators: ArrayLike):
        self._numerators = as_vector(numerators)
        self._x_values = np.zeros(self._numerators.size)

    def set_coefficients(self, denominators: ArrayLike, numerators: ArrayLike):
        self.set_denominators(denominators)
        self.set_numerators(numerators)

    def set_dead_zone(self, dead_zone: float):
        self._dead_zone = abs(float(dead_zone))
        logger.debug("Setting digital filter dead zone = %s", self._dead_zone)

    def filter(self, x: float) -> float:
        """Process one sample and return the (dead-zone filtered) output."""
        if self._denominators.size == 0 or self._numerators.size == 0:
            return 0.0

        shift_in(self._x_values, x)
        xside = float(np.dot(self._x_values, self._numerators))

        # the oldest output drops out before the new one is computed, so the
        # remaining entries line up with denominators[1:]
        yside = float(np.dot(self._y_values[:-1], self._denominators[1:]))

        y_insert = 0.0
        if abs(self._denominators[0]) > DOUBLE_EPSILON:
            y_insert = (xside - yside) / self._denominators[0]
        shift_in(self._y_values, y_insert)

        return self._update_last(float(y_insert))

    __call__ = filter

    def filter_many(self, samples: Iterable[float]) -> np.ndarray:
        return np.array([self.filter(x) for x in samples], dtype=np.float64)

    def reset_values(self):
        self._x_values.fill(0.0)
        self._y_values.fill(0.0)

    def _update_last(self, value: float) -> float:
        if abs(value - self._last) < self._dead_zone:
            return self._last
        self._last = value
        return value

    def denominators(self) -> np.ndarray:
        return readonly(self._denominators)

    def numerators(self) -> np.ndarray:
        return readonly(self._numerators)

    def dead_zone(self) -> float:
        return self._dead_zone

    def inputs_queue(self) -> np.ndarray:
        return readonly(self._x_values)

    def outputs_queue(self) -> np.ndarray:
        return readonly(self._y_values)

    def __repr__(self):
        return (
            f"{type(self).__name__}(denominators={self._denominators.tolist()}, "
            f"numerators={self._numerators.tolist()}, dead_zone={self._dead_zone})"
        )


class SecondOrderLowPassFilter(DigitalFilter):
    def __init__(self, cutoff: float, ts: float, dead_zone: float = 0.0):
        """ Initialize the low-pass filter with cutoff frequency [Hz] and sampling period [s]. """
        self.ts = ts
        self.cutoff = cutoff
        denominators, numerators = lpf_coefficients(ts, cutoff)
        super().__init__(denominators, numerators, dead_zone)

    def update(self, x: float) -> float:
        return self.filter(x)


class FirstOrderDeadTimeFilter(DigitalFilter):
    """First-order lag with time constant `settling_time`, delayed by `dead_time`.

    Invalid timing parameters leave the filter unconfigured, in which case
    every call to `filter` returns 0.0.
    """

    def __init__(self, ts: float, settling_time: float, dead_time: float = 0.0, dead_zone: float = 0.0):
        self.ts = ts
        self.settling_time = settling_time
        self.dead_time = dead_time
        denominators, numerators = lp_first_order_coefficients(ts, settling_time, dead_time)
        super().__init__(denominators, numerators, dead_zone)

    def update(self, x: float) -> float:
        return self.filter(x)
