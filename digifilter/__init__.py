from .coefficients import lpf_coefficients, lp_first_order_coefficients
from .filters import DigitalFilter, SecondOrderLowPassFilter, FirstOrderDeadTimeFilter

__all__ = [
    "lpf_coefficients",
    "lp_first_order_coefficients",
    "DigitalFilter",
    "SecondOrderLowPassFilter",
    "FirstOrderDeadTimeFilter",
]
