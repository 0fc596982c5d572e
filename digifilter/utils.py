import numpy as np
from typing import Sequence, Union

ArrayLike = Union[np.ndarray, Sequence[float]]


def as_vector(x: ArrayLike) -> np.ndarray:
    """Coerce a coefficient sequence into a flat float64 array."""
    return np.asarray(x, dtype=np.float64).reshape(-1).copy()


def readonly(x: np.ndarray) -> np.ndarray:
    view = x.view()
    view.flags.writeable = False
    return view


def shift_in(buf: np.ndarray, value: float):
    """Push `value` to the front of `buf`, dropping the oldest (last) entry."""
    if buf.size == 0:
        return
    buf[1:] = buf[:-1]
    buf[0] = value
