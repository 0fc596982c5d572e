import argparse
import datetime
import logging
import os

import h5py
import numpy as np
from scipy.signal import lfilter
from setproctitle import setproctitle

from digifilter import DigitalFilter, lpf_coefficients, lp_first_order_coefficients
from digifilter.filters import DOUBLE_EPSILON

np.set_printoptions(precision=3, suppress=True, floatmode="fixed")

logger = logging.getLogger(__name__)


def make_signal(kind: str, steps: int, ts: float, amplitude: float = 1.0, freq: float = 1.0) -> np.ndarray:
    t = np.arange(steps) * ts
    if kind == "step":
        return np.full(steps, amplitude)
    elif kind == "impulse":
        x = np.zeros(steps)
        if steps > 0:
            x[0] = amplitude
        return x
    elif kind == "sine":
        return amplitude * np.sin(2 * np.pi * freq * t)
    raise ValueError(f"Unsupported signal: {kind}")


def build_filter(args) -> DigitalFilter:
    if args.kind == "lpf":
        den, num = lpf_coefficients(args.ts, args.cutoff)
    elif args.kind == "first-order":
        den, num = lp_first_order_coefficients(args.ts, args.settling_time, args.dead_time)
    else:
        den, num = args.den, args.num
    return DigitalFilter(den, num, dead_zone=args.dead_zone)


class TraceLog:
    """Per-sample traces written to an HDF5 file, grown on demand."""

    def __init__(self, log_file: h5py.File, default_len: int = 1000):
        self.log_file = log_file
        self.cursor = 0
        for key in ("input", "raw", "output"):
            log_file.create_dataset(key, (default_len,), maxshape=(None,))
        log_file.attrs["cursor"] = 0

    def append(self, x: float, raw: float, y: float):
        if self.cursor == self.log_file["input"].len():
            new_len = self.cursor + 1000
            logger.info("Extend log size to %d.", new_len)
            for value in self.log_file.values():
                value.resize((new_len,))
        self.log_file["input"][self.cursor] = x
        self.log_file["raw"][self.cursor] = raw
        self.log_file["output"][self.cursor] = y
        self.cursor += 1
        self.log_file.attrs["cursor"] = self.cursor


def run(filt: DigitalFilter, signal: np.ndarray, trace: TraceLog = None, print_every: int = 0):
    """Feed `signal` through `filt`.

    Returns:
        (outputs, raw): reported values and the unclamped outputs fed back
        into the recursion.
    """
    outputs = np.zeros(len(signal))
    raw = np.zeros(len(signal))
    for i, x in enumerate(signal):
        outputs[i] = filt.filter(x)
        history = filt.outputs_queue()
        raw[i] = history[0] if history.size else 0.0
        if trace is not None:
            trace.append(x, raw[i], outputs[i])
        if print_every and i % print_every == 0:
            print(f"Step: {i}, input: {x:.3f}, output: {outputs[i]:.3f}")
    return outputs, raw


def reference_response(filt: DigitalFilter, signal: np.ndarray):
    """Dead-zone free response of the same coefficients via scipy, or None
    when the coefficients cannot be evaluated by `lfilter`."""
    den, num = filt.denominators(), filt.numerators()
    if den.size == 0 or num.size == 0 or abs(den[0]) <= DOUBLE_EPSILON:
        return None
    return lfilter(num, den, signal)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run a recursive digital filter over a test signal.")
    parser.add_argument("-k", "--kind", choices=["lpf", "first-order", "custom"], default="lpf")
    parser.add_argument("--ts", type=float, default=0.01)
    parser.add_argument("--cutoff", type=float, default=5.0)
    parser.add_argument("--settling-time", type=float, default=0.1)
    parser.add_argument("--dead-time", type=float, default=0.0)
    parser.add_argument("--dead-zone", type=float, default=0.0)
    parser.add_argument("--den", type=float, nargs="+")
    parser.add_argument("--num", type=float, nargs="+")
    parser.add_argument("--signal", choices=["step", "impulse", "sine"], default="step")
    parser.add_argument("-n", "--steps", type=int, default=200)
    parser.add_argument("--amplitude", type=float, default=1.0)
    parser.add_argument("--freq", type=float, default=1.0)
    parser.add_argument("--print-every", type=int, default=25)
    parser.add_argument("--compare", action="store_true", default=False)
    parser.add_argument("-l", "--log", action="store_true", default=False)
    parser.add_argument("--log-dir", type=str, default="logs")
    args = parser.parse_args(argv)

    if args.kind == "custom" and (not args.den or not args.num):
        parser.error("--kind custom requires both --den and --num")
    if args.ts <= 0:
        parser.error("--ts must be positive")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO)
    setproctitle("play_digifilter")

    filt = build_filter(args)
    print(filt)
    signal = make_signal(args.signal, args.steps, args.ts, args.amplitude, args.freq)

    log_file = None
    trace = None
    if args.log:
        timestr = datetime.datetime.now().strftime("%m-%d_%H-%M-%S")
        os.makedirs(args.log_dir, exist_ok=True)
        log_file = h5py.File(os.path.join(args.log_dir, f"{timestr}.h5py"), "a")
        log_file.attrs["denominators"] = filt.denominators()
        log_file.attrs["numerators"] = filt.numerators()
        log_file.attrs["dead_zone"] = filt.dead_zone()
        log_file.attrs["ts"] = args.ts
        trace = TraceLog(log_file, default_len=max(args.steps, 1))

    try:
        outputs, raw = run(filt, signal, trace, args.print_every)
    finally:
        if log_file is not None:
            log_file.close()

    if args.compare:
        ref = reference_response(filt, signal)
        if ref is None:
            logger.warning("Coefficients are degenerate, skipping lfilter comparison")
        else:
            print(f"Max deviation from lfilter: {np.max(np.abs(raw - ref), initial=0.0):.3e}")
    return outputs


if __name__ == "__main__":
    main()
