import h5py
import numpy as np
import pytest

from digifilter.play import main, make_signal, parse_args


def test_make_signal_kinds():
    np.testing.assert_array_equal(make_signal("step", 3, 0.1, amplitude=2.0), [2.0, 2.0, 2.0])
    np.testing.assert_array_equal(make_signal("impulse", 3, 0.1), [1.0, 0.0, 0.0])
    sine = make_signal("sine", 4, 0.25, freq=1.0)
    np.testing.assert_allclose(sine, [0.0, 1.0, 0.0, -1.0], atol=1e-12)


def test_custom_kind_requires_coefficients():
    with pytest.raises(SystemExit):
        parse_args(["--kind", "custom", "--den", "1.0"])


def test_main_custom_identity(capsys):
    outputs = main(["--kind", "custom", "--den", "1", "--num", "1", "-n", "5",
                    "--signal", "step", "--amplitude", "0.5", "--compare"])
    np.testing.assert_array_equal(outputs, np.full(5, 0.5))
    assert "Max deviation from lfilter" in capsys.readouterr().out


def test_main_first_order_dead_time():
    outputs = main(["--kind", "first-order", "--ts", "0.1", "--settling-time", "0",
                    "--dead-time", "0.2", "-n", "4", "--print-every", "0"])
    np.testing.assert_allclose(outputs, [0.0, 0.0, 1.0, 1.0])


def test_main_writes_trace_log(tmp_path):
    log_dir = tmp_path / "logs"
    main(["--kind", "lpf", "--ts", "0.01", "--cutoff", "5", "-n", "30",
          "--dead-zone", "0.05", "-l", "--log-dir", str(log_dir), "--print-every", "0"])
    files = list(log_dir.glob("*.h5py"))
    assert len(files) == 1
    with h5py.File(files[0], "r") as f:
        assert f.attrs["cursor"] == 30
        np.testing.assert_array_equal(f["input"][:], np.ones(30))
        assert f["raw"][-1] > f["raw"][0]
        assert f.attrs["dead_zone"] == pytest.approx(0.05)
