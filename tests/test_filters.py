import pytest

from ecat_client.filters import SecondOrderFilter, dynamic_get


def run(filt, samples):
    return [filt.process(x) for x in samples]


def test_defaults():
    filt = SecondOrderFilter()
    assert filt.omega == 1.0
    assert filt.damping == 0.8
    assert filt.time_step == 0.01


def test_zero_input_stays_zero():
    filt = SecondOrderFilter(omega=10.0)
    assert run(filt, [0.0] * 20) == [0.0] * 20


def test_step_converges_to_input():
    filt = SecondOrderFilter(omega=50.0, eps=1.0, ts=0.01)
    out = run(filt, [1.0] * 2000)
    assert out[0] > 0.0
    assert out[0] < 1.0
    assert out[-1] == pytest.approx(1.0, abs=1e-6)
    assert filt.output == out[-1]


def test_reset_holds_initial_state():
    filt = SecondOrderFilter(omega=5.0, eps=0.8, ts=0.01, initial_state=3.0)
    assert filt.output == 3.0
    assert filt.process(3.0) == pytest.approx(3.0)


def test_linearity():
    a = SecondOrderFilter(omega=20.0)
    b = SecondOrderFilter(omega=20.0)
    samples = [0.3, -1.0, 2.5, 0.0, 4.0, 1.0]
    out_a = run(a, samples)
    out_b = run(b, [2 * s for s in samples])
    assert out_b == pytest.approx([2 * v for v in out_a])


def test_setting_omega_changes_response():
    slow = SecondOrderFilter(omega=1.0)
    fast = SecondOrderFilter(omega=1.0)
    fast.omega = 100.0
    assert fast.omega == 100.0
    assert fast.process(1.0) > slow.process(1.0)


def test_dynamic_get():
    values = (1, "two", 3.0)
    assert dynamic_get(0, values) == 1
    assert dynamic_get(1, values) == "two"
    assert dynamic_get(2, values) == 3.0


@pytest.mark.parametrize("index", [3, 10, -1])
def test_dynamic_get_out_of_range(index):
    with pytest.raises(IndexError, match="Tuple element out of range."):
        dynamic_get(index, (1, 2, 3))