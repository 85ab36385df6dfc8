import io
import random

import pytest

from tfhepoly.measure import PolynomialMultiplicationMeasure
from tfhepoly.multiplication import MultiplicationMethod
from tfhepoly.params import MultiplicationKind, Params


class RecordingMethod(MultiplicationMethod):
    def __init__(self):
        self.calls = []

    def multiply(self, poly1, poly2):
        self.calls.append((poly1.coeffs(), [t.value for t in poly2]))
        return poly2


def naive_params():
    return Params(q=17, n=2, degree=4, method=MultiplicationKind.NAIVE)


def test_measure_writes_totals():
    stream = io.StringIO()
    m = PolynomialMultiplicationMeasure(stream, random.Random(0), 5, naive_params())
    result = m.measure()
    assert stream.getvalue() == (
        f"Total(ms): {result.total_ms}\nAvg(ms): {result.average_ms:g}\n"
    )
    assert result.total_ms >= 0
    assert result.average_ms == result.total_ms / 5


def test_measure_logs_to_stdout(capsys):
    m = PolynomialMultiplicationMeasure(io.StringIO(), random.Random(0), 3, naive_params())
    m.measure()
    out = capsys.readouterr().out
    assert "Total Testcase:  3" in out
    assert "StopWatch start\n" in out
    assert "StopWatch stop " in out


def test_measure_calls_method_for_every_testcase():
    method = RecordingMethod()
    params = naive_params()
    m = PolynomialMultiplicationMeasure(io.StringIO(), random.Random(1), 7, params, method)
    m.measure()
    assert len(method.calls) == 7
    for ints, tori in method.calls:
        assert len(ints) == params.degree
        assert len(tori) == params.degree
        assert all(0 <= c < params.q for c in ints + tori)


def test_measure_is_deterministic_for_a_seed():
    first, second = RecordingMethod(), RecordingMethod()
    params = naive_params()
    PolynomialMultiplicationMeasure(io.StringIO(), random.Random(42), 4, params, first).measure()
    PolynomialMultiplicationMeasure(io.StringIO(), random.Random(42), 4, params, second).measure()
    assert first.calls == second.calls


def test_measure_with_ntt_method():
    params = Params(q=17, n=2, degree=4, ntt_modulus=17, method=MultiplicationKind.NTT)
    stream = io.StringIO()
    result = PolynomialMultiplicationMeasure(stream, random.Random(0), 2, params).measure()
    assert stream.getvalue().startswith(f"Total(ms): {result.total_ms}\n")


def test_total_testcase_property():
    m = PolynomialMultiplicationMeasure(io.StringIO(), random.Random(0), 9, naive_params())
    assert m.total_testcase == 9


@pytest.mark.parametrize("count", [0, -3])
def test_invalid_total_testcase(count):
    with pytest.raises(ValueError):
        PolynomialMultiplicationMeasure(io.StringIO(), random.Random(0), count, naive_params())


def test_invalid_params_rejected():
    with pytest.raises(ValueError):
        PolynomialMultiplicationMeasure(io.StringIO(), random.Random(0), 1, Params())