import pytest

from tfhepoly.params import MultiplicationKind, Params


def _ntt_params(**overrides):
    values = dict(q=12289, n=4, degree=1024, ntt_modulus=12289,
                  method=MultiplicationKind.NTT)
    values.update(overrides)
    return Params(**values)


def test_example_parameters_are_accepted():
    params = _ntt_params()
    params.validate()
    assert params.field_modulus == 12289


def test_field_modulus_follows_method():
    naive = Params(q=1000, n=2, degree=8, method=MultiplicationKind.NAIVE)
    naive.validate()
    assert naive.field_modulus == 1000
    ntt = _ntt_params(q=1000, degree=8)
    assert ntt.field_modulus == 12289


def test_defaults_are_rejected():
    with pytest.raises(ValueError):
        Params().validate()


@pytest.mark.parametrize(
    "overrides",
    [
        {"q": 0},
        {"q": 2**32},
        {"n": -1},
        {"degree": 0},
        {"ntt_modulus": 0},
        {"degree": 12},
    ],
)
def test_invalid_values_raise(overrides):
    with pytest.raises(ValueError):
        _ntt_params(**overrides).validate()


def test_prime_not_compatible_with_degree():
    with pytest.raises(ValueError, match="P-1 is not divisible by 2N"):
        _ntt_params(ntt_modulus=7681, degree=1024).validate()


def test_naive_ignores_ntt_modulus():
    params = Params(q=12289, n=4, degree=12, ntt_modulus=0,
                    method=MultiplicationKind.NAIVE)
    params.validate()
    assert params.degree == 12


def test_undefined_method_raises():
    params = _ntt_params(method="fft")
    with pytest.raises(ValueError, match="not defined"):
        params.validate()