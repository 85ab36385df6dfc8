import random

import pytest

from tfhepoly.field import GaloisFieldElement
from tfhepoly.multiplication import (
    MultiplicationMethod,
    NaiveMultiplicationMethod,
    NTTMultiplicationMethod,
    create_method,
)
from tfhepoly.params import MultiplicationKind, Params
from tfhepoly.poly import DiscreteTorusPoly, GaloisFieldPoly, IntPoly

P = 12289
N = 16


@pytest.fixture(scope="module")
def ntt():
    return NTTMultiplicationMethod(P, N)


def _random_values(rng, count, modulus):
    return [rng.randrange(modulus) for _ in range(count)]


def test_naive_small_example():
    method = NaiveMultiplicationMethod(17, 2)
    result = method.multiply(IntPoly([1, 1]), DiscreteTorusPoly([1, 1], 17))
    assert [c.value for c in result] == [0, 2]


def test_naive_wraps_negatively():
    q = 17
    method = NaiveMultiplicationMethod(q, 2)
    result = method.multiply(IntPoly([0, 1]), DiscreteTorusPoly([0, 1], q))
    assert [c.value for c in result] == [q - 1, 0]
    assert result.q == q


def test_naive_identity():
    rng = random.Random(1)
    values = _random_values(rng, 8, 97)
    method = NaiveMultiplicationMethod(97, 8)
    one = IntPoly([1] + [0] * 7)
    result = method.multiply(one, DiscreteTorusPoly(values, 97))
    assert [c.value for c in result] == values


def test_naive_length_mismatch():
    method = NaiveMultiplicationMethod(17, 2)
    with pytest.raises(ValueError):
        method.multiply(IntPoly([1, 2, 3]), DiscreteTorusPoly([1, 2], 17))


def test_naive_modulus_mismatch():
    method = NaiveMultiplicationMethod(17, 2)
    with pytest.raises(ValueError):
        method.multiply(IntPoly([1, 2]), DiscreteTorusPoly([1, 2], 19))


def test_ntt_constants(ntt):
    assert pow(ntt.psi.value, N, P) == P - 1
    assert pow(ntt.psi.value, 2 * N, P) == 1
    assert ntt.psi * ntt.psi_inverse == GaloisFieldElement(1, P)
    assert ntt.n_inverse * N == GaloisFieldElement(1, P)
    assert ntt.omega == ntt.psi * ntt.psi


def test_inverse(ntt):
    for x in (1, 2, 3, 100, P - 1):
        assert (ntt.inverse(x) * x).value == 1


def test_inverse_of_zero_raises(ntt):
    with pytest.raises(ValueError):
        ntt.inverse(0)


def test_forward_inverse_round_trip(ntt):
    rng = random.Random(7)
    values = _random_values(rng, N, P)
    poly = GaloisFieldPoly(values, P)
    back = ntt.inverse_ntt(ntt.forward_ntt(poly))
    assert [c.value for c in back] == values


def test_forward_does_not_mutate_input(ntt):
    values = list(range(N))
    poly = GaloisFieldPoly(values, P)
    ntt.forward_ntt(poly)
    assert [c.value for c in poly] == values


def test_ntt_matches_schoolbook(ntt):
    rng = random.Random(3)
    for _ in range(5):
        a = GaloisFieldPoly(_random_values(rng, N, P), P)
        b = GaloisFieldPoly(_random_values(rng, N, P), P)
        assert ntt.multiply_galois(a, b) == ntt.multiply_schoolbook(a, b)


def test_ntt_matches_naive_on_torus():
    rng = random.Random(11)
    ntt = NTTMultiplicationMethod(P, N)
    naive = NaiveMultiplicationMethod(P, N)
    ints = IntPoly(_random_values(rng, N, P))
    torus = DiscreteTorusPoly(_random_values(rng, N, P), P)
    assert ntt.multiply(ints, torus) == naive.multiply(ints, torus)


def test_ntt_multiply_is_commutative(ntt):
    rng = random.Random(5)
    a = _random_values(rng, N, P)
    b = _random_values(rng, N, P)
    ab = ntt.multiply(IntPoly(a), DiscreteTorusPoly(b, P))
    ba = ntt.multiply(IntPoly(b), DiscreteTorusPoly(a, P))
    assert ab == ba


def test_ntt_rejects_indivisible_modulus():
    with pytest.raises(ValueError, match="P-1 is not divisible by 2N"):
        NTTMultiplicationMethod(17, 16)


def test_ntt_rejects_non_power_of_two():
    with pytest.raises(ValueError):
        NTTMultiplicationMethod(P, 6)


def test_ntt_rejects_wrong_length(ntt):
    with pytest.raises(ValueError):
        ntt.forward_ntt(GaloisFieldPoly([1, 2, 3], P))


def test_create_method_ntt_is_shared():
    params = Params(q=P, n=4, degree=N, ntt_modulus=P, method=MultiplicationKind.NTT)
    first = create_method(params)
    second = create_method(params)
    assert isinstance(first, NTTMultiplicationMethod)
    assert first is second
    assert first.p == P and first.n == N


def test_create_method_naive():
    params = Params(q=1024, n=4, degree=8, method=MultiplicationKind.NAIVE)
    method = create_method(params)
    assert isinstance(method, NaiveMultiplicationMethod)
    assert (method.q, method.n) == (1024, 8)


def test_create_method_invalid_params():
    with pytest.raises(ValueError):
        create_method(Params(q=0, n=4, degree=8, method=MultiplicationKind.NAIVE))


def test_base_class_is_abstract():
    with pytest.raises(TypeError):
        MultiplicationMethod()