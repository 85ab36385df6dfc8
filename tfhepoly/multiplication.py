"""Negacyclic multiplication of an integer polynomial by a torus polynomial."""

from __future__ import annotations

import abc
import functools
import random
from typing import Iterable, Sequence

from tfhepoly import log
from tfhepoly.arith import extended_euclidean
from tfhepoly.field import GaloisFieldElement
from tfhepoly.params import MultiplicationKind, Params
from tfhepoly.poly import DiscreteTorusPoly, GaloisFieldPoly, IntPoly

_MAX_ROOT_SEARCH_ATTEMPTS = 1000


def _negacyclic_product(a: Sequence[int], b: Sequence[int], modulus: int) -> list[int]:
    """Product of a and b modulo X^n + 1, coefficients reduced modulo ``modulus``."""
    n = len(a)
    result = [0] * n
    for i, bi in enumerate(b):
        for j, aj in enumerate(a):
            k = i + j
            if k >= n:
                result[k - n] -= aj * bi
            else:
                result[k] += aj * bi
    return [c % modulus for c in result]


def _bit_reverse(value: int, bits: int) -> int:
    result = 0
    for _ in range(bits):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def _bit_reversed(table: Sequence[int]) -> list[int]:
    bits = len(table).bit_length() - 1
    reordered = [0] * len(table)
    for i, value in enumerate(table):
        reordered[_bit_reverse(i, bits)] = value
    return reordered


def _power_table(base: int, count: int, modulus: int) -> list[int]:
    table = []
    current = 1 % modulus
    for _ in range(count):
        table.append(current)
        current = current * base % modulus
    return table


class MultiplicationMethod(abc.ABC):
    """Strategy for multiplying an IntPoly by a DiscreteTorusPoly."""

    @abc.abstractmethod
    def multiply(self, poly1: IntPoly, poly2: DiscreteTorusPoly) -> DiscreteTorusPoly:
        """Return poly1 * poly2 modulo X^N + 1."""


class NaiveMultiplicationMethod(MultiplicationMethod):
    """Schoolbook negacyclic multiplication on the torus, O(N^2)."""

    def __init__(self, q: int, n: int) -> None:
        if q <= 0:
            raise ValueError(f"q must be positive, got {q}")
        if n <= 0:
            raise ValueError(f"N must be positive, got {n}")
        self.q = q
        self.n = n

    def multiply(self, poly1: IntPoly, poly2: DiscreteTorusPoly) -> DiscreteTorusPoly:
        if len(poly1) != len(poly2):
            raise ValueError(
                f"polynomial lengths differ: {len(poly1)} and {len(poly2)}"
            )
        if len(poly1) != self.n:
            raise ValueError(f"expected polynomials of length {self.n}, got {len(poly1)}")
        if poly2.q != self.q:
            raise ValueError(f"torus modulus {poly2.q} does not match {self.q}")
        values = _negacyclic_product(list(poly1), [t.value for t in poly2], self.q)
        return DiscreteTorusPoly(values, self.q)


class NTTMultiplicationMethod(MultiplicationMethod):
    """Negacyclic multiplication through the number theoretic transform over GF(P)."""

    def __init__(self, p: int, n: int) -> None:
        if p <= 1:
            raise ValueError(f"P must be greater than 1, got {p}")
        if n <= 0 or n & (n - 1):
            raise ValueError(f"N must be a power of two, got {n}")
        if (p - 1) % (2 * n) != 0:
            raise ValueError("P-1 is not divisible by 2N")
        self.p = p
        self.n = n

        self.n_inverse = self.inverse(n)
        self.psi = self._search_primitive_root()
        self.psi_inverse = self.inverse(self.psi)
        self.omega = self.psi * self.psi

        log.info(
            "NTT Constants: {\n",
            "P =", self.p, "\n",
            "N =", self.n, "\n",
            "N^-1 =", self.n_inverse, "\n",
            "ψ =", self.psi, "\n",
            "ψ^-1 =", self.psi_inverse, "\n",
            "ω =", self.omega, "\n}",
        )

        self._psi_powers = _power_table(self.psi.value, n, p)
        self._psi_inverse_powers = _power_table(self.psi_inverse.value, n, p)
        self._psi_powers_br = _bit_reversed(self._psi_powers)
        self._psi_inverse_powers_br = _bit_reversed(self._psi_inverse_powers)

    def inverse(self, x: int | GaloisFieldElement) -> GaloisFieldElement:
        """Multiplicative inverse of x in GF(P)."""
        value = int(x) % self.p
        s, t = extended_euclidean(self.p, value)
        if s * self.p + t * value != 1:
            raise ValueError(f"{value} has no inverse modulo {self.p}")
        return GaloisFieldElement(t, self.p)

    def _root_of_unity(self, seed: int) -> GaloisFieldElement:
        x = random.Random(seed).randrange(self.p)
        exponent = (self.p - 1) // (2 * self.n)
        return GaloisFieldElement(pow(x, exponent, self.p), self.p)

    def _is_primitive_root(self, psi: GaloisFieldElement) -> bool:
        psi_pow = pow(psi.value, self.n, self.p)
        return psi_pow == self.p - 1 and psi_pow * psi_pow % self.p == 1

    def _search_primitive_root(self) -> GaloisFieldElement:
        for seed in range(_MAX_ROOT_SEARCH_ATTEMPTS):
            psi = self._root_of_unity(seed)
            if self._is_primitive_root(psi):
                return psi
        raise ValueError(
            f"no primitive {2 * self.n}-th root of unity found modulo {self.p}; is P prime?"
        )

    def _values(self, poly: GaloisFieldPoly) -> list[int]:
        if poly.p != self.p:
            raise ValueError(f"field modulus {poly.p} does not match {self.p}")
        if len(poly) != self.n:
            raise ValueError(f"expected polynomials of length {self.n}, got {len(poly)}")
        return [c.value for c in poly]

    def _forward(self, a: list[int]) -> list[int]:
        p = self.p
        t = self.n
        m = 1
        while m < self.n:
            t //= 2
            for i in range(m):
                j1 = 2 * i * t
                s = self._psi_powers_br[m + i]
                for j in range(j1, j1 + t):
                    u = a[j]
                    v = a[j + t] * s % p
                    a[j] = (u + v) % p
                    a[j + t] = (u - v) % p
            m *= 2
        return a

    def _inverse(self, a: list[int]) -> list[int]:
        p = self.p
        t = 1
        m = self.n
        while m > 1:
            j1 = 0
            h = m // 2
            for i in range(h):
                s = self._psi_inverse_powers_br[h + i]
                for j in range(j1, j1 + t):
                    u = a[j]
                    v = a[j + t]
                    a[j] = (u + v) % p
                    a[j + t] = (u - v) * s % p
                j1 += 2 * t
            t *= 2
            m //= 2
        n_inv = self.n_inverse.value
        return [c * n_inv % p for c in a]

    def forward_ntt(self, poly: GaloisFieldPoly) -> GaloisFieldPoly:
        """Forward negacyclic NTT; the result is in bit-reversed order."""
        return GaloisFieldPoly(self._forward(self._values(poly)), self.p)

    def inverse_ntt(self, poly: GaloisFieldPoly) -> GaloisFieldPoly:
        """Inverse of forward_ntt."""
        return GaloisFieldPoly(self._inverse(self._values(poly)), self.p)

    def multiply_galois(self, a: GaloisFieldPoly, b: GaloisFieldPoly) -> GaloisFieldPoly:
        """Product of a and b modulo X^N + 1 over GF(P), computed with the NTT."""
        fa = self._forward(self._values(a))
        fb = self._forward(self._values(b))
        product = [x * y % self.p for x, y in zip(fa, fb)]
        return GaloisFieldPoly(self._inverse(product), self.p)

    def multiply_schoolbook(self, a: GaloisFieldPoly, b: GaloisFieldPoly) -> GaloisFieldPoly:
        """Product of a and b modulo X^N + 1 over GF(P), computed directly."""
        values = _negacyclic_product(self._values(a), self._values(b), self.p)
        return GaloisFieldPoly(values, self.p)

    def multiply(self, poly1: IntPoly, poly2: DiscreteTorusPoly) -> DiscreteTorusPoly:
        a = GaloisFieldPoly.from_int_poly(poly1, self.p)
        b = GaloisFieldPoly.from_torus_poly(poly2, self.p)
        return DiscreteTorusPoly.from_galois(self.multiply_galois(a, b), poly2.q)


@functools.lru_cache(maxsize=None)
def _shared_method(kind: MultiplicationKind, modulus: int, degree: int) -> MultiplicationMethod:
    if kind is MultiplicationKind.NTT:
        return NTTMultiplicationMethod(modulus, degree)
    return NaiveMultiplicationMethod(modulus, degree)


def create_method(params: Params) -> MultiplicationMethod:
    """Return the shared multiplication method selected by the parameters."""
    params.validate()
    if params.method is MultiplicationKind.NTT:
        return _shared_method(params.method, params.ntt_modulus, params.degree)
    if params.method is MultiplicationKind.NAIVE:
        return _shared_method(params.method, params.q, params.degree)
    raise ValueError("Polynomial Multiplication Method is not defined")


def _as_list(values: Iterable[int]) -> list[int]:
    return list(values)