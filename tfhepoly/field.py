"""Scalar types: discrete torus elements and prime field elements."""

from __future__ import annotations

import operator
from typing import Any


def _check_modulus(modulus: int, name: str) -> int:
    modulus = operator.index(modulus)
    if modulus <= 0:
        raise ValueError(f"{name} must be positive, got {modulus}")
    return modulus


class DiscreteTorus:
    """An element of the discrete torus Z/qZ, stored as a value in 0..q-1."""

    __slots__ = ("_x", "_q")

    def __init__(self, x: int, q: int) -> None:
        q = _check_modulus(q, "q")
        x = operator.index(x)
        if not 0 <= x < q:
            raise ValueError(
                f"discrete torus element must be less than q={q}, got {x}"
            )
        self._x = x
        self._q = q

    @property
    def value(self) -> int:
        """The representative in 0..q-1."""
        return self._x

    @property
    def q(self) -> int:
        """The torus order."""
        return self._q

    def _other_value(self, other: Any) -> int | None:
        if not isinstance(other, DiscreteTorus):
            return None
        if other._q != self._q:
            raise ValueError(
                f"torus elements have different moduli: {self._q} and {other._q}"
            )
        return other._x

    def __add__(self, other: Any) -> DiscreteTorus:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return DiscreteTorus((self._x + value) % self._q, self._q)

    def __sub__(self, other: Any) -> DiscreteTorus:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return DiscreteTorus((self._x - value) % self._q, self._q)

    def __mul__(self, c: Any) -> DiscreteTorus:
        if isinstance(c, DiscreteTorus) or not isinstance(c, int):
            return NotImplemented
        return DiscreteTorus((self._x * c) % self._q, self._q)

    def __rmul__(self, c: Any) -> DiscreteTorus:
        return self.__mul__(c)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteTorus):
            return NotImplemented
        return self._x == other._x and self._q == other._q

    def __hash__(self) -> int:
        return hash((DiscreteTorus, self._x, self._q))

    def __int__(self) -> int:
        return self._x

    def __str__(self) -> str:
        return str(self._x)

    def __repr__(self) -> str:
        return f"DiscreteTorus({self._x}, q={self._q})"


class GaloisFieldElement:
    """An element of the prime field GF(p); inputs are reduced modulo p."""

    __slots__ = ("_a", "_p")

    def __init__(self, x: int | DiscreteTorus, p: int) -> None:
        p = _check_modulus(p, "p")
        if isinstance(x, DiscreteTorus):
            x = x.value
        self._a = operator.index(x) % p
        self._p = p

    @property
    def value(self) -> int:
        """The representative in 0..p-1."""
        return self._a

    @property
    def p(self) -> int:
        """The field modulus."""
        return self._p

    def _other_value(self, other: Any) -> int | None:
        if isinstance(other, GaloisFieldElement):
            if other._p != self._p:
                raise ValueError(
                    f"field elements have different moduli: {self._p} and {other._p}"
                )
            return other._a
        if isinstance(other, int):
            return other % self._p
        return None

    def _make(self, value: int) -> GaloisFieldElement:
        return GaloisFieldElement(value, self._p)

    def __add__(self, other: Any) -> GaloisFieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self._a + value)

    def __radd__(self, other: Any) -> GaloisFieldElement:
        return self.__add__(other)

    def __sub__(self, other: Any) -> GaloisFieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self._a - value)

    def __rsub__(self, other: Any) -> GaloisFieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(value - self._a)

    def __mul__(self, other: Any) -> GaloisFieldElement:
        value = self._other_value(other)
        if value is None:
            return NotImplemented
        return self._make(self._a * value)

    def __rmul__(self, other: Any) -> GaloisFieldElement:
        return self.__mul__(other)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, GaloisFieldElement):
            return self._a == other._a and self._p == other._p
        if isinstance(other, int):
            return self._a == other % self._p
        return NotImplemented

    def __hash__(self) -> int:
        return hash((GaloisFieldElement, self._a, self._p))

    def __int__(self) -> int:
        return self._a

    def __str__(self) -> str:
        return str(self._a)

    def __repr__(self) -> str:
        return f"GaloisFieldElement({self._a}, p={self._p})"