"""Polynomials over the integers, the discrete torus and a prime field."""

from __future__ import annotations

import operator
from typing import Any, Generic, Iterable, Iterator, TypeVar

from tfhepoly.field import DiscreteTorus, GaloisFieldElement

T = TypeVar("T")


def _check_length(n: int) -> int:
    n = operator.index(n)
    if n < 0:
        raise ValueError(f"polynomial length must not be negative, got {n}")
    return n


def _check_modulus(modulus: int, name: str) -> int:
    modulus = operator.index(modulus)
    if modulus <= 0:
        raise ValueError(f"{name} must be positive, got {modulus}")
    return modulus


class PolyBase(Generic[T]):
    """A fixed-length sequence of coefficients, lowest degree first."""

    __slots__ = ("_coeffs",)

    def __init__(self, coeffs: Iterable[Any]) -> None:
        self._coeffs: list[T] = [self._coerce(c) for c in coeffs]

    def _coerce(self, value: Any) -> T:
        return value

    def __len__(self) -> int:
        return len(self._coeffs)

    def __getitem__(self, i: int) -> T:
        return self._coeffs[i]

    def __setitem__(self, i: int, value: Any) -> None:
        self._coeffs[operator.index(i)] = self._coerce(value)

    def __iter__(self) -> Iterator[T]:
        return iter(self._coeffs)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._coeffs == other._coeffs

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return "".join(f"{coeff} " for coeff in self._coeffs)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._coeffs!r})"

    def coeffs(self) -> list[T]:
        """A copy of the coefficient list."""
        return list(self._coeffs)


class IntPoly(PolyBase[int]):
    """A polynomial with plain integer coefficients."""

    __slots__ = ()

    def _coerce(self, value: Any) -> int:
        return operator.index(value)

    @classmethod
    def zeros(cls, n: int) -> IntPoly:
        """The zero polynomial with n coefficients."""
        return cls([0] * _check_length(n))


class DiscreteTorusPoly(PolyBase[DiscreteTorus]):
    """A polynomial whose coefficients lie on the discrete torus Z/qZ."""

    __slots__ = ("_q",)

    def __init__(self, coeffs: Iterable[Any], q: int) -> None:
        self._q = _check_modulus(q, "q")
        super().__init__(coeffs)

    @property
    def q(self) -> int:
        """The torus order of every coefficient."""
        return self._q

    def _coerce(self, value: Any) -> DiscreteTorus:
        if isinstance(value, DiscreteTorus):
            if value.q != self._q:
                raise ValueError(
                    f"coefficient modulus {value.q} does not match polynomial modulus {self._q}"
                )
            return value
        return DiscreteTorus(value, self._q)

    @classmethod
    def zeros(cls, n: int, q: int) -> DiscreteTorusPoly:
        """The zero polynomial with n coefficients."""
        return cls([0] * _check_length(n), q)

    @classmethod
    def from_galois(cls, poly: GaloisFieldPoly, q: int) -> DiscreteTorusPoly:
        """Map each field coefficient to the torus, reducing modulo q."""
        q = _check_modulus(q, "q")
        return cls((c.value % q for c in poly), q)


class GaloisFieldPoly(PolyBase[GaloisFieldElement]):
    """A polynomial with coefficients in GF(p)."""

    __slots__ = ("_p",)

    def __init__(self, coeffs: Iterable[Any], p: int) -> None:
        self._p = _check_modulus(p, "p")
        super().__init__(coeffs)

    @property
    def p(self) -> int:
        """The field modulus of every coefficient."""
        return self._p

    def _coerce(self, value: Any) -> GaloisFieldElement:
        if isinstance(value, GaloisFieldElement):
            if value.p != self._p:
                raise ValueError(
                    f"coefficient modulus {value.p} does not match polynomial modulus {self._p}"
                )
            return value
        return GaloisFieldElement(value, self._p)

    @classmethod
    def zeros(cls, n: int, p: int) -> GaloisFieldPoly:
        """The zero polynomial with n coefficients."""
        return cls([0] * _check_length(n), p)

    @classmethod
    def from_int_poly(cls, poly: IntPoly, p: int) -> GaloisFieldPoly:
        """Reduce each integer coefficient modulo p."""
        return cls(poly, p)

    @classmethod
    def from_torus_poly(cls, poly: DiscreteTorusPoly, p: int) -> GaloisFieldPoly:
        """Take each torus coefficient's representative modulo p."""
        return cls((t.value for t in poly), p)