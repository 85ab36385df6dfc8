"""Scheme parameters shared by the torus, field and multiplication code."""

from __future__ import annotations

import enum
from dataclasses import dataclass

_UINT32_MAX = 0xFFFF_FFFF


class MultiplicationKind(enum.Enum):
    """Algorithm used to multiply an integer polynomial by a torus polynomial."""

    NTT = "ntt"
    NAIVE = "naive"


@dataclass
class Params:
    """RLWE parameters together with the NTT prime and the multiplication method.

    ``q`` is the order of the discrete torus, ``n`` the secret key length,
    ``degree`` the polynomial degree N and ``ntt_modulus`` the prime P used
    by the number theoretic transform.
    """

    q: int = 0
    n: int = 0
    degree: int = 0
    ntt_modulus: int = 0
    method: MultiplicationKind = MultiplicationKind.NTT

    @property
    def field_modulus(self) -> int:
        """Modulus used for field reductions under the selected method."""
        if self.method is MultiplicationKind.NTT:
            return self.ntt_modulus
        return self.q

    def validate(self) -> None:
        """Raise ValueError if the parameters cannot be used."""
        if not 0 < self.q <= _UINT32_MAX:
            raise ValueError(f"q must be in 1..{_UINT32_MAX}, got {self.q}")
        if self.n < 0:
            raise ValueError(f"n must not be negative, got {self.n}")
        if self.degree <= 0:
            raise ValueError(f"degree must be positive, got {self.degree}")
        if not isinstance(self.method, MultiplicationKind):
            raise ValueError("Polynomial Multiplication Method is not defined")
        if self.method is MultiplicationKind.NTT:
            if not 1 < self.ntt_modulus <= _UINT32_MAX:
                raise ValueError(
                    f"NTT modulus P must be in 2..{_UINT32_MAX}, got {self.ntt_modulus}"
                )
            if self.degree & (self.degree - 1):
                raise ValueError(
                    f"degree must be a power of two for NTT, got {self.degree}"
                )
            if (self.ntt_modulus - 1) % (2 * self.degree) != 0:
                raise ValueError("P-1 is not divisible by 2N")