"""Integer helpers: extended Euclid, modular reduction and Montgomery arithmetic."""

from __future__ import annotations


def extended_euclidean(a: int, b: int) -> tuple[int, int]:
    """Return (s, t) with s*a + t*b == gcd(a, b)."""
    if a < 0 or b < 0:
        raise ValueError("extended_euclidean expects non-negative integers")
    quotients = []
    while b:
        quotients.append(a // b)
        a, b = b, a % b
    s, t = 1, 0
    for quotient in reversed(quotients):
        s, t = t, s - t * quotient
    return s, t


def is_coprime(a: int, b: int) -> bool:
    """Whether a and b share no common factor."""
    s, t = extended_euclidean(a, b)
    return s * a + t * b == 1


def naive_modulus(x: int, q: int) -> int:
    """Reduce x modulo q by division."""
    if q <= 0:
        raise ValueError(f"modulus must be positive, got {q}")
    return x % q


def mersenne_modulus(x: int, p: int) -> int:
    """Reduce x by masking with p - 1 (exact when p is a power of two)."""
    if p <= 0:
        raise ValueError(f"modulus must be positive, got {p}")
    return x & (p - 1)


class Montgomery:
    """Montgomery multiplication modulo q with scaling factor R = 2**r_bits."""

    __slots__ = ("q", "r_bits", "r", "mu", "r2")

    def __init__(self, q: int, r_bits: int) -> None:
        if q <= 0:
            raise ValueError(f"modulus must be positive, got {q}")
        if r_bits <= 0:
            raise ValueError(f"r_bits must be positive, got {r_bits}")
        self.q = q
        self.r_bits = r_bits
        self.r = 1 << r_bits
        if self.r <= q:
            raise ValueError(f"R = 2^{r_bits} must exceed the modulus {q}")
        # mu = -q^{-1} mod R
        self.mu = (self.r - extended_euclidean(self.r, q)[1]) % self.r
        self.r2 = (self.r * self.r) % q
        if (self.mu * q) % self.r != self.r - 1:
            raise ValueError("Montgomery constant mismatched")

    def redc(self, x: int) -> int:
        """Return a value congruent to x * R^-1 modulo q."""
        mask = self.r - 1
        tmp = (self.mu * (x & mask)) & mask
        result = (x + self.q * tmp) >> self.r_bits
        if result >= self.q:
            result -= self.q
        return result

    def mul(self, x: int, y: int) -> int:
        """Multiply two values in Montgomery representation."""
        return self.redc(x * y)

    def to_repr(self, x: int) -> int:
        """Convert x into Montgomery representation."""
        return self.mul(x, self.r2)

    def from_repr(self, x: int) -> int:
        """Convert x out of Montgomery representation."""
        return self.mul(x, 1)