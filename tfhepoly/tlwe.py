"""TLWE ciphertexts over the discrete torus with encryption and decryption."""

from __future__ import annotations

import random
from typing import Any, Iterable, Iterator, Sequence

from tfhepoly.field import DiscreteTorus


class DiscreteTLWE:
    """A TLWE ciphertext (a_0, ..., a_{n-1}, b) with entries in Z/qZ."""

    __slots__ = ("_v", "_q")

    def __init__(self, values: Iterable[Any], q: int) -> None:
        if q <= 0:
            raise ValueError(f"q must be positive, got {q}")
        self._q = q
        self._v = [self._coerce(v) for v in values]
        if not self._v:
            raise ValueError("a TLWE ciphertext needs at least the b component")

    def _coerce(self, value: Any) -> DiscreteTorus:
        if isinstance(value, DiscreteTorus):
            if value.q != self._q:
                raise ValueError(f"element modulus {value.q} does not match {self._q}")
            return value
        return DiscreteTorus(value, self._q)

    @property
    def q(self) -> int:
        """The torus order."""
        return self._q

    @property
    def n(self) -> int:
        """Length of the secret key this ciphertext belongs to."""
        return len(self._v) - 1

    @property
    def values(self) -> list[DiscreteTorus]:
        """A copy of the ciphertext components."""
        return list(self._v)

    def __len__(self) -> int:
        return len(self._v)

    def __getitem__(self, i: int) -> DiscreteTorus:
        return self._v[i]

    def __iter__(self) -> Iterator[DiscreteTorus]:
        return iter(self._v)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DiscreteTLWE):
            return NotImplemented
        return self._q == other._q and self._v == other._v

    __hash__ = None  # type: ignore[assignment]

    def _check_compatible(self, other: DiscreteTLWE) -> None:
        if len(other) != len(self) or other.q != self._q:
            raise ValueError("TLWE ciphertexts have different shapes or moduli")

    def __add__(self, other: Any) -> DiscreteTLWE:
        if not isinstance(other, DiscreteTLWE):
            return NotImplemented
        self._check_compatible(other)
        return DiscreteTLWE((x + y for x, y in zip(self._v, other._v)), self._q)

    def __iadd__(self, other: Any) -> DiscreteTLWE:
        if not isinstance(other, DiscreteTLWE):
            return NotImplemented
        self._check_compatible(other)
        self._v = [x + y for x, y in zip(self._v, other._v)]
        return self

    def __imul__(self, c: Any) -> DiscreteTLWE:
        if not isinstance(c, int):
            return NotImplemented
        self._v = [x * c for x in self._v]
        return self

    def __str__(self) -> str:
        return "".join(f"{t.value} " for t in self._v)

    def __repr__(self) -> str:
        return f"DiscreteTLWE({[t.value for t in self._v]!r}, q={self._q})"


def encrypt(
    message: int,
    secret: Sequence[int],
    q: int,
    rng: random.Random | None = None,
) -> DiscreteTLWE:
    """Encrypt a message in 0..q-1 under a secret key with uniform mask values."""
    if rng is None:
        rng = random.Random()
    b = DiscreteTorus(message, q)
    mask = []
    for s in secret:
        a = DiscreteTorus(rng.randrange(q), q)
        mask.append(a)
        b = b + s * a
    return DiscreteTLWE([*mask, b], q)


def decrypt(tlwe: DiscreteTLWE, secret: Sequence[int]) -> DiscreteTorus:
    """Recover b - <a, s> from a ciphertext."""
    if len(secret) != tlwe.n:
        raise ValueError(
            f"secret key length {len(secret)} does not match ciphertext length {tlwe.n}"
        )
    b = tlwe[tlwe.n]
    for s, a in zip(secret, tlwe):
        b = b - s * a
    return b