"""Discrete torus polynomials, NTT multiplication and TLWE encryption."""

__version__ = "0.1.0"

__all__ = [
    "arith",
    "cli",
    "field",
    "log",
    "measure",
    "multiplication",
    "network",
    "params",
    "poly",
    "timing",
    "tlwe",
]