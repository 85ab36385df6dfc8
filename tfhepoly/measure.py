"""Benchmark of integer-by-torus polynomial multiplication."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Optional, TextIO

from tfhepoly import log
from tfhepoly.multiplication import MultiplicationMethod, create_method
from tfhepoly.params import Params
from tfhepoly.poly import DiscreteTorusPoly, IntPoly
from tfhepoly.timing import StopWatch


@dataclass(frozen=True)
class MeasureResult:
    """Total and per-multiplication time of one benchmark run."""

    total_ms: int
    average_ms: float


class PolynomialMultiplicationMeasure:
    """Times a batch of multiplications of random polynomials."""

    def __init__(
        self,
        stream: TextIO,
        rng: random.Random,
        total_testcase: int,
        params: Params,
        method: Optional[MultiplicationMethod] = None,
    ) -> None:
        if total_testcase <= 0:
            raise ValueError(f"total_testcase must be positive, got {total_testcase}")
        if method is None:
            method = create_method(params)
        elif params.q <= 0 or params.degree <= 0:
            raise ValueError("q and degree must be positive")
        self._stream = stream
        self._rng = rng
        self._total_testcase = total_testcase
        self._params = params
        self._method = method
        self._stopwatch = StopWatch()

    @property
    def total_testcase(self) -> int:
        """Number of multiplications timed by one run."""
        return self._total_testcase

    def _random_pair(self) -> tuple[IntPoly, DiscreteTorusPoly]:
        q = self._params.q
        ints: list[int] = []
        tori: list[int] = []
        for _ in range(self._params.degree):
            ints.append(self._rng.randrange(q))
            tori.append(self._rng.randrange(q))
        return IntPoly(ints), DiscreteTorusPoly(tori, q)

    def measure(self) -> MeasureResult:
        """Multiply random polynomial pairs and write the timings to the stream."""
        log.info("Total Testcase: ", self._total_testcase)

        pairs = [self._random_pair() for _ in range(self._total_testcase)]

        self._stopwatch.start("start")
        for int_poly, torus_poly in pairs:
            self._method.multiply(int_poly, torus_poly)
        total_ms = self._stopwatch.stop("stop")

        average_ms = total_ms / self._total_testcase
        self._stream.write(f"Total(ms): {total_ms}\n")
        self._stream.write(f"Avg(ms): {average_ms:g}\n")
        self._stream.flush()
        return MeasureResult(total_ms, average_ms)