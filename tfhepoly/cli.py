"""Command line of the polynomial multiplication benchmark."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass
from typing import NoReturn, Optional, Sequence

from tfhepoly import log
from tfhepoly.log import LogError
from tfhepoly.measure import PolynomialMultiplicationMeasure
from tfhepoly.multiplication import MultiplicationMethod, create_method
from tfhepoly.params import MultiplicationKind, Params

LOG_FILE = "log.txt"
TOTAL_TESTCASE = 1000
_UINT32_MAX = 0xFFFF_FFFF


@dataclass
class CommandLine:
    """Parsed options: parameters, the chosen method and the seeded generator."""

    params: Params
    seed: int
    rng: random.Random
    method: MultiplicationMethod


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        log.error(message)
        raise AssertionError("unreachable")


def uint32(text: str) -> int:
    """Parse an unsigned 32-bit integer."""
    value = int(text)
    if not 0 <= value <= _UINT32_MAX:
        raise argparse.ArgumentTypeError(f"{text} is not an unsigned 32-bit integer")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = _Parser(description="Options")
    parser.add_argument(
        "-P", "--param", nargs=3, type=uint32, metavar=("q", "n", "N"),
        help="[REQUIRED] TFHE Parameter. Specify q and n, N, where q is a integer "
        "ring order and n is the length of secret key, N is degree of Polynomial. "
        "e.g. -P 12289 4 1024",
    )
    parser.add_argument(
        "-N", "--ntt", nargs="+", type=uint32, metavar="P",
        help="[REQUIRED] Specify modulus P, where P is a prime number. e.g. -N 12289",
    )
    parser.add_argument(
        "-S", "--seed", type=uint32,
        help="[OPTIONAL] Seed for random number generator.",
    )
    parser.add_argument(
        "--method", choices=[kind.value for kind in MultiplicationKind],
        default=MultiplicationKind.NTT.value,
        help="Polynomial multiplication method (default: ntt).",
    )
    return parser


def parse_command_line(argv: Optional[Sequence[str]] = None) -> CommandLine:
    """Parse the options and set up the multiplication method; errors raise LogError."""
    args = _build_parser().parse_args(argv)
    params = Params(method=MultiplicationKind(args.method))

    if args.param is not None:
        params.q, params.n, params.degree = args.param

    log.info("RLWE Param = {\n",
             "q =", params.q, "\n",
             "n =", params.n, "\n",
             "N =", params.degree, "\n}")

    if params.method is MultiplicationKind.NTT:
        log.info("Polynomial Multiplication Method: [ NTT ]")
        if args.ntt is not None:
            params.ntt_modulus = args.ntt[0]
            log.debug("NTT param = {\n",
                      "P =", params.ntt_modulus, "\n",
                      "N =", params.degree, "\n}")
    else:
        log.info("Polynomial Multiplication Method: [ Naive ]")
        log.warn(
            "Naive polynomial multiplication has been selected. This method is less "
            "efficient and may result in slower performance compared to NTT."
        )

    try:
        method = create_method(params)
    except ValueError as exc:
        log.error(str(exc))
        raise AssertionError("unreachable") from exc

    seed = args.seed if args.seed is not None else 0
    return CommandLine(params=params, seed=seed, rng=random.Random(seed), method=method)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the benchmark and write its timings to log.txt."""
    try:
        command = parse_command_line(argv)
    except LogError:
        return 1
    with open(LOG_FILE, "w", encoding="utf-8") as stream:
        PolynomialMultiplicationMeasure(
            stream, command.rng, TOTAL_TESTCASE, command.params, command.method
        ).measure()
    return 0