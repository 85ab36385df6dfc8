"""TCP server and client that multiply an integer polynomial by a torus polynomial.

A request carries two 64-bit little-endian lengths followed by the two
coefficient lists as 32-bit little-endian integers.  The response carries
one 64-bit length followed by the product's coefficients.  Neither message
may exceed 1024 bytes.
"""

from __future__ import annotations

import argparse
import contextlib
import select
import signal
import socket
import struct
import sys
import threading
from typing import Any, Callable, Iterator, NoReturn, Optional, Sequence

from tfhepoly import log
from tfhepoly.arith import Montgomery
from tfhepoly.cli import uint32
from tfhepoly.log import LogError
from tfhepoly.multiplication import MultiplicationMethod, create_method
from tfhepoly.params import MultiplicationKind, Params
from tfhepoly.poly import DiscreteTorusPoly, IntPoly

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080
DEFAULT_TIMEOUT = 10.0
BUFFER_SIZE = 1024
LISTEN_BACKLOG = 3

_SIZE = struct.Struct("<Q")
_COEFF_SIZE = 4
_UINT32_MAX = 0xFFFF_FFFF

CLIENT_COEFFS1 = (1, 2, 3, 4)
CLIENT_COEFFS2 = (5, 6, 7, 8)


def _pack_coeffs(coeffs: Sequence[int]) -> bytes:
    values = [int(c) for c in coeffs]
    for value in values:
        if not 0 <= value <= _UINT32_MAX:
            raise ValueError(f"coefficient {value} is not an unsigned 32-bit integer")
    return struct.pack(f"<{len(values)}I", *values)


def _unpack_coeffs(data: bytes, offset: int, count: int) -> list[int]:
    return list(struct.unpack_from(f"<{count}I", data, offset))


def _check_size(message: bytes) -> bytes:
    if len(message) > BUFFER_SIZE:
        raise ValueError(
            f"message of {len(message)} bytes exceeds the {BUFFER_SIZE}-byte buffer"
        )
    return message


def encode_request(coeffs1: Sequence[int], coeffs2: Sequence[int]) -> bytes:
    """Serialise the integer and torus coefficient lists of a request."""
    message = (
        _SIZE.pack(len(coeffs1))
        + _SIZE.pack(len(coeffs2))
        + _pack_coeffs(coeffs1)
        + _pack_coeffs(coeffs2)
    )
    return _check_size(message)


def _request_length(data: bytes) -> Optional[int]:
    header = 2 * _SIZE.size
    if len(data) < header:
        return None
    (size1,) = _SIZE.unpack_from(data, 0)
    (size2,) = _SIZE.unpack_from(data, _SIZE.size)
    return header + (size1 + size2) * _COEFF_SIZE


def decode_request(data: bytes) -> tuple[list[int], list[int]]:
    """Split a request into its two coefficient lists."""
    expected = _request_length(data)
    if expected is None:
        raise ValueError("request is shorter than its header")
    if expected > BUFFER_SIZE:
        raise ValueError(f"request of {expected} bytes exceeds the {BUFFER_SIZE}-byte buffer")
    if len(data) < expected:
        raise ValueError(f"request is truncated: {len(data)} of {expected} bytes")
    (size1,) = _SIZE.unpack_from(data, 0)
    (size2,) = _SIZE.unpack_from(data, _SIZE.size)
    offset = 2 * _SIZE.size
    coeffs1 = _unpack_coeffs(data, offset, size1)
    coeffs2 = _unpack_coeffs(data, offset + size1 * _COEFF_SIZE, size2)
    return coeffs1, coeffs2


def encode_response(coeffs: Sequence[int]) -> bytes:
    """Serialise the coefficients of a product."""
    return _check_size(_SIZE.pack(len(coeffs)) + _pack_coeffs(coeffs))


def _response_length(data: bytes) -> Optional[int]:
    if len(data) < _SIZE.size:
        return None
    (size,) = _SIZE.unpack_from(data, 0)
    return _SIZE.size + size * _COEFF_SIZE


def decode_response(data: bytes) -> list[int]:
    """Read the product coefficients from a response."""
    expected = _response_length(data)
    if expected is None:
        raise ValueError("response is shorter than its header")
    if expected > BUFFER_SIZE:
        raise ValueError(f"response of {expected} bytes exceeds the {BUFFER_SIZE}-byte buffer")
    if len(data) < expected:
        raise ValueError(f"response is truncated: {len(data)} of {expected} bytes")
    (size,) = _SIZE.unpack_from(data, 0)
    return _unpack_coeffs(data, _SIZE.size, size)


def _receive(conn: Any, expected_length: Callable[[bytes], Optional[int]]) -> bytes:
    """Read until the message named by its header is complete, EOF or the buffer is full."""
    data = b""
    while len(data) < BUFFER_SIZE:
        chunk = conn.recv(BUFFER_SIZE - len(data))
        if not chunk:
            break
        data += chunk
        expected = expected_length(data)
        if expected is not None and len(data) >= min(expected, BUFFER_SIZE):
            break
    return data


def handle_client(
    conn: Any, params: Params, method: Optional[MultiplicationMethod] = None
) -> Optional[list[int]]:
    """Serve one request on a connected socket and close it.

    Returns the product's coefficients, or None if the client sent nothing.
    """
    log.info("Client connected")
    try:
        data = _receive(conn, _request_length)
        if not data:
            print(
                "Failed to read data from client or client disconnected",
                file=sys.stderr,
                flush=True,
            )
            return None
        if method is None:
            method = create_method(params)
        coeffs1, coeffs2 = decode_request(data)
        product = method.multiply(IntPoly(coeffs1), DiscreteTorusPoly(coeffs2, params.q))
        log.debug(product)
        result = [t.value for t in product]
        conn.sendall(encode_response(result))
        return result
    finally:
        conn.close()


def run_server(
    params: Params,
    method: Optional[MultiplicationMethod] = None,
    host: str = "",
    port: int = DEFAULT_PORT,
    timeout: float = DEFAULT_TIMEOUT,
) -> Optional[list[int]]:
    """Accept one client, serve it and shut down.

    Returns the product sent to the client, or None if no client connected
    within ``timeout`` seconds or the client sent nothing.
    """
    if method is None:
        method = create_method(params)
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as server:
        server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        server.bind((host, port))
        server.listen(LISTEN_BACKLOG)

        readable, _, _ = select.select([server], [], [], timeout)
        if not readable:
            print(
                f"Timeout: No client connection within {timeout:g} seconds. "
                "Shutting down server.",
                flush=True,
            )
            return None

        conn, _ = server.accept()
        result = handle_client(conn, params, method)
        print("Client disconnected. Shutting down server.", flush=True)
        return result


def run_client(
    coeffs1: Sequence[int],
    coeffs2: Sequence[int],
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> list[int]:
    """Send two coefficient lists to the server and return the product."""
    with socket.create_connection((host, port)) as conn:
        log.info("Connected to server")
        conn.sendall(encode_request(coeffs1, coeffs2))
        return decode_response(_receive(conn, _response_length))


class _UsageError(ValueError):
    pass


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        raise _UsageError(message)


def _report_error(message: str) -> None:
    try:
        log.error(message)
    except LogError:
        pass


@contextlib.contextmanager
def _shutdown_on_signals() -> Iterator[None]:
    if threading.current_thread() is not threading.main_thread():
        yield
        return

    def handler(signum: int, frame: Any) -> None:
        print(
            f"Interrupt signal ({signum}) received. Shutting down server.", flush=True
        )
        raise SystemExit(signum)

    previous = {sig: signal.signal(sig, handler) for sig in (signal.SIGINT, signal.SIGTERM)}
    try:
        yield
    finally:
        for sig, old in previous.items():
            signal.signal(sig, old)


def _build_server_parser() -> argparse.ArgumentParser:
    parser = _Parser(description="Options")
    parser.add_argument(
        "-P", "--param", nargs=3, type=uint32, metavar=("q", "n", "N"),
        help="[REQUIRED] TFHE Parameter. Specify q and n, N, where q is the torus "
        "order, n is the length of secret key and N is degree of Polynomial. "
        "e.g. -P 12289 4 1024",
    )
    parser.add_argument(
        "-M", "--mont", type=uint32, metavar="r",
        help="[REQUIRED] Montgomery Multiplication scaling factor R. "
        "Specify integer r, so that R = 2^r > q. e.g. -M 18",
    )
    parser.add_argument(
        "-N", "--ntt", type=uint32, metavar="P",
        help="NTT prime P (default: q).",
    )
    parser.add_argument(
        "--method", choices=[kind.value for kind in MultiplicationKind],
        default=MultiplicationKind.NTT.value,
        help="Polynomial multiplication method (default: ntt).",
    )
    parser.add_argument("--host", default="", help="Address to listen on.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Port to listen on.")
    parser.add_argument(
        "--timeout", type=float, default=DEFAULT_TIMEOUT,
        help="Seconds to wait for a client.",
    )
    return parser


def server_main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the multiplication server; returns the exit status."""
    try:
        args = _build_server_parser().parse_args(argv)
    except _UsageError as exc:
        _report_error(str(exc))
        return 1
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0

    if args.param is None:
        _report_error("the option --param is required")
        return 1
    if args.mont is None:
        _report_error("the option --mont is required")
        return 1

    q, n, degree = args.param
    params = Params(
        q=q,
        n=n,
        degree=degree,
        ntt_modulus=args.ntt if args.ntt is not None else q,
        method=MultiplicationKind(args.method),
    )
    log.debug("param = {\n",
              "q =", params.q, "\n",
              "n =", params.n, "\n",
              "N =", params.degree, "\n}")

    try:
        montgomery = Montgomery(params.q, args.mont)
    except ValueError as exc:
        _report_error(str(exc))
        return 1
    log.debug("Montgomery param = {\n",
              "R =", montgomery.r, "\n",
              "μ =", montgomery.mu, "\n",
              "R^2 =", montgomery.r2, "\n}")

    if params.method is MultiplicationKind.NTT:
        log.info("Polynomial Multiplication Method: [NTT]")
    else:
        log.info("Polynomial Multiplication Method: [Naive]")
        log.warn(
            "Naive polynomial multiplication has been selected. This method is less "
            "efficient and may result in slower performance compared to NTT."
        )

    try:
        method = create_method(params)
    except ValueError as exc:
        _report_error(str(exc))
        return 1

    try:
        with _shutdown_on_signals():
            run_server(params, method, args.host, args.port, args.timeout)
    except OSError as exc:
        print(f"server error: {exc}", file=sys.stderr, flush=True)
        return 1
    return 0


def client_main(argv: Optional[Sequence[str]] = None) -> int:
    """Send the sample polynomials to the server and print the product."""
    parser = argparse.ArgumentParser(description="Polynomial multiplication client")
    parser.add_argument("--host", default=DEFAULT_HOST, help="Server address.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="Server port.")
    args = parser.parse_args(argv)

    try:
        result = run_client(CLIENT_COEFFS1, CLIENT_COEFFS2, args.host, args.port)
    except OSError:
        print("Connection Failed", file=sys.stderr, flush=True)
        return 1
    except ValueError as exc:
        print(f"Invalid response: {exc}", file=sys.stderr, flush=True)
        return 1

    print("Result: " + "".join(f"{c} " for c in result), flush=True)
    return 0