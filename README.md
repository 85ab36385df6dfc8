# tfhepoly

Building blocks for TFHE-style lattice cryptography, in pure Python with
no runtime dependencies:

- `tfhepoly.params` – `Params` (q, n, degree N, NTT prime P and the
  chosen `MultiplicationKind`, `NTT` or `NAIVE`) with `Params.validate()`
- `tfhepoly.field` – `DiscreteTorus` (Z/qZ) and `GaloisFieldElement` (GF(p))
- `tfhepoly.poly` – `IntPoly`, `DiscreteTorusPoly` and `GaloisFieldPoly`
- `tfhepoly.multiplication` – negacyclic multiplication in `Z[X]/(X^N + 1)`:
  `NaiveMultiplicationMethod` (schoolbook) and `NTTMultiplicationMethod`
  (number theoretic transform with precomputed, bit-reversed powers of a
  primitive 2N-th root of unity), plus `create_method(params)`
- `tfhepoly.tlwe` – `DiscreteTLWE` ciphertexts with `encrypt` and `decrypt`
- `tfhepoly.arith` – `extended_euclidean`, `is_coprime`, `naive_modulus`,
  `mersenne_modulus` and the `Montgomery` multiplication helper
- `tfhepoly.timing` – `ChronoTimer` and `StopWatch`
- `tfhepoly.measure` – `PolynomialMultiplicationMeasure`, a benchmark
- `tfhepoly.network` – a one-shot TCP server and client
- `tfhepoly.log` – coloured console messages; `log.error` raises `LogError`

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Parameters

- `q` – order of the ring that torus coefficients live in
- `n` – length of the secret key
- `N` (`Params.degree`) – number of polynomial coefficients

NTT multiplication also needs a prime `P` (`Params.ntt_modulus`) with
`P - 1` divisible by `2N`, and `N` must be a power of two; for example
`P = 12289` with `N = 1024`. `Params.validate()` raises `ValueError` when
these conditions fail. `create_method(params)` validates the parameters
and returns the selected method; methods with the same settings are
shared.

## Library use

```python
import random

from tfhepoly.tlwe import encrypt, decrypt

q = 12289
secret = [1, 0, 1, 1]
rng = random.Random(0)

ciphertext = encrypt(42, secret, q, rng)
assert int(decrypt(ciphertext, secret)) == 42
```

Ciphertexts can be added (`+`, `+=`) and scaled by an integer (`*=`).

Multiplying an integer polynomial by a torus polynomial:

```python
from tfhepoly.multiplication import NaiveMultiplicationMethod
from tfhepoly.poly import IntPoly, DiscreteTorusPoly

q, n = 12289, 4
method = NaiveMultiplicationMethod(q, n)

a = IntPoly([1, 2, 3, 4])
b = DiscreteTorusPoly([5, 6, 7, 8], q)
print(method.multiply(a, b))
```

`NTTMultiplicationMethod(p, n)` has the same `multiply` interface. It
computes the product over GF(P) and then reduces each coefficient modulo
the torus order `q`, so it agrees with the naive method when `P == q`.
`multiply_galois`, `multiply_schoolbook`, `forward_ntt` and `inverse_ntt`
work directly on `GaloisFieldPoly` values.

## Benchmark

```
tfhepoly -P 12289 4 1024 -N 12289 -S 0
```

- `-P q n N` – the scheme parameters
- `-N P` – the prime modulus for NTT multiplication
- `-S seed` – seed for the random number generator (default `0`)
- `--method ntt|naive` – multiplication method (default `ntt`)
- `-h` – help

It multiplies 1000 pairs of random polynomials and writes the total and
average time in milliseconds to `log.txt` in the current directory.
Invalid parameters are reported as an error and the command exits with
status 1.

## Server and client

```
tfhepoly-server -P 12289 4 4 -M 14
```

- `-P q n N` – torus order, key length and polynomial degree
- `-M r` – Montgomery scaling factor, `R = 2^r` must exceed `q`; the
  server checks the Montgomery constants and prints them
- `-N P` – NTT prime (default: `q`)
- `--method ntt|naive` – multiplication method (default `ntt`)
- `--host`, `--port` – where to listen (default all addresses, port 8080)
- `--timeout` – seconds to wait for a client (default 10)

The server serves a single client and then shuts down. If no client
connects within the timeout it shuts down as well. SIGINT and SIGTERM
stop it.

```
tfhepoly-client
```

The client connects to `127.0.0.1:8080` (`--host`, `--port` change this),
sends the polynomials `1 2 3 4` and `5 6 7 8`, and prints the coefficients
of their product. The server's degree `N` must match the length of the
polynomials sent, which is why the example above uses `N = 4`.

Requests carry two 64-bit little-endian lengths followed by both
coefficient lists as 32-bit little-endian integers; responses carry one
length and the product's coefficients. No message may exceed 1024 bytes.
`encode_request`, `decode_request`, `encode_response` and
`decode_response` implement this format, and `run_server`, `run_client`
and `handle_client` can be called from Python.

## What it does not do

There is no RLWE/TRLWE ciphertext type, no key generation, and no
bootstrapping. Montgomery arithmetic is provided as a helper but the
field and polynomial arithmetic use plain modular reduction. The server
handles exactly one connection and one request.