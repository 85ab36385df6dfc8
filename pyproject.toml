[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tfhepoly"
version = "0.1.0"
description = "Negacyclic polynomial arithmetic over the discrete torus for TFHE-style schemes, with naive and NTT multiplication"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "tfhe",
    "fhe",
    "homomorphic encryption",
    "lwe",
    "ntt",
    "number theoretic transform",
    "montgomery",
    "polynomial multiplication",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: Scientific/Engineering :: Mathematics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tfhepoly = "tfhepoly.cli:main"
tfhepoly-server = "tfhepoly.network:server_main"
tfhepoly-client = "tfhepoly.network:client_main"

[tool.hatch.build.targets.wheel]
packages = ["tfhepoly"]

[tool.hatch.build.targets.sdist]
include = ["tfhepoly", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
