"""Value generators, default random values and seeding helpers."""

from .arbitrary import COMPLEX_SIZE, value_for
from .generator import Constant, Generator, GeneratorFunc, constant, generator_func
from .seed import derive_rng, derive_seed, resolve_seed, rng_from_seed

__all__ = [
    "COMPLEX_SIZE",
    "Constant",
    "Generator",
    "GeneratorFunc",
    "constant",
    "derive_rng",
    "derive_seed",
    "generator_func",
    "resolve_seed",
    "rng_from_seed",
    "value_for",
]
