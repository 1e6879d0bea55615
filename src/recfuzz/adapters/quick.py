"""Adaptors exposing generators to randomized-testing drivers.

Generators and sessions report failure through exceptions wrapped by the
session, or through :class:`~recfuzz.session.Produced` results.  Test drivers
expect a different shape: a callable with no error channel that either returns
a value or aborts the run.  The helpers here provide those shapes:

* :func:`quick_generator` wraps one generator as a plain ``(rng, size)``
  callable;
* :func:`quick_values` fills a list of argument slots positionally from a
  sequence of generators;
* :func:`as_strategy` turns a generator into a Hypothesis strategy;
* :func:`check` is a small property runner built on :func:`quick_values`.

Every failure surfaces as :class:`~recfuzz.utils.errors.GeneratorFailure`
with the original exception as ``__cause__``.
"""

from __future__ import annotations

import inspect
import random
from collections.abc import Callable, MutableSequence
from typing import TYPE_CHECKING, Any

from recfuzz.config import ConfigModel, load_config
from recfuzz.utils.errors import CheckError, GeneratorFailure, IncongruentValuesError
from recfuzz.values.arbitrary import COMPLEX_SIZE
from recfuzz.values.generator import Generator
from recfuzz.values.seed import resolve_seed, rng_from_seed

if TYPE_CHECKING:  # pragma: no cover - typing only
    from hypothesis.strategies import SearchStrategy

__all__ = ["QuickGenerator", "as_strategy", "check", "quick_generator", "quick_values"]


def _generate(generator: Generator, rng: random.Random, size: int) -> Any:
    try:
        return generator.generate(rng, size)
    except Exception as exc:
        raise GeneratorFailure(None, exc) from exc


class QuickGenerator:
    """A generator presented as a plain callable that raises on failure."""

    __slots__ = ("generator",)

    def __init__(self, generator: Generator) -> None:
        self.generator = generator

    def __call__(self, rng: random.Random, size: int = 0) -> Any:
        return _generate(self.generator, rng, size)


def quick_generator(generator: Generator) -> QuickGenerator:
    return QuickGenerator(generator)


def quick_values(
    *generators: Generator, size: int = 0
) -> Callable[[MutableSequence[Any], random.Random], None]:
    """Return a function filling ``slots[i]`` from ``generators[i]``.

    The returned function raises :class:`IncongruentValuesError` before
    generating anything when the number of slots differs from the number of
    generators.
    """

    def fill(slots: MutableSequence[Any], rng: random.Random) -> None:
        if len(slots) != len(generators):
            raise IncongruentValuesError(len(slots), len(generators))
        for i, generator in enumerate(generators):
            slots[i] = _generate(generator, rng, size)

    return fill


def as_strategy(generator: Generator, *, size: int = COMPLEX_SIZE) -> SearchStrategy[Any]:
    """Return a Hypothesis strategy drawing values from ``generator``.

    Hypothesis seeds a fresh random source for every example, so failing
    examples replay deterministically.  Requires the ``hypothesis`` extra.
    """

    from hypothesis import strategies as st

    quick = QuickGenerator(generator)
    return st.randoms(use_true_random=True).map(lambda rng: quick(rng, size))


def _arity(prop: Callable[..., Any]) -> int:
    params = inspect.signature(prop).parameters.values()
    return sum(
        1
        for p in params
        if p.kind in (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    )


def check(
    prop: Callable[..., Any],
    *generators: Generator,
    max_count: int | None = None,
    rng: random.Random | None = None,
    size: int | None = None,
    cfg: ConfigModel | None = None,
) -> None:
    """Call ``prop`` repeatedly with arguments drawn from ``generators``.

    ``prop`` receives one positional argument per generator and must return a
    truthy value.  The first falsy result or exception raises
    :class:`CheckError` carrying the 1-based iteration and the inputs.
    Defaults for ``max_count``, ``size`` and the seed come from ``cfg``.
    """

    if cfg is None:
        cfg = load_config()
    count = max_count if max_count is not None else cfg.check.max_count
    hint = size if size is not None else cfg.values.size_hint
    source = rng if rng is not None else rng_from_seed(resolve_seed(cfg))
    fill = quick_values(*generators, size=hint)
    arity = _arity(prop)

    for i in range(count):
        args: list[Any] = [None] * arity
        fill(args, source)
        try:
            ok = prop(*args)
        except Exception as exc:
            raise CheckError(i + 1, tuple(args), exc) from exc
        if not ok:
            raise CheckError(i + 1, tuple(args))
