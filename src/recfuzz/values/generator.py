"""Generator protocol and small adaptors.

A generator produces one value per call from a :class:`random.Random` and an
integer size hint.  It reports failure by raising; sessions and adapters wrap
whatever it raises in :class:`~recfuzz.utils.errors.GeneratorFailure`.
"""

from __future__ import annotations

import random
from collections.abc import Callable
from typing import Any, Protocol, runtime_checkable

__all__ = ["Constant", "Generator", "GeneratorFunc", "constant", "generator_func"]


@runtime_checkable
class Generator(Protocol):
    """Protocol for value generators."""

    def generate(self, rng: random.Random, size: int) -> Any:
        """Return a generated value for random source ``rng`` and size hint ``size``."""

        ...


class GeneratorFunc:
    """Adaptor allowing an ordinary function to act as a :class:`Generator`."""

    __slots__ = ("func",)

    def __init__(self, func: Callable[[random.Random, int], Any]) -> None:
        self.func = func

    def generate(self, rng: random.Random, size: int) -> Any:
        return self.func(rng, size)

    def __repr__(self) -> str:
        name = getattr(self.func, "__qualname__", repr(self.func))
        return f"GeneratorFunc({name})"


def generator_func(func: Callable[[random.Random, int], Any]) -> GeneratorFunc:
    """Decorator form of :class:`GeneratorFunc`."""

    return GeneratorFunc(func)


class Constant:
    """Generator that always returns the same value."""

    __slots__ = ("value",)

    def __init__(self, value: Any) -> None:
        self.value = value

    def generate(self, rng: random.Random, size: int) -> Any:
        return self.value

    def __repr__(self) -> str:
        return f"Constant({self.value!r})"


def constant(value: Any) -> Constant:
    return Constant(value)
