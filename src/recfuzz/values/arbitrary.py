"""Default random values for type annotations.

:func:`value_for` plays the role of Go's ``testing/quick.Value``: given a type
annotation and a random source it returns an arbitrary value of that type.

Supported annotations
---------------------
* ``bool``, ``int`` (signed 64-bit range), ``float`` (full finite range with a
  random sign), ``complex``, ``str`` (random non-surrogate code points),
  ``bytes`` and ``bytearray``
* ``list``, ``set``, ``frozenset``, ``dict``, variadic and fixed ``tuple`` and
  their ``collections.abc`` counterparts, when parametrised
* ``Optional`` (``None`` with probability ``1/size``), ``Union``, ``Literal``,
  ``Annotated``, ``NewType``, ``Enum`` subclasses
* nested record types (see :mod:`recfuzz.record.introspect`); a record that
  contains itself other than through ``Optional`` or a union is rejected

Container lengths are drawn from ``rng.randrange(size)``.  Anything else raises
:class:`~recfuzz.utils.errors.IllegalTypeError`.
"""

from __future__ import annotations

import collections.abc as abc
import random
import sys
import types
import typing
from collections.abc import Callable
from enum import Enum
from typing import Any, Literal, Union

from recfuzz.record.introspect import introspect, is_record_type
from recfuzz.utils.errors import IllegalTypeError

__all__ = ["COMPLEX_SIZE", "value_for"]

COMPLEX_SIZE = 50

_MAX_RUNE = 0x10FFFF
_SURROGATE_START = 0xD800
_SURROGATE_COUNT = 0x800

_SEQUENCES: dict[Any, type] = {
    list: list,
    abc.Iterable: list,
    abc.Collection: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    set: set,
    abc.MutableSet: set,
    frozenset: frozenset,
    abc.Set: frozenset,
}
_MAPPINGS = (dict, abc.Mapping, abc.MutableMapping)


def _length(rng: random.Random, size: int) -> int:
    return rng.randrange(size) if size > 0 else 0


def _rand_int(rng: random.Random) -> int:
    return rng.getrandbits(64) - (1 << 63)


def _rand_float(rng: random.Random) -> float:
    f = rng.random() * sys.float_info.max
    return -f if rng.getrandbits(1) else f


def _rand_str(rng: random.Random, size: int) -> str:
    chars: list[str] = []
    for _ in range(_length(rng, size)):
        cp = rng.randrange(_MAX_RUNE + 1 - _SURROGATE_COUNT)
        if cp >= _SURROGATE_START:
            cp += _SURROGATE_COUNT
        chars.append(chr(cp))
    return "".join(chars)


def _rand_bytes(rng: random.Random, size: int) -> bytes:
    return bytes(rng.getrandbits(8) for _ in range(_length(rng, size)))


_SCALARS: dict[type, Callable[[random.Random, int], Any]] = {
    bool: lambda rng, size: rng.getrandbits(1) == 0,
    int: lambda rng, size: _rand_int(rng),
    float: lambda rng, size: _rand_float(rng),
    complex: lambda rng, size: complex(_rand_float(rng), _rand_float(rng)),
    str: _rand_str,
    bytes: _rand_bytes,
    bytearray: lambda rng, size: bytearray(_rand_bytes(rng, size)),
}


def _union_value(
    args: tuple[Any, ...], rng: random.Random, size: int, active: frozenset[type]
) -> Any:
    members = [arg for arg in args if arg is not type(None)]
    if len(members) < len(args):
        if not members or _length(rng, size) == 0:
            return None
        # None ends any record cycle, so nesting below an optional starts afresh
        active = frozenset()
    else:
        members = [arg for arg in members if arg not in active] or members
    chosen = members[0] if len(members) == 1 else rng.choice(members)
    return _value(chosen, rng, size, active)


def _record_value(tp: type, rng: random.Random, size: int, active: frozenset[type]) -> Any:
    if tp in active:
        raise IllegalTypeError(tp)
    record = introspect(tp)
    active = active | {tp}
    values = {
        name: _value(f.annotation, rng, size, active) for name, f in record.fields.items()
    }
    return record.build(values)


def value_for(annotation: Any, rng: random.Random, size: int = COMPLEX_SIZE) -> Any:
    """Return an arbitrary value of type ``annotation``.

    Raises :class:`IllegalTypeError` when no value can be produced for the
    annotation.
    """

    return _value(annotation, rng, size, frozenset())


def _value(annotation: Any, rng: random.Random, size: int, active: frozenset[type]) -> Any:
    supertype = getattr(annotation, "__supertype__", None)
    if supertype is not None:
        return _value(supertype, rng, size, active)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return _value(args[0], rng, size, active)
    if origin is Literal:
        if not args:
            raise IllegalTypeError(annotation)
        return rng.choice(args)
    if origin is Union or origin is types.UnionType:
        return _union_value(args, rng, size, active)

    base = origin if origin is not None else annotation
    if annotation is type(None) or annotation is None:
        return None
    if not isinstance(base, type):
        raise IllegalTypeError(annotation)

    scalar = _SCALARS.get(base)
    if scalar is not None:
        return scalar(rng, size)
    if base is tuple:
        if args and args[-1] is Ellipsis:
            return tuple(_value(args[0], rng, size, active) for _ in range(_length(rng, size)))
        if not args and origin is None:
            raise IllegalTypeError(annotation)
        return tuple(_value(arg, rng, size, active) for arg in args if arg != ())
    if base in _SEQUENCES:
        if len(args) != 1:
            raise IllegalTypeError(annotation)
        factory = _SEQUENCES[base]
        return factory(_value(args[0], rng, size, active) for _ in range(_length(rng, size)))
    if base in _MAPPINGS:
        if len(args) != 2:
            raise IllegalTypeError(annotation)
        key_type, value_type = args
        return {
            _value(key_type, rng, size, active): _value(value_type, rng, size, active)
            for _ in range(_length(rng, size))
        }
    if issubclass(base, Enum):
        members = list(base)
        if not members:
            raise IllegalTypeError(annotation)
        return rng.choice(members)
    if is_record_type(base):
        return _record_value(base, rng, size, active)
    raise IllegalTypeError(annotation)
