"""Zero values for record fields.

A field's zero value is its declared default when it has one.  Otherwise it is
derived from the annotation: ``None`` for optional and untyped fields, ``0``,
``""`` and friends for scalars, empty containers, the first member of an enum
or literal, and an all-zero instance for nested records.  Types with no
obvious zero map to ``None``, and so does a record field that refers back to
a record already being zeroed.
"""

from __future__ import annotations

import collections.abc as abc
import types
import typing
from enum import Enum
from typing import Any, Literal, Union

from .introspect import FieldDescriptor, RecordType, introspect, is_record_type

__all__ = ["field_zero", "zero_record", "zero_value", "zero_values"]

_SCALAR_ZEROS: dict[type, Any] = {
    bool: False,
    int: 0,
    float: 0.0,
    complex: 0j,
    str: "",
    bytes: b"",
}

_EMPTY_FACTORIES: dict[Any, type] = {
    list: list,
    dict: dict,
    set: set,
    frozenset: frozenset,
    tuple: tuple,
    bytearray: bytearray,
    abc.Iterable: list,
    abc.Collection: list,
    abc.Sequence: list,
    abc.MutableSequence: list,
    abc.Mapping: dict,
    abc.MutableMapping: dict,
    abc.Set: frozenset,
    abc.MutableSet: set,
}


def zero_value(annotation: Any) -> Any:
    """Return the zero value for a type annotation."""

    return _zero(annotation, frozenset())


def _zero(annotation: Any, active: frozenset[type]) -> Any:
    if annotation is None or annotation is type(None) or annotation is Any:
        return None

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is typing.Annotated:
        return _zero(args[0], active)
    if origin is Literal:
        return args[0] if args else None
    if origin is Union or origin is types.UnionType:
        if type(None) in args:
            return None
        return _zero(args[0], active)
    if origin is tuple and args and args != ((),) and args[-1] is not Ellipsis:
        return tuple(_zero(arg, active) for arg in args)

    base = origin if origin is not None else annotation
    if base in _SCALAR_ZEROS:
        return _SCALAR_ZEROS[base]
    if isinstance(base, type) and issubclass(base, Enum):
        members = list(base)
        return members[0] if members else None
    if is_record_type(base):
        # a record nested in itself has no finite zero; stop at None
        if base in active:
            return None
        return _record_zero(introspect(base), active)
    factory = _EMPTY_FACTORIES.get(base)
    if factory is not None:
        return factory()
    return None


def field_zero(field: FieldDescriptor) -> Any:
    """Return the zero value of a single record field."""

    return _field_zero(field, frozenset())


def _field_zero(field: FieldDescriptor, active: frozenset[type]) -> Any:
    if field.has_default:
        return field.default_value()
    return _zero(field.annotation, active)


def zero_values(record: RecordType) -> dict[str, Any]:
    """Return a ``field -> zero value`` mapping for every field of ``record``."""

    active = frozenset({record.cls})
    return {name: _field_zero(f, active) for name, f in record.fields.items()}


def zero_record(record: RecordType) -> Any:
    """Return an instance of ``record`` with every field at its zero value."""

    return _record_zero(record, frozenset())


def _record_zero(record: RecordType, active: frozenset[type]) -> Any:
    active = active | {record.cls}
    return record.build({name: _field_zero(f, active) for name, f in record.fields.items()})
