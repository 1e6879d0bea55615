"""Record type introspection.

A *record type* is a class with a fixed set of named, typed fields.  Three
shapes are recognised: dataclasses, ``typing.NamedTuple`` classes and pydantic
``BaseModel`` subclasses.  :func:`introspect` captures the shape once and
caches it per class, so sessions created repeatedly for the same class share a
single :class:`RecordType`.

Annotations written as strings (``from __future__ import annotations``) are
resolved with :func:`typing.get_type_hints`.  When the class as a whole cannot
be resolved, each field is resolved on its own and only the failing ones keep
their raw annotation; that only matters if a random default value is later
requested for such a field.
"""

from __future__ import annotations

import dataclasses
import functools
import inspect
import sys
import typing
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel

from recfuzz.utils.errors import NotARecordTypeError

__all__ = [
    "NO_DEFAULT",
    "FieldDescriptor",
    "RecordKind",
    "RecordType",
    "introspect",
    "is_record_type",
]


class _NoDefault:
    __slots__ = ()

    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


class RecordKind(Enum):
    """Supported record shapes."""

    DATACLASS = "dataclass"
    NAMEDTUPLE = "namedtuple"
    PYDANTIC = "pydantic"


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    """A named field of a record type and its declared annotation."""

    name: str
    annotation: Any
    default: Any = NO_DEFAULT
    default_factory: Callable[[], Any] | None = None
    init: bool = True

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT or self.default_factory is not None

    def default_value(self) -> Any:
        """Return the declared default, calling the factory if there is one."""

        if self.default_factory is not None:
            return self.default_factory()
        if self.default is NO_DEFAULT:
            raise LookupError(f"field {self.name} declares no default")
        return self.default


@dataclass(frozen=True, slots=True)
class RecordType:
    """Immutable handle to the shape of a record class."""

    cls: type
    kind: RecordKind
    fields: Mapping[str, FieldDescriptor]

    @property
    def name(self) -> str:
        return self.cls.__qualname__

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def build(self, values: Mapping[str, Any]) -> Any:
        """Construct an instance from a complete ``field -> value`` mapping.

        Pydantic models are built with ``model_construct`` so that generated
        values are stored as-is instead of being validated or coerced.
        """

        if self.kind is RecordKind.PYDANTIC:
            return self.cls.model_construct(**{name: values[name] for name in self.fields})
        if self.kind is RecordKind.NAMEDTUPLE:
            return self.cls(**{name: values[name] for name in self.fields})

        obj = self.cls(**{name: values[name] for name, f in self.fields.items() if f.init})
        for name, f in self.fields.items():
            if not f.init:
                # frozen dataclasses reject plain setattr
                object.__setattr__(obj, name, values[name])
        return obj


def _is_namedtuple(tp: type) -> bool:
    return issubclass(tp, tuple) and hasattr(tp, "_fields") and hasattr(tp, "_field_defaults")


def _kind_of(tp: object) -> RecordKind | None:
    if not isinstance(tp, type) or typing.get_origin(tp) is not None:
        return None
    if dataclasses.is_dataclass(tp):
        return RecordKind.DATACLASS
    if _is_namedtuple(tp):
        return RecordKind.NAMEDTUPLE
    if issubclass(tp, BaseModel) and tp is not BaseModel:
        return RecordKind.PYDANTIC
    return None


def is_record_type(tp: object) -> bool:
    """Return ``True`` if ``tp`` is a class :func:`introspect` accepts."""

    return _kind_of(tp) is not None


def _resolve_hint(
    name: str, annotation: Any, globalns: dict[str, Any], localns: dict[str, Any]
) -> Any:
    holder = type("_Hint", (), {"__annotations__": {name: annotation}})
    try:
        return typing.get_type_hints(holder, globalns=globalns, localns=localns)[name]
    except (NameError, TypeError, SyntaxError):
        return annotation


def _type_hints(tp: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(tp)
    except (NameError, TypeError, SyntaxError):
        pass
    # one unresolvable annotation must not leave the other fields as strings
    hints: dict[str, Any] = {}
    for base in reversed(tp.__mro__):
        module = sys.modules.get(base.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(base))
        for name, annotation in inspect.get_annotations(base).items():
            hints[name] = _resolve_hint(name, annotation, globalns, localns)
    return hints


def _dataclass_fields(tp: type) -> list[FieldDescriptor]:
    hints = _type_hints(tp)
    out: list[FieldDescriptor] = []
    for f in dataclasses.fields(tp):
        factory = None if f.default_factory is dataclasses.MISSING else f.default_factory
        default = NO_DEFAULT if f.default is dataclasses.MISSING else f.default
        out.append(
            FieldDescriptor(
                name=f.name,
                annotation=hints.get(f.name, f.type),
                default=default,
                default_factory=factory,
                init=f.init,
            )
        )
    return out


def _namedtuple_fields(tp: type) -> list[FieldDescriptor]:
    hints = _type_hints(tp)
    defaults: dict[str, Any] = tp._field_defaults  # type: ignore[attr-defined]
    return [
        FieldDescriptor(
            name=name,
            annotation=hints.get(name, Any),
            default=defaults.get(name, NO_DEFAULT),
        )
        for name in tp._fields  # type: ignore[attr-defined]
    ]


def _pydantic_fields(tp: type[BaseModel]) -> list[FieldDescriptor]:
    out: list[FieldDescriptor] = []
    for name, info in tp.model_fields.items():
        factory: Callable[[], Any] | None = None
        if not info.is_required():
            # get_default copies mutable defaults the way pydantic does on validation
            factory = functools.partial(info.get_default, call_default_factory=True)
        out.append(FieldDescriptor(name=name, annotation=info.annotation, default_factory=factory))
    return out


@functools.lru_cache(maxsize=None)
def _introspect(tp: type, kind: RecordKind) -> RecordType:
    if kind is RecordKind.DATACLASS:
        descriptors = _dataclass_fields(tp)
    elif kind is RecordKind.NAMEDTUPLE:
        descriptors = _namedtuple_fields(tp)
    else:
        descriptors = _pydantic_fields(tp)
    fields = MappingProxyType({d.name: d for d in descriptors})
    return RecordType(cls=tp, kind=kind, fields=fields)


def introspect(tp: object) -> RecordType:
    """Return the :class:`RecordType` describing ``tp``.

    Raises
    ------
    NotARecordTypeError
        If ``tp`` is ``None`` or not a dataclass, NamedTuple or pydantic model
        class.  Instances are rejected too; pass the class.
    """

    kind = _kind_of(tp)
    if kind is None:
        raise NotARecordTypeError(tp)
    return _introspect(typing.cast(type, tp), kind)
