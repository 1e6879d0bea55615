"""Record type introspection and zero values."""

from .introspect import (
    NO_DEFAULT,
    FieldDescriptor,
    RecordKind,
    RecordType,
    introspect,
    is_record_type,
)
from .zero import field_zero, zero_record, zero_value, zero_values

__all__ = [
    "NO_DEFAULT",
    "FieldDescriptor",
    "RecordKind",
    "RecordType",
    "field_zero",
    "introspect",
    "is_record_type",
    "zero_record",
    "zero_value",
    "zero_values",
]
