"""Per-field generator registry.

The registry maps field names of one record type to generators.  Every bound
name is a field of the record, and a field holds at most one generator at a
time: rebinding requires an explicit unbind first.  Sessions only mutate the
registry through configuration options (:mod:`recfuzz.session.options`).
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from recfuzz.record import RecordType
from recfuzz.utils.errors import AbsentBindingError, DuplicateBindingError, UnmatchedBindingError
from recfuzz.values.generator import Generator

__all__ = ["BindingRegistry"]


class BindingRegistry:
    """Mapping from field name to the generator bound to it."""

    def __init__(self, record: RecordType) -> None:
        self._record = record
        self._bindings: dict[str, Generator] = {}

    def bind(self, name: str, generator: Generator) -> None:
        if name not in self._record.fields:
            raise UnmatchedBindingError(name)
        if name in self._bindings:
            raise DuplicateBindingError(name)
        self._bindings[name] = generator

    def unbind(self, name: str) -> Generator:
        """Remove and return the generator bound to ``name``."""

        try:
            return self._bindings.pop(name)
        except KeyError:
            raise AbsentBindingError(name) from None

    def get(self, name: str) -> Generator | None:
        return self._bindings.get(name)

    def view(self) -> Mapping[str, Generator]:
        """Return a read-only live view of the bindings."""

        return MappingProxyType(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __iter__(self) -> Iterator[str]:
        return iter(self._bindings)

    def __len__(self) -> int:
        return len(self._bindings)
