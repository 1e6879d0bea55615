"""Reversible configuration options.

Options are plain frozen dataclasses.  Applying one to a session mutates the
session and returns a new option that exactly reverses the change::

    inverse = BindField("age", constant(42)).apply(session)   # UnbindField("age")
    inverse.apply(session)                                     # BindField("age", <gen>)

Applying the inverses of a sequence of options in reverse order restores the
session to its original state.  :meth:`recfuzz.session.Session.option` does
the sequencing and error capture; :func:`apply_option` is the single dispatch
point it uses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from recfuzz.utils.errors import ConfigurationError, IllegalGeneratorError
from recfuzz.utils.logging import get_logger
from recfuzz.values.generator import Generator

if TYPE_CHECKING:
    from .session import Session

__all__ = [
    "BindField",
    "Option",
    "SetZeroValueFallthrough",
    "UnbindField",
    "apply_option",
]

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class BindField:
    """Attach ``generator`` to the field ``name``."""

    name: str
    generator: Any

    def apply(self, session: Session) -> UnbindField:
        if not isinstance(self.generator, Generator):
            raise IllegalGeneratorError(self.name, self.generator)
        session._registry.bind(self.name, self.generator)
        logger.debug("bound %s.%s to %r", session.record.name, self.name, self.generator)
        return UnbindField(self.name)


@dataclass(frozen=True, slots=True)
class UnbindField:
    """Remove the generator bound to the field ``name``."""

    name: str

    def apply(self, session: Session) -> BindField:
        generator = session._registry.unbind(self.name)
        logger.debug("unbound %s.%s", session.record.name, self.name)
        return BindField(self.name, generator)


@dataclass(frozen=True, slots=True)
class SetZeroValueFallthrough:
    """Leave unbound fields at their zero value when ``on``; randomize them otherwise."""

    on: bool

    def apply(self, session: Session) -> SetZeroValueFallthrough:
        prev = session._zero_value_fallthrough
        session._zero_value_fallthrough = bool(self.on)
        logger.debug("%s zero value fallthrough: %s -> %s", session.record.name, prev, self.on)
        return SetZeroValueFallthrough(prev)


Option = BindField | UnbindField | SetZeroValueFallthrough

_VARIANTS = (BindField, UnbindField, SetZeroValueFallthrough)


def apply_option(option: Option, session: Session) -> Option:
    """Apply ``option`` to ``session`` and return its inverse."""

    if not isinstance(option, _VARIANTS):
        raise ConfigurationError(f"fuzz: unknown option {option!r}")
    return option.apply(session)
