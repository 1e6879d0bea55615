"""Fuzz sessions.

A :class:`Session` is bound to one record type.  It holds a registry of
per-field generators and a zero-value fallthrough flag, and produces record
values by resolving every field under one of three policies:

1. a bound generator, when the field has one;
2. the field's zero value, when fallthrough is on;
3. a default random value for the field's annotation otherwise
   (:func:`recfuzz.values.arbitrary.value_for`).

Both public entry points, :meth:`Session.option` and :meth:`Session.value`,
report failures in their return value instead of raising.  The ``must_option``
and ``generate`` variants raise instead.

Sessions are not thread-safe.  Callers that share a session across threads
must serialize configuration and value production themselves.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from typing import Any

from recfuzz.config import ConfigModel
from recfuzz.record import RecordType, field_zero, introspect
from recfuzz.utils.errors import (
    ConfigurationError,
    FuzzError,
    GeneratorFailure,
    IllegalTypeError,
    ProductionError,
    UnsupportedFieldTypeError,
)
from recfuzz.utils.logging import get_logger
from recfuzz.values.arbitrary import COMPLEX_SIZE, value_for
from recfuzz.values.generator import Generator

from .options import Option, apply_option
from .registry import BindingRegistry
from .results import Applied, Produced

__all__ = ["Session", "new_session"]

logger = get_logger(__name__)


class Session:
    """Context in which a record type's fields are bound to generators."""

    def __init__(self, record_type: type, *, cfg: ConfigModel | None = None) -> None:
        """Create a session for ``record_type``.

        Parameters
        ----------
        record_type:
            Dataclass, NamedTuple or pydantic model class.  Anything else raises
            :class:`~recfuzz.utils.errors.NotARecordTypeError`.
        cfg:
            Optional configuration supplying the initial fallthrough flag and
            the size used for default random values.
        """

        self._record: RecordType = introspect(record_type)
        self._registry = BindingRegistry(self._record)
        self._zero_value_fallthrough = False
        self._complex_size = COMPLEX_SIZE
        if cfg is not None:
            self._zero_value_fallthrough = cfg.session.zero_value_fallthrough
            self._complex_size = cfg.values.complex_size

    def __repr__(self) -> str:
        return (
            f"Session({self._record.name}, bindings={sorted(self._registry)}, "
            f"zero_value_fallthrough={self._zero_value_fallthrough})"
        )

    @property
    def record(self) -> RecordType:
        return self._record

    @property
    def bindings(self) -> Mapping[str, Generator]:
        """Read-only view of the current field bindings."""

        return self._registry.view()

    @property
    def zero_value_fallthrough(self) -> bool:
        return self._zero_value_fallthrough

    # -- Configuration -----------------------------------------------------

    def option(self, *opts: Option) -> Applied:
        """Apply ``opts`` in order, stopping at the first failure.

        Options applied before a failure are not rolled back; the returned
        :class:`Applied` carries their inverses so the caller can do so.
        """

        inverses: list[Option] = []
        for opt in opts:
            try:
                inverses.append(apply_option(opt, self))
                continue
            except FuzzError as exc:
                error: FuzzError = exc
            except Exception as exc:
                error = ConfigurationError(f"fuzz: option error {exc}")
                error.__cause__ = exc
            logger.debug("option %r failed on %s: %s", opt, self._record.name, error)
            return Applied(tuple(reversed(inverses)), error)
        return Applied(tuple(reversed(inverses)))

    def must_option(self, *opts: Option) -> Option | None:
        """Like :meth:`option` but raise the failure instead of returning it."""

        return self.option(*opts).unwrap()

    # -- Value production --------------------------------------------------

    def value(self, rng: random.Random, size: int) -> Produced:
        """Produce one record value from random source ``rng`` and size hint ``size``."""

        values: dict[str, Any] = {}
        try:
            for name, field in self._record.fields.items():
                generator = self._registry.get(name)
                if generator is not None:
                    try:
                        values[name] = generator.generate(rng, size)
                    except Exception as exc:
                        raise GeneratorFailure(name, exc) from exc
                elif self._zero_value_fallthrough:
                    values[name] = field_zero(field)
                else:
                    try:
                        values[name] = value_for(field.annotation, rng, self._complex_size)
                    except IllegalTypeError as exc:
                        raise UnsupportedFieldTypeError(name, field.annotation) from exc
            return Produced(self._record.build(values))
        except FuzzError as exc:
            error: FuzzError = exc
        except Exception as exc:
            error = ProductionError(f"fuzz: {exc}")
            error.__cause__ = exc
        logger.debug("value production failed on %s: %s", self._record.name, error)
        return Produced(self._partial(values), error)

    def generate(self, rng: random.Random, size: int) -> Any:
        """Produce one record value, raising on failure.

        This makes a session usable as a :class:`~recfuzz.values.Generator`,
        for example bound to a nested record field of another session.
        """

        return self.value(rng, size).unwrap()

    def _partial(self, assigned: dict[str, Any]) -> Any:
        try:
            values = {
                name: assigned[name] if name in assigned else field_zero(field)
                for name, field in self._record.fields.items()
            }
            return self._record.build(values)
        except Exception:
            logger.debug("could not build partial %s", self._record.name, exc_info=True)
            return None


def new_session(record_type: type, *opts: Option, cfg: ConfigModel | None = None) -> Session:
    """Create a session and apply ``opts``, raising on any failure."""

    session = Session(record_type, cfg=cfg)
    session.must_option(*opts)
    return session
