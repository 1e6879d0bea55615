"""Result types returned by the session entry points."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from recfuzz.utils.errors import FuzzError

from .options import Option

__all__ = ["Applied", "Produced"]


@dataclass(frozen=True, slots=True)
class Applied:
    """Outcome of :meth:`recfuzz.session.Session.option`.

    ``inverses`` holds the inverse of every option that was applied, most
    recent first, so ``session.option(*applied.inverses)`` undoes them all.
    ``error`` is set when an option failed; options after it were not tried
    and options before it stay applied.
    """

    inverses: tuple[Option, ...] = ()
    error: FuzzError | None = None

    @property
    def inverse(self) -> Option | None:
        """Inverse of the last successfully applied option."""

        return self.inverses[0] if self.inverses else None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Option | None:
        """Return :attr:`inverse`, raising :attr:`error` if there is one."""

        if self.error is not None:
            raise self.error
        return self.inverse


@dataclass(frozen=True, slots=True)
class Produced:
    """Outcome of :meth:`recfuzz.session.Session.value`.

    On failure ``value`` may hold the partially built record for diagnostics;
    it is ``None`` when even that could not be constructed.
    """

    value: Any
    error: FuzzError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> Any:
        if self.error is not None:
            raise self.error
        return self.value
