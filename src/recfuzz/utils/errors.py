"""Typed exceptions for record introspection, session configuration and value production."""

from __future__ import annotations


class FuzzError(Exception):
    """Base class for all fuzz session errors."""


class NotARecordTypeError(FuzzError, TypeError):
    """Raised when a session is requested for something that is not a record type."""

    def __init__(self, tp: object) -> None:
        super().__init__(f"fuzz: requested type is not a record type: {tp!r}")
        self.type = tp


class BindingError(FuzzError, LookupError):
    """Base class for binding registry errors."""

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name


class UnmatchedBindingError(BindingError):
    """Raised when binding a field name the record type does not declare."""

    def __init__(self, name: str) -> None:
        super().__init__(f"fuzz: unmatched binding {name}", name)


class DuplicateBindingError(BindingError):
    """Raised when binding a field that already has a generator."""

    def __init__(self, name: str) -> None:
        super().__init__(f"fuzz: duplicated binding {name}", name)


class AbsentBindingError(BindingError):
    """Raised when unbinding a field that has no generator."""

    def __init__(self, name: str) -> None:
        super().__init__(f"fuzz: absent binding {name}", name)


class ConfigurationError(FuzzError):
    """Raised for any other failure while applying a configuration option."""


class IllegalGeneratorError(ConfigurationError):
    """Raised when a bound object does not implement the generator protocol."""

    def __init__(self, name: str, generator: object) -> None:
        super().__init__(f"fuzz: illegal generator for {name}: {generator!r}")
        self.name = name
        self.generator = generator


class UnsupportedFieldTypeError(FuzzError, TypeError):
    """Raised when no default random value can be produced for a field's type."""

    def __init__(self, name: str, annotation: object) -> None:
        super().__init__(f"fuzz: illegal type for field {name}: {annotation!r}")
        self.name = name
        self.annotation = annotation


class GeneratorFailure(FuzzError):
    """Raised when a bound generator fails.

    The generator's own exception is available as ``__cause__``.
    """

    def __init__(self, name: str | None, cause: BaseException) -> None:
        where = f" for field {name}" if name is not None else ""
        super().__init__(f"fuzz: generator failed{where}: {cause}")
        self.name = name


class ProductionError(FuzzError):
    """Raised for unexpected failures while producing a record value."""


class IncongruentValuesError(FuzzError, ValueError):
    """Raised when output slots and generators differ in length."""

    def __init__(self, slots: int, generators: int) -> None:
        super().__init__(
            f"fuzz: incongruent values and generator signature: {slots} slots, "
            f"{generators} generators"
        )
        self.slots = slots
        self.generators = generators


class CheckError(FuzzError, AssertionError):
    """Raised by :func:`recfuzz.adapters.quick.check` when a property fails."""

    def __init__(self, count: int, args: tuple[object, ...], cause: BaseException | None = None):
        reason = f": {cause}" if cause is not None else ""
        super().__init__(f"fuzz: #{count}: failed on input {args!r}{reason}")
        self.count = count
        self.inputs = args


class IllegalTypeError(TypeError):
    """Signal raised by the default value facility for unsupported types."""
