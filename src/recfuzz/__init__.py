"""recfuzz: configurable random value generation for record types.

A :class:`Session` is bound to one record type (dataclass, NamedTuple or
pydantic model).  Individual fields can be bound to custom generators through
reversible options; every other field receives either a default random value
or its zero value::

    session = Session(Person)
    session.must_option(BindField("age", constant(42)))
    person = session.value(random.Random(1), 10).unwrap()
"""

from .session import (
    Applied,
    BindField,
    Produced,
    Session,
    SetZeroValueFallthrough,
    UnbindField,
    new_session,
)
from .values import Generator, GeneratorFunc, constant, generator_func, value_for

__version__ = "0.1.0"

__all__ = [
    "Applied",
    "BindField",
    "Generator",
    "GeneratorFunc",
    "Produced",
    "Session",
    "SetZeroValueFallthrough",
    "UnbindField",
    "constant",
    "generator_func",
    "new_session",
    "value_for",
    "__version__",
]
