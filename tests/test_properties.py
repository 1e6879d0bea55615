"""Property-based tests for the session binding model.

Properties verified:
1. Bind followed by its inverse leaves the field unbound
2. Duplicate and unknown bindings fail without touching the registry
3. Unbinding a never-bound field fails
4. The fallthrough inverse restores the previous flag
5. Every field is produced by exactly one policy matching the session state
6. Applying a sequence's inverses restores the original session state
"""

from __future__ import annotations

import random
from typing import Any

import pytest

pytest.importorskip("hypothesis")

from hypothesis import given  # noqa: E402
from hypothesis import strategies as st  # noqa: E402
from sample_records import Account, Person  # noqa: E402

from recfuzz.config import load_config  # noqa: E402
from recfuzz.record import field_zero, introspect  # noqa: E402
from recfuzz.session import (  # noqa: E402
    BindField,
    Session,
    SetZeroValueFallthrough,
    UnbindField,
)
from recfuzz.utils.errors import (  # noqa: E402
    AbsentBindingError,
    DuplicateBindingError,
    UnmatchedBindingError,
)
from recfuzz.values import constant  # noqa: E402

# =============================================================================
# Hypothesis Strategies
# =============================================================================

ACCOUNT_FIELDS = sorted(introspect(Account).fields)

field_names = st.sampled_from(ACCOUNT_FIELDS)
unknown_names = st.text(min_size=1, max_size=12).filter(lambda s: s not in ACCOUNT_FIELDS)
bound_values = st.integers() | st.text(max_size=5) | st.none()

options = st.one_of(
    st.builds(BindField, field_names, st.builds(constant, bound_values)),
    st.builds(UnbindField, field_names),
    st.builds(SetZeroValueFallthrough, st.booleans()),
)


class Marker:
    """Distinct sentinel returned by a bound generator."""

    def __init__(self, name: str) -> None:
        self.name = name

    def generate(self, rng: random.Random, size: int) -> Marker:
        return self


def _state(session: Session) -> tuple[dict[str, Any], bool]:
    return dict(session.bindings), session.zero_value_fallthrough


# =============================================================================
# Properties
# =============================================================================


@given(name=field_names, value=bound_values)
def test_bind_then_inverse_unbinds(name: str, value: Any) -> None:
    session = Session(Account)
    inverse = session.must_option(BindField(name, constant(value)))
    assert name in session.bindings
    session.must_option(inverse)
    assert name not in session.bindings


@given(name=field_names)
def test_duplicate_binding_leaves_registry(name: str) -> None:
    session = Session(Account)
    first = constant(1)
    session.must_option(BindField(name, first))
    applied = session.option(BindField(name, constant(2)))
    assert isinstance(applied.error, DuplicateBindingError)
    assert dict(session.bindings) == {name: first}


@given(name=unknown_names)
def test_unknown_binding_leaves_registry(name: str) -> None:
    session = Session(Account)
    applied = session.option(BindField(name, constant(1)))
    assert isinstance(applied.error, UnmatchedBindingError)
    assert dict(session.bindings) == {}


@given(name=field_names)
def test_unbind_requires_presence(name: str) -> None:
    applied = Session(Account).option(UnbindField(name))
    assert isinstance(applied.error, AbsentBindingError)


@given(start=st.booleans(), target=st.booleans())
def test_fallthrough_inverse_restores(start: bool, target: bool) -> None:
    session = Session(Person)
    session.must_option(SetZeroValueFallthrough(start))
    inverse = session.must_option(SetZeroValueFallthrough(target))
    session.must_option(inverse)
    assert session.zero_value_fallthrough is start


@given(
    bound=st.sets(field_names),
    fallthrough=st.booleans(),
    rng=st.randoms(use_true_random=True),
)
def test_every_field_resolved_by_one_policy(
    bound: set[str], fallthrough: bool, rng: random.Random
) -> None:
    cfg = load_config(env={})
    cfg.values.complex_size = 4
    session = Session(Account, cfg=cfg)
    markers = {name: Marker(name) for name in bound}
    session.must_option(
        SetZeroValueFallthrough(fallthrough),
        *(BindField(name, marker) for name, marker in markers.items()),
    )
    account = session.value(rng, 3).unwrap()
    for name, field in introspect(Account).fields.items():
        got = getattr(account, name)
        if name in bound:
            assert got is markers[name]
        elif fallthrough:
            assert got == field_zero(field)
        else:
            assert not isinstance(got, Marker)


@given(ops=st.lists(options, max_size=8))
def test_inverses_restore_original_state(ops: list[Any]) -> None:
    session = Session(Account)
    before = _state(session)
    applied = session.option(*ops)
    rollback = session.option(*applied.inverses)
    assert rollback.ok
    assert _state(session) == before
