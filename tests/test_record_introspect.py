from __future__ import annotations

from typing import Literal, Optional

import pytest
from pydantic import BaseModel
from sample_records import Account, Address, Color, Node, Partial, Person, Point, Profile

from recfuzz.record import NO_DEFAULT, RecordKind, introspect, is_record_type
from recfuzz.utils.errors import NotARecordTypeError


def test_dataclass_fields_resolved() -> None:
    record = introspect(Person)
    assert record.kind is RecordKind.DATACLASS
    assert record.name == "Person"
    assert set(record.fields) == {"Name", "Age"}
    assert record.fields["Name"].annotation is str
    assert record.fields["Age"].annotation is int
    assert record.fields["Age"].default is NO_DEFAULT
    assert not record.fields["Age"].has_default


def test_defaults_and_factories_captured() -> None:
    record = introspect(Account)
    assert record.fields["owner"].annotation is Person
    assert record.fields["address"].annotation is Address
    assert record.fields["tags"].annotation == list[str]
    assert record.fields["tags"].default_value() == []
    assert record.fields["balance"].default_value() == 10.5
    assert record.fields["color"].default_value() is Color.GREEN
    assert record.fields["kind"].annotation == Literal["basic", "pro"]
    assert record.fields["checksum"].init is False
    assert introspect(Address).fields["unit"].annotation == Optional[str]


def test_namedtuple_and_pydantic() -> None:
    point = introspect(Point)
    assert point.kind is RecordKind.NAMEDTUPLE
    assert list(point.fields) == ["x", "y"]
    assert point.fields["y"].default_value() == 3

    profile = introspect(Profile)
    assert profile.kind is RecordKind.PYDANTIC
    assert profile.fields["handle"].annotation is str
    assert not profile.fields["handle"].has_default
    assert profile.fields["followers"].default_value() == 0


def test_unresolvable_annotation_only_affects_its_field() -> None:
    record = introspect(Partial)
    assert record.fields["name"].annotation is str
    assert record.fields["count"].annotation is int
    assert record.fields["other"].annotation == "UndefinedThing"


def test_self_reference_resolves() -> None:
    assert introspect(Node).fields["child"].annotation is Node


def test_introspection_cached_per_type() -> None:
    assert introspect(Person) is introspect(Person)


@pytest.mark.parametrize(
    "tp",
    [None, int, str, list[int], Person(Name="a", Age=1), BaseModel, "Person", tuple],
)
def test_not_a_record_type(tp: object) -> None:
    assert not is_record_type(tp)
    with pytest.raises(NotARecordTypeError):
        introspect(tp)


def test_fields_read_only() -> None:
    record = introspect(Person)
    with pytest.raises(TypeError):
        record.fields["Nickname"] = record.fields["Name"]  # type: ignore[index]


def test_build_handles_each_kind() -> None:
    assert introspect(Person).build({"Name": "x", "Age": 2}) == Person(Name="x", Age=2)
    assert introspect(Point).build({"x": 1, "y": 2}) == Point(1, 2)

    profile = introspect(Profile).build({"handle": "h", "followers": "not-an-int", "links": []})
    # model_construct stores values without validation
    assert profile.followers == "not-an-int"

    account = introspect(Account).build(
        {
            "owner": Person("o", 1),
            "address": Address("s", 1),
            "tags": [],
            "balance": 0.0,
            "color": Color.RED,
            "flags": {},
            "kind": "pro",
            "checksum": 99,
        }
    )
    assert account.checksum == 99
    assert account.kind == "pro"
