"""Tests for field extraction and match_fields."""

from dataclasses import dataclass
from typing import NamedTuple

import pytest
from pydantic import BaseModel

from matchtree.errors import PreconditionError
from matchtree.matchers import (
    be_empty,
    be_gt,
    be_true,
    equal,
    fields,
    match_any_fields,
    match_fields,
    match_regex,
    not_,
)
from matchtree.matchers.fields import declared_field_names, qualified_name
from matchtree.outcome import CompositeKind


@dataclass
class Person:
    id: str
    name: str
    age: int
    is_superstar: bool


class Point(NamedTuple):
    x: int
    y: int


class Account(BaseModel):
    owner: str
    balance: float


class Annotated:
    label: str
    size: int

    def __init__(self, label, size):
        self.label = label
        self.size = size


def _person_matcher():
    # keyword order deliberately differs from declaration order
    return match_fields(
        fields(
            Person,
            is_superstar=be_true(),
            age=be_gt(0),
            name=not_(be_empty()),
            id=match_regex(r"^[A-Z]{3}-[0-9A-Z]{4}$"),
        )
    )


def test_person_scenario_lists_failing_and_passing_fields():
    person = Person(id="LTN-2JFR", name="", age=44, is_superstar=False)
    outcome = _person_matcher().match(person)

    assert outcome.is_failure
    payload = outcome.payload
    assert payload.kind is CompositeKind.FIELDS
    assert payload.type_name == qualified_name(Person)
    assert payload.type_name.endswith("Person")
    assert [c.key for c in payload.children] == ["id", "name", "age", "is_superstar"]

    failing = [c.key for c in payload.children if c.outcome.is_failure]
    passing = [c.key for c in payload.children if c.outcome.is_success]
    assert failing == ["name", "is_superstar"]
    assert passing == ["id", "age"]


def test_match_fields_succeeds_and_passes_record_through():
    person = Person(id="LTN-2JFR", name="Lou", age=44, is_superstar=True)
    outcome = _person_matcher().match(person)
    assert outcome.is_success
    assert outcome.value is person


def test_match_any_fields_needs_one_success():
    spec = fields(Point, x=equal(1), y=equal(2))
    assert match_any_fields(spec).match(Point(1, 5)).is_success
    outcome = match_any_fields(spec).match(Point(0, 0))
    assert outcome.is_failure
    assert outcome.payload.kind is CompositeKind.ANY_FIELDS


def test_unknown_field_is_rejected_at_construction():
    with pytest.raises(PreconditionError, match="no field"):
        fields(Person, nickname=equal("x"))


def test_wrong_record_type_is_a_precondition_error():
    with pytest.raises(PreconditionError, match="expected"):
        match_fields(fields(Person, age=be_gt(0))).match(Point(1, 2))


@pytest.mark.parametrize(
    "record_type, expected",
    [
        (Person, ["id", "name", "age", "is_superstar"]),
        (Point, ["x", "y"]),
        (Account, ["owner", "balance"]),
        (Annotated, ["label", "size"]),
    ],
)
def test_declared_field_names(record_type, expected):
    assert declared_field_names(record_type) == expected


def test_pydantic_and_annotated_records():
    assert match_fields(fields(Account, balance=be_gt(0))).match(
        Account(owner="a", balance=1.5)
    ).is_success
    assert match_fields(fields(Annotated, size=equal(3))).match(
        Annotated("box", 4)
    ).is_failure


def test_mappings_are_matched_by_key():
    spec = fields(dict, port=be_gt(0), host=not_(be_empty()))
    assert match_fields(spec).match({"host": "localhost", "port": 8080}).is_success
    with pytest.raises(PreconditionError, match="no key"):
        match_fields(spec).match({"host": "localhost"})
