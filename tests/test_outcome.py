"""Tests for the outcome model."""

import json

import pytest

from matchtree.diff import DiffOp, DiffTag
from matchtree.outcome import (
    Child,
    CompositeKind,
    CompositePayload,
    LeafPayload,
    MatchOutcome,
)


def _leaf(**overrides) -> LeafPayload:
    data = dict(
        matcher="equal",
        actual="'disco'",
        expected="'Disco'",
        positive="to equal",
        negative="to not equal",
    )
    data.update(overrides)
    return LeafPayload(**data)


def test_succeeded_and_failed_constructors():
    ok = MatchOutcome.succeeded(_leaf(), value=3)
    bad = MatchOutcome.failed(_leaf())
    assert ok.is_success and not ok.is_failure
    assert ok.value == 3
    assert bad.is_failure and not bad.is_success
    assert not ok.negated and not bad.negated


def test_flipped_inverts_verdict_and_toggles_negated():
    outcome = MatchOutcome.failed(_leaf(), value="x")
    flipped = outcome.flipped(value="y")
    assert flipped.is_success
    assert flipped.negated
    assert flipped.payload is outcome.payload
    assert flipped.value == "y"

    twice = flipped.flipped()
    assert twice.is_failure
    assert not twice.negated


def test_flipped_does_not_mutate_original():
    outcome = MatchOutcome.failed(_leaf(), value="x")
    outcome.flipped()
    assert outcome.is_failure
    assert not outcome.negated


def test_annotated_prepends_notes():
    outcome = MatchOutcome.failed(_leaf()).annotated("inner").annotated("outer")
    assert outcome.notes == ["outer", "inner"]
    assert outcome.is_failure


def test_to_dict_is_json_serializable_and_excludes_value():
    leaf = _leaf(
        diff=[DiffOp(DiffTag.REMOVE, "D"), DiffOp(DiffTag.INSERT, "d"), DiffOp(DiffTag.KEEP, "isco")],
        diff_kind="text",
    )
    outcome = MatchOutcome.failed(
        CompositePayload(
            CompositeKind.FIELDS,
            [Child("name", MatchOutcome.failed(leaf, value=object()))],
            type_name="tests.Person",
        ),
        value=object(),
    ).annotated("why")

    data = outcome.to_dict()
    text = json.dumps(data)
    assert "value" not in data
    assert data["payload"]["kind"] == "fields"
    assert data["payload"]["type_name"] == "tests.Person"
    assert data["payload"]["children"][0]["key"] == "name"

    restored = MatchOutcome.from_dict(json.loads(text))
    assert restored.notes == ["why"]
    child = restored.payload.children[0]
    assert child.key == "name"
    assert child.outcome.payload.diff[0] == DiffOp(DiffTag.REMOVE, "D")
    assert child.outcome.payload.diff_kind == "text"
    assert restored.to_dict() == data


def test_from_dict_keeps_transparent_steps_and_negation():
    data = MatchOutcome(success=True, negated=True, payload=None).to_dict()
    restored = MatchOutcome.from_dict(data)
    assert restored.payload is None
    assert restored.negated
    assert restored.is_success


def test_from_dict_rejects_unknown_payload_type():
    with pytest.raises(ValueError, match="Unknown payload type"):
        MatchOutcome.from_dict({"success": False, "payload": {"type": "mystery"}})
