"""Tests for the diff engine."""

import pytest

from matchtree.diff import (
    DiffOp,
    DiffTag,
    diff_sequences,
    diff_text,
    reconstruct_left,
    reconstruct_right,
)


@pytest.mark.parametrize(
    "left, right",
    [
        ([], []),
        ([1, 2, 3], [1, 2, 3]),
        ([1, 2, 3], []),
        ([], ["a", "b"]),
        ([1, 2, 3, 4], [1, 3, 4, 5]),
        (list("kitten"), list("sitting")),
        ([{"a": 1}, [2], {"b": 3}], [[2], {"b": 4}, {"a": 1}]),
    ],
)
def test_replaying_the_script_reconstructs_both_sides(left, right):
    ops = diff_sequences(left, right)
    assert reconstruct_left(ops) == left
    assert reconstruct_right(ops) == right


def test_identical_sequences_only_keep():
    ops = diff_sequences("abc", "abc")
    assert [op.tag for op in ops] == [DiffTag.KEEP] * 3


def test_replacement_is_remove_then_insert():
    ops = diff_sequences([1, 2, 3], [1, 9, 3])
    assert ops == [
        DiffOp(DiffTag.KEEP, 1),
        DiffOp(DiffTag.REMOVE, 2),
        DiffOp(DiffTag.INSERT, 9),
        DiffOp(DiffTag.KEEP, 3),
    ]


def test_unhashable_items_use_lcs_fallback():
    ops = diff_sequences([[1], [2]], [[1], [3]])
    assert ops[0] == DiffOp(DiffTag.KEEP, [1])
    assert DiffOp(DiffTag.REMOVE, [2]) in ops
    assert DiffOp(DiffTag.INSERT, [3]) in ops


def test_diff_is_deterministic():
    left, right = list("the quick brown fox"), list("the quack brown box")
    assert diff_sequences(left, right) == diff_sequences(left, right)


def test_diff_text_coalesces_runs():
    ops = diff_text("Disco", "disco")
    assert ops == [
        DiffOp(DiffTag.REMOVE, "D"),
        DiffOp(DiffTag.INSERT, "d"),
        DiffOp(DiffTag.KEEP, "isco"),
    ]
    assert "".join(reconstruct_left(ops)) == "Disco"
    assert "".join(reconstruct_right(ops)) == "disco"


def test_diff_op_round_trips_through_dict():
    op = DiffOp(DiffTag.INSERT, "x")
    assert op.to_dict() == {"tag": "insert", "item": "x"}
    assert DiffOp.from_dict(op.to_dict()) == op
