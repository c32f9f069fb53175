"""
chordplots/tests/test_cooccurrence.py - Tests for the CoOccurrenceMatrix data model.

Tests verify:
- Construction copies the matrix to a read-only float64 array.
- Dimension and label checks raise DimensionError.
- Groups must tile the label range contiguously and in order.
- Non-finite cells raise DomainError.
- Label / index accessors and flows (Σ |row|, diagonal included).
"""

import numpy as np
import pytest

from chordplots.data.cooccurrence import CoOccurrenceMatrix, GroupInfo
from chordplots.errors import ConfigurationError, DimensionError, DomainError


# ── Construction ──────────────────────────────────────────────────────────────

def test_matrix_is_copied_and_read_only():
    source = np.array([[0.0, 1.0], [1.0, 0.0]])
    model = CoOccurrenceMatrix.from_group_sizes(source, ["a", "b"], ["G"], [2])
    source[0, 1] = 99.0
    assert model.value("a", "b") == 1.0
    assert model.matrix.dtype == np.float64
    with pytest.raises(ValueError):
        model.matrix[0, 1] = 5.0


def test_integer_matrix_is_converted():
    model = CoOccurrenceMatrix.from_group_sizes([[0, 2], [2, 0]], ["a", "b"], ["G"], [2])
    assert model.matrix.dtype == np.float64


def test_from_group_sizes_builds_contiguous_groups(vdj_model):
    names = [g.name for g in vdj_model.groups]
    assert names == ["V", "D", "J"]
    assert vdj_model.groups[1].indices == range(4, 7)
    assert vdj_model.groups[1].labels == ("d1", "d2", "d3")
    assert vdj_model.n_labels == 9
    assert vdj_model.n_groups == 3
    assert vdj_model.shape == (9, 9)
    assert len(vdj_model) == 9


def test_empty_group_is_allowed():
    model = CoOccurrenceMatrix.from_group_sizes(
        [[0, 1], [1, 0]], ["a", "b"], ["A", "EMPTY", "B"], [1, 0, 1]
    )
    assert len(model.groups[1]) == 0
    assert model.group_of("b") == "B"


# ── Dimension errors ─────────────────────────────────────────────────────────

def test_non_square_matrix_raises():
    with pytest.raises(DimensionError) as exc:
        CoOccurrenceMatrix(np.zeros((2, 3)), ("a", "b"), (GroupInfo("G", ("a", "b"), range(0, 2)),))
    assert exc.value.field == "matrix"


def test_label_count_mismatch_raises():
    with pytest.raises(DimensionError):
        CoOccurrenceMatrix.from_group_sizes(np.zeros((3, 3)), ["a", "b"], ["G"], [2])


def test_duplicate_labels_raise():
    with pytest.raises(DimensionError) as exc:
        CoOccurrenceMatrix.from_group_sizes(np.zeros((3, 3)), ["a", "b", "a"], ["G"], [3])
    assert exc.value.value == ["a"]


def test_groups_must_cover_all_labels():
    groups = (GroupInfo("G", ("a",), range(0, 1)),)
    with pytest.raises(DimensionError):
        CoOccurrenceMatrix(np.zeros((2, 2)), ("a", "b"), groups)


def test_groups_must_be_in_order():
    groups = (
        GroupInfo("B", ("b",), range(1, 2)),
        GroupInfo("A", ("a",), range(0, 1)),
    )
    with pytest.raises(DimensionError):
        CoOccurrenceMatrix(np.zeros((2, 2)), ("a", "b"), groups)


def test_group_labels_must_match():
    groups = (GroupInfo("G", ("a", "x"), range(0, 2)),)
    with pytest.raises(DimensionError):
        CoOccurrenceMatrix(np.zeros((2, 2)), ("a", "b"), groups)


def test_group_info_label_range_mismatch():
    with pytest.raises(DimensionError):
        GroupInfo("G", ("a", "b"), range(0, 3))


def test_bad_group_sizes_raise():
    with pytest.raises(ConfigurationError):
        CoOccurrenceMatrix.from_group_sizes(np.zeros((2, 2)), ["a", "b"], ["G"], [3])
    with pytest.raises(ConfigurationError):
        CoOccurrenceMatrix.from_group_sizes(np.zeros((2, 2)), ["a", "b"], ["G", "H"], [2])


def test_nan_raises_domain_error():
    with pytest.raises(DomainError):
        CoOccurrenceMatrix.from_group_sizes(
            [[0.0, np.nan], [np.nan, 0.0]], ["a", "b"], ["G"], [2]
        )


def test_asymmetric_matrix_is_accepted():
    model = CoOccurrenceMatrix.from_group_sizes([[0, 1], [3, 0]], ["a", "b"], ["G"], [2])
    assert model.value(0, 1) == 1.0
    assert model.value(1, 0) == 3.0


# ── Accessors ─────────────────────────────────────────────────────────────────

def test_index_of_and_value(star_model):
    assert star_model.index_of("c") == 2
    assert star_model.index_of(1) == 1
    assert star_model.value("b", "c") == 20.0
    assert star_model["c", "a"] == 10.0
    with pytest.raises(KeyError):
        star_model.index_of("zzz")
    with pytest.raises(IndexError):
        star_model.index_of(3)


def test_flows(star_model):
    np.testing.assert_allclose(star_model.flows(), [10.0, 20.0, 30.0])
    assert star_model.total_flow("c") == 30.0


def test_flows_include_diagonal_and_use_magnitude():
    model = CoOccurrenceMatrix.from_group_sizes(
        [[4.0, -2.0], [-2.0, 0.0]], ["a", "b"], ["G"], [2]
    )
    np.testing.assert_allclose(model.flows(), [6.0, 2.0])


def test_group_lookup(vdj_model):
    assert vdj_model.group_of("d2") == "D"
    assert vdj_model.group_of(8) == "J"
    assert vdj_model.group_position("v3") == 0
    assert vdj_model.group_position("j1") == 2
