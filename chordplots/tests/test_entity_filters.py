"""
chordplots/tests/test_entity_filters.py - Tests for pre-layout entity filters.

Tests verify:
- subset_model() keeps original relative order and rebuilds groups.
- Empty groups are dropped; indices are renumbered contiguously.
- filter_entities_top_n() ranks by flow with index tie-break.
- filter_entities_by_min_aggregate_flow() keeps flow >= threshold.
- filter_by_threshold() zeros weak cells but keeps the label set.
- normalize() scales cells to sum to 1 and passes zero-total models through.
- Inputs are never mutated.
"""

import numpy as np
import pytest

from chordplots.data.filters import (
    filter_by_threshold,
    filter_entities_by_min_aggregate_flow,
    filter_entities_top_n,
    normalize,
    subset_model,
)
from chordplots.errors import ConfigurationError


# ── subset_model ──────────────────────────────────────────────────────────────

def test_subset_keeps_original_order(vdj_model):
    sub = subset_model(vdj_model, [7, 1, 5])
    assert sub.labels == ("v2", "d2", "j1")
    assert sub.value("v2", "j1") == vdj_model.value("v2", "j1")


def test_subset_rebuilds_groups(vdj_model):
    sub = subset_model(vdj_model, [0, 2, 8])
    assert [g.name for g in sub.groups] == ["V", "J"]
    assert sub.groups[0].indices == range(0, 2)
    assert sub.groups[1].indices == range(2, 3)


def test_subset_out_of_range_raises(vdj_model):
    with pytest.raises(ConfigurationError):
        subset_model(vdj_model, [0, 9])


def test_subset_empty(vdj_model):
    sub = subset_model(vdj_model, [])
    assert sub.n_labels == 0
    assert sub.n_groups == 0


# ── Top-N ─────────────────────────────────────────────────────────────────────

def test_top_n_keeps_highest_flow(star_model):
    sub = filter_entities_top_n(star_model, 2)
    # flows: a=10, b=20, c=30
    assert sub.labels == ("b", "c")
    assert sub.value("b", "c") == 20.0


def test_top_n_tie_break_prefers_lower_index(build_model):
    model = build_model([[0, 1, 1], [1, 0, 1], [1, 1, 0]])
    assert filter_entities_top_n(model, 2).labels == ("e0", "e1")


def test_top_n_larger_than_model_keeps_all(star_model):
    assert filter_entities_top_n(star_model, 10).labels == star_model.labels


def test_top_n_negative_raises(star_model):
    with pytest.raises(ConfigurationError):
        filter_entities_top_n(star_model, -1)


# ── Minimum flow ──────────────────────────────────────────────────────────────

def test_min_flow_is_inclusive(star_model):
    sub = filter_entities_by_min_aggregate_flow(star_model, 20.0)
    assert sub.labels == ("b", "c")


def test_min_flow_uses_magnitude(signed_model):
    # flows: x=11, y=13, z=8
    sub = filter_entities_by_min_aggregate_flow(signed_model, 10.0)
    assert sub.labels == ("x", "y")
    assert sub.value("x", "y") == -8.0


def test_min_flow_removing_everything_warns(star_model, caplog):
    with caplog.at_level("WARNING", logger="chordplots.data.filters"):
        sub = filter_entities_by_min_aggregate_flow(star_model, 1000.0)
    assert sub.n_labels == 0
    assert "removed all" in caplog.text


# ── Cell threshold ────────────────────────────────────────────────────────────

def test_threshold_zeros_weak_cells(signed_model):
    out = filter_by_threshold(signed_model, 4.0)
    assert out.labels == signed_model.labels
    assert out.value("x", "z") == 0.0
    assert out.value("x", "y") == -8.0
    assert out.value("y", "z") == 5.0


def test_filters_do_not_mutate_input(vdj_model):
    before = vdj_model.matrix.copy()
    filter_by_threshold(vdj_model, 30.0)
    filter_entities_top_n(vdj_model, 3)
    np.testing.assert_array_equal(vdj_model.matrix, before)


# ── normalize ─────────────────────────────────────────────────────────────────

def test_normalize_sums_to_one(star_model):
    out = normalize(star_model)
    assert out.matrix.sum() == pytest.approx(1.0)
    assert out.value("a", "c") == pytest.approx(10.0 / 60.0)
    assert out.labels == star_model.labels
    assert out.groups == star_model.groups
    assert star_model.value("a", "c") == 10.0


def test_normalize_zero_total_is_passthrough(signed_model, build_model):
    # Signed cells cancel out: 2 * (-8 + 3 + 5) == 0.
    assert normalize(signed_model) is signed_model
    zero = build_model(np.zeros((2, 2)))
    assert normalize(zero) is zero


def test_normalize_negative_total_is_passthrough(build_model):
    model = build_model([[0, -2], [-2, 0]])
    assert normalize(model) is model
