"""
chordplots/tests/test_engine.py - Tests for compute_layout() and the layout types.

Tests verify:
- Layout carries one arc per label and the configured radii.
- Identical inputs give identical layouts.
- The input model is not modified.
- Errors from order resolution and arc allocation propagate.
- to_dict() is JSON-ready.
- A fixed order places its first entity at start_angle.
- layout_with_order() returns the same layout and the order used.
"""

import json

import numpy as np
import pytest

from chordplots import compute_layout, LayoutConfig
from chordplots.layout.engine import layout_with_order
from chordplots.errors import ConfigurationError, DomainError


def test_layout_shape(vdj_model):
    cfg = LayoutConfig(inner_radius=0.8, outer_radius=0.9)
    layout = compute_layout(vdj_model, cfg)
    assert layout.n_arcs == vdj_model.n_labels
    assert [a.label_idx for a in layout.arcs] == list(range(vdj_model.n_labels))
    assert layout.inner_radius == 0.8
    assert layout.outer_radius == 0.9
    assert layout.gap_angle == pytest.approx((2 * np.pi - cfg.content_angle) / 9)


def test_layout_is_deterministic(vdj_model):
    cfg = LayoutConfig(sort_by="value", ribbon_width_power=1.5)
    assert compute_layout(vdj_model, cfg) == compute_layout(vdj_model, cfg)


def test_input_is_not_mutated(vdj_model):
    before = vdj_model.matrix.copy()
    compute_layout(vdj_model)
    np.testing.assert_array_equal(vdj_model.matrix, before)


def test_arc_values_are_flows(star_model):
    layout = compute_layout(star_model)
    assert [a.value for a in layout.arcs] == [10.0, 20.0, 30.0]


def test_bad_fixed_order_propagates(star_model):
    with pytest.raises(ConfigurationError):
        compute_layout(star_model, LayoutConfig(fixed_order=[0, 1]))


def test_zero_matrix_raises(build_model):
    with pytest.raises(DomainError):
        compute_layout(build_model(np.zeros((3, 3))))


def test_to_dict_is_json_serialisable(star_model):
    payload = compute_layout(star_model).to_dict()
    text = json.dumps(payload)
    decoded = json.loads(text)
    assert len(decoded["arcs"]) == 3
    assert decoded["ribbons"][0]["source"]["label_idx"] == 0
    assert decoded["ribbons"][1]["value"] == 20.0


def test_midpoint_and_span(pair_model):
    arc = compute_layout(pair_model).arcs[0]
    assert arc.midpoint == pytest.approx((arc.start_angle + arc.end_angle) / 2)
    assert arc.span > 0


def test_fixed_order_first_arc_starts_at_start_angle(pair_model):
    cfg = LayoutConfig(fixed_order=[1, 0], start_angle=0.25)
    layout = compute_layout(pair_model, cfg)
    assert layout.arcs[1].start_angle == pytest.approx(0.25)
    assert layout.arcs[0].start_angle > layout.arcs[1].end_angle


def test_repeated_fixed_order_raises(pair_model):
    with pytest.raises(ConfigurationError):
        compute_layout(pair_model, LayoutConfig(fixed_order=[1, 1]))


def test_layout_with_order(star_model):
    cfg = LayoutConfig(sort_by="value")
    layout, order = layout_with_order(star_model, cfg)
    assert layout == compute_layout(star_model, cfg)
    assert order == [2, 1, 0]
    arcs = sorted(layout.arcs, key=lambda arc: arc.start_angle)
    assert [arc.label_idx for arc in arcs] == order
