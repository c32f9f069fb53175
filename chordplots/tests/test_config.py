"""
chordplots/tests/test_config.py - Tests for LayoutConfig and SortBy.

Tests verify:
- Defaults match the documented values.
- Every range check raises ConfigurationError naming the offending field.
- sort_by accepts strings and members, rejects unknown names and
  non-string values such as None.
- fixed_order is frozen to a tuple; a bare string is rejected.
- replace() re-validates.
- Error classes are also ValueErrors.
"""

import math

import pytest

from chordplots.config import DEFAULT_CONFIG, LayoutConfig, SortBy
from chordplots.errors import ChordPlotsError, ConfigurationError


# ── Defaults ──────────────────────────────────────────────────────────────────

def test_defaults():
    cfg = DEFAULT_CONFIG
    assert cfg.inner_radius == 0.92
    assert cfg.outer_radius == 1.0
    assert cfg.gap_fraction == 0.05
    assert cfg.arc_scale == 1.0
    assert cfg.start_angle == pytest.approx(math.pi / 2)
    assert cfg.direction == 1
    assert cfg.sort_by is SortBy.GROUP
    assert cfg.fixed_order is None
    assert cfg.ribbon_width_power == 1.0


def test_content_angle():
    cfg = LayoutConfig(gap_fraction=0.1, arc_scale=0.5)
    assert cfg.content_angle == pytest.approx(2 * math.pi * 0.9 * 0.5)


def test_config_is_hashable_with_fixed_order():
    cfg = LayoutConfig(fixed_order=[2, 0, 1])
    assert cfg.fixed_order == (2, 0, 1)
    assert hash(cfg) == hash(LayoutConfig(fixed_order=(2, 0, 1)))


# ── Validation ────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "kwargs, field",
    [
        ({"inner_radius": 0.0}, "inner_radius"),
        ({"inner_radius": -1.0}, "inner_radius"),
        ({"outer_radius": 0.5}, "outer_radius"),
        ({"gap_fraction": 1.0}, "gap_fraction"),
        ({"gap_fraction": -0.01}, "gap_fraction"),
        ({"arc_scale": 0.0}, "arc_scale"),
        ({"arc_scale": 1.5}, "arc_scale"),
        ({"direction": 0}, "direction"),
        ({"direction": True}, "direction"),
        ({"ribbon_width_power": 0.0}, "ribbon_width_power"),
        ({"start_angle": float("nan")}, "start_angle"),
        ({"inner_radius": "wide"}, "inner_radius"),
        ({"sort_by": "alphabetical"}, "sort_by"),
        ({"sort_by": None}, "sort_by"),
        ({"sort_by": 1}, "sort_by"),
        ({"fixed_order": "abc"}, "fixed_order"),
    ],
)
def test_invalid_values_raise(kwargs, field):
    with pytest.raises(ConfigurationError) as exc:
        LayoutConfig(**kwargs)
    assert exc.value.field == field


def test_gap_fraction_zero_is_allowed():
    assert LayoutConfig(gap_fraction=0.0).gap_fraction == 0.0


def test_clockwise_direction():
    assert LayoutConfig(direction=-1).direction == -1


def test_sort_by_accepts_strings():
    assert LayoutConfig(sort_by="value").sort_by is SortBy.VALUE
    assert LayoutConfig(sort_by="NONE").sort_by is SortBy.NONE
    assert LayoutConfig(sort_by=SortBy.GROUP).sort_by is SortBy.GROUP


def test_replace_revalidates():
    cfg = DEFAULT_CONFIG.replace(sort_by="value")
    assert cfg.sort_by is SortBy.VALUE
    assert DEFAULT_CONFIG.sort_by is SortBy.GROUP
    with pytest.raises(ConfigurationError):
        DEFAULT_CONFIG.replace(outer_radius=0.1)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        LayoutConfig(gap_fraction=2.0)
    with pytest.raises(ChordPlotsError):
        LayoutConfig(gap_fraction=2.0)
