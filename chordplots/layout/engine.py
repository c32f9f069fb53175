"""
chordplots/layout/engine.py - compute_layout(), the layout entry point.

Dependency order:
    1. Flow per label (Σ |row|)
    2. Visitation order (fixed_order, else sort_by)
    3. Arc allocation
    4. Ribbon endpoint packing

compute_layout() is a pure function of (model, config): it reads the model,
allocates fresh output and returns an immutable ChordLayout. Identical inputs
give bit-identical layouts, so hosts may memoize on (model, config).
layout_with_order() returns the same layout together with the resolved
visitation order.
"""

import logging

from chordplots.config import DEFAULT_CONFIG, LayoutConfig
from chordplots.data.cooccurrence import CoOccurrenceMatrix
from chordplots.layout.arcs import allocate_arcs
from chordplots.layout.order import resolve_visitation_order
from chordplots.layout.ribbons import pack_ribbons
from chordplots.layout.types import ChordLayout

logger = logging.getLogger(__name__)


def compute_layout(
    model: CoOccurrenceMatrix,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> ChordLayout:
    """
    Compute the complete chord layout for a data model.

    Args:
        model:  Validated CoOccurrenceMatrix.
        config: LayoutConfig (radii, gap policy, orientation, order, power).

    Returns:
        ChordLayout with one arc per label (index-addressable) and one
        ribbon per non-zero upper-triangle cell.

    Raises:
        ConfigurationError: fixed_order is not a permutation of the labels.
        DomainError:        total flow is zero or negative.
    """
    layout, _ = layout_with_order(model, config)
    return layout


def layout_with_order(
    model: CoOccurrenceMatrix,
    config: LayoutConfig = DEFAULT_CONFIG,
) -> tuple[ChordLayout, list[int]]:
    """
    compute_layout() plus the visitation order the arcs were placed in.

    The order is resolved once and shared with arc allocation, so callers
    that report it (see chordplots.pipeline) need not resolve it again.
    """
    flows = model.flows()
    order = resolve_visitation_order(
        model, config.sort_by, config.fixed_order, flows=flows
    )
    arcs, gap_size = allocate_arcs(flows, order, config)
    ribbons = pack_ribbons(model.matrix, arcs, config.ribbon_width_power)

    logger.debug(
        "Layout computed: %d arcs, %d ribbons, sort_by=%s, fixed_order=%s.",
        len(arcs),
        len(ribbons),
        config.sort_by.value,
        config.fixed_order is not None,
    )
    layout = ChordLayout(
        arcs=tuple(arcs),
        ribbons=tuple(ribbons),
        inner_radius=config.inner_radius,
        outer_radius=config.outer_radius,
        gap_angle=gap_size,
    )
    return layout, order
