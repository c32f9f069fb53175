"""
chordplots/pipeline.py - Single-call chord layout pipeline.

Provides build_chord_layout(), which runs the optional entity pre-filters,
the layout computation and the optional ribbon filters in dependency order,
and returns every intermediate result.

Usage:
    from chordplots.pipeline import build_chord_layout
    result = build_chord_layout(model, top_n_entities=20, min_ribbon_value=5)
    result.layout.ribbons
"""

import logging
from dataclasses import dataclass
from typing import Optional

from chordplots.config import DEFAULT_CONFIG, LayoutConfig
from chordplots.data.cooccurrence import CoOccurrenceMatrix
from chordplots.data.filters import (
    filter_entities_by_min_aggregate_flow,
    filter_entities_top_n,
)
from chordplots.layout.engine import layout_with_order
from chordplots.layout.filters import filter_ribbons_by_value, filter_ribbons_top_n
from chordplots.layout.types import ChordLayout

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChordResult:
    """
    Complete output of one pipeline run.

    Fields:
        model:       Data model after entity pre-filters (the one laid out).
        order:       Visitation order used for the arcs.
        full_layout: Layout before ribbon filters.
        layout:      Final layout after ribbon filters.
    """

    model: CoOccurrenceMatrix
    order: tuple[int, ...]
    full_layout: ChordLayout
    layout: ChordLayout

    @property
    def labels_in_order(self) -> list[str]:
        """Label names in circle order; reusable as another run's fixed_order."""
        return [self.model.labels[i] for i in self.order]


def build_chord_layout(
    model: CoOccurrenceMatrix,
    config: LayoutConfig = DEFAULT_CONFIG,
    *,
    top_n_entities: Optional[int] = None,
    min_entity_flow: Optional[float] = None,
    min_ribbon_value: Optional[float] = None,
    top_n_ribbons: Optional[int] = None,
    by_magnitude: bool = False,
) -> ChordResult:
    """
    Execute filters and layout in one call.

    Dependency order:
        1. Minimum aggregate flow entity filter
        2. Top-N entity filter
        3. Layout computation (order resolved once, see layout_with_order)
        4. Ribbon value threshold
        5. Top-N ribbons

    Args:
        model:            Source data model.
        config:           LayoutConfig. A fixed_order must refer to the
                          entities that survive steps 1-2.
        top_n_entities:   Keep only the N highest-flow entities.
        min_entity_flow:  Keep only entities with flow >= this value.
        min_ribbon_value: Drop ribbons below this value.
        top_n_ribbons:    Keep only the N largest ribbons.
        by_magnitude:     Ribbon filters compare |value| (signed matrices).

    Returns:
        ChordResult with the filtered model, order and both layouts.
    """
    filtered = model
    if min_entity_flow is not None:
        filtered = filter_entities_by_min_aggregate_flow(filtered, min_entity_flow)
    if top_n_entities is not None:
        filtered = filter_entities_top_n(filtered, top_n_entities)

    if filtered.n_labels != model.n_labels:
        logger.info(
            "Entity filters kept %d of %d labels.",
            filtered.n_labels,
            model.n_labels,
        )

    full_layout, order = layout_with_order(filtered, config)

    layout = full_layout
    if min_ribbon_value is not None:
        layout = filter_ribbons_by_value(layout, min_ribbon_value, by_magnitude)
    if top_n_ribbons is not None:
        layout = filter_ribbons_top_n(layout, top_n_ribbons, by_magnitude)

    logger.info(
        "Chord layout ready: %d arcs, %d of %d ribbons kept.",
        layout.n_arcs,
        layout.n_ribbons,
        full_layout.n_ribbons,
    )
    return ChordResult(
        model=filtered,
        order=tuple(order),
        full_layout=full_layout,
        layout=layout,
    )
