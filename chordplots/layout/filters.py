"""
chordplots/layout/filters.py - Post-layout ribbon filters.

Both filters leave arcs untouched and return a new ChordLayout sharing the
input's arc tuple. Removing ribbons does not re-pack the remaining ones;
their endpoints stay where compute_layout() put them.
"""

import logging

from chordplots.errors import ConfigurationError
from chordplots.layout.types import ChordLayout, Ribbon

logger = logging.getLogger(__name__)


def _key(ribbon: Ribbon, by_magnitude: bool) -> float:
    return abs(ribbon.value) if by_magnitude else ribbon.value


def filter_ribbons_by_value(
    layout: ChordLayout,
    min_value: float,
    by_magnitude: bool = False,
) -> ChordLayout:
    """
    Drop ribbons whose value is below min_value.

    Args:
        layout:       Source layout.
        min_value:    Inclusive lower bound.
        by_magnitude: Compare |value| instead of the stored signed value.
                      Use this for difference matrices, where a large
                      decrease is as significant as a large increase.
    """
    kept = [r for r in layout.ribbons if _key(r, by_magnitude) >= min_value]
    logger.debug(
        "Value filter (>= %s%s): kept %d of %d ribbons.",
        min_value,
        " by magnitude" if by_magnitude else "",
        len(kept),
        layout.n_ribbons,
    )
    return layout.with_ribbons(kept)


def filter_ribbons_top_n(
    layout: ChordLayout,
    n: int,
    by_magnitude: bool = False,
) -> ChordLayout:
    """
    Keep the n largest ribbons, sorted descending by value.

    Ties keep their original relative order. When n is at least the current
    ribbon count the ribbon list is returned unchanged, in scan order.

    Raises:
        ConfigurationError: n is negative.
    """
    if n < 0:
        raise ConfigurationError(f"n must be >= 0; got {n}", field="n", value=n)
    if n >= layout.n_ribbons:
        return layout.with_ribbons(layout.ribbons)

    ranked = sorted(layout.ribbons, key=lambda r: _key(r, by_magnitude), reverse=True)
    return layout.with_ribbons(ranked[:n])
