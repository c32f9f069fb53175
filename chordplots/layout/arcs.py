"""
chordplots/layout/arcs.py - Arc Allocator.

Converts per-label flow into angular arcs around the circle.

Angle budget:
    content_angle = 2π × (1 - gap_fraction) × arc_scale
    gap_size      = (2π - content_angle) / N

There are exactly N gaps, one after every arc in visitation order, the last
one wrapping back to the first arc. Arc spans therefore add up to
content_angle and, together with the gaps, tile the full turn.

Arcs are returned in label index order (arcs[i] belongs to label i) even
though they are placed in visitation order.
"""

import logging
import math
from typing import Sequence

import numpy as np

from chordplots.config import DEFAULT_CONFIG, LayoutConfig
from chordplots.errors import DomainError
from chordplots.layout.types import ArcSegment

logger = logging.getLogger(__name__)


def allocate_arcs(
    flows: Sequence[float],
    order: Sequence[int],
    config: LayoutConfig = DEFAULT_CONFIG,
) -> tuple[list[ArcSegment], float]:
    """
    Place one arc per label around the circle.

    Algorithm:
        1. total = Σ flows; fail if total <= 0.
        2. Walk `order` starting at config.start_angle. For each label,
           advance by direction × content_angle × flow / total (the arc),
           then by direction × gap_size (the gap that follows it).
        3. Store each arc with start <= end regardless of direction.

    Args:
        flows:  Non-negative total flow per label, in index order.
        order:  Visitation order, a permutation of range(len(flows)).
        config: LayoutConfig. Uses gap_fraction, arc_scale, start_angle,
                direction.

    Returns:
        arcs:     ArcSegment list indexed by label.
        gap_size: Angular size of each of the N gaps.

    Raises:
        DomainError: total flow is zero or negative (nothing to lay out).
    """
    flows = np.asarray(flows, dtype=np.float64)
    n = len(flows)
    total = float(flows.sum())
    if not total > 0:
        raise DomainError(
            f"Total flow must be > 0 to lay out a diagram; got {total}",
            field="total_flow",
            value=total,
        )

    content_angle = config.content_angle
    gap_size = (2 * math.pi - content_angle) / n
    direction = config.direction

    arcs: list[ArcSegment | None] = [None] * n
    current = config.start_angle
    for idx in order:
        flow = float(flows[idx])
        width = content_angle * (flow / total)

        start = current
        end = current + direction * width
        arcs[idx] = ArcSegment(idx, min(start, end), max(start, end), flow)

        current = end + direction * gap_size

    logger.debug(
        "Allocated %d arcs: content=%.6f rad, gap=%.6f rad each.",
        n,
        content_angle,
        gap_size,
    )
    return arcs, gap_size
