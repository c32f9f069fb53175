"""
chordplots/layout/ribbons.py - Ribbon Endpoint Packer.

For every pair (i, j), i < j, with a non-zero cell, emits one Ribbon whose two
endpoints are sub-intervals of arc i and arc j.

Endpoint width on arc k for a pair with value v:

    power == 1:   span_k × |v| / flow_k
                  Exact proportional partition: Σ|v| over row k is flow_k,
                  so a zero-diagonal row consumes the whole arc.

    power != 1:   span_k × r / R_k,  r = (|v| / flow_k) ** power,
                  R_k = Σ r over every pair touching arc k.
                  Two passes; the renormalization keeps the arc exactly
                  partitioned while skewing widths toward the larger pairs
                  (power > 1) or evening them out (power < 1).

A zero flow or zero normalizer gives zero-width endpoints instead of NaN.

Packing order is the matrix scan order (upper triangle, row-major). Each arc
has a cursor starting at its own start angle; an endpoint begins where the
previous endpoint on that arc ended. Two layouts of related matrices with the
same visitation order therefore place shared pairs at matching positions.
"""

import logging
from typing import Sequence

import numpy as np

from chordplots.layout.types import ArcSegment, Ribbon, RibbonEndpoint

logger = logging.getLogger(__name__)


def _power_normalizers(
    magnitude: np.ndarray,
    flows: np.ndarray,
    power: float,
) -> np.ndarray:
    """First pass for power != 1: per-arc Σ (|v| / flow) ** power."""
    n = len(flows)
    sums = np.zeros(n, dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            value = magnitude[i, j]
            if value == 0:
                continue
            if flows[i] > 0:
                sums[i] += (value / flows[i]) ** power
            if flows[j] > 0:
                sums[j] += (value / flows[j]) ** power
    return sums


def pack_ribbons(
    matrix: np.ndarray,
    arcs: Sequence[ArcSegment],
    power: float = 1.0,
) -> list[Ribbon]:
    """
    Compute ribbon endpoints for every non-zero upper-triangle cell.

    Args:
        matrix: N×N strengths (may be signed). Only i < j cells are read, so
                the diagonal never produces a ribbon.
        arcs:   Arcs indexed by label, as returned by allocate_arcs().
                arcs[k].value is the flow used for normalization.
        power:  ribbon_width_power; 1.0 selects the linear fast path.

    Returns:
        Ribbons in scan order. Each ribbon's value is the signed matrix cell.
    """
    matrix = np.asarray(matrix, dtype=np.float64)
    magnitude = np.abs(matrix)
    n = len(arcs)
    flows = np.array([a.value for a in arcs], dtype=np.float64)
    spans = np.array([a.span for a in arcs], dtype=np.float64)
    linear = power == 1.0

    normalizers = None if linear else _power_normalizers(magnitude, flows, power)

    # Per-arc cursor, indexed like arcs.
    cursor = np.array([a.start_angle for a in arcs], dtype=np.float64)

    def width(k: int, value: float) -> float:
        if flows[k] <= 0:
            return 0.0
        if linear:
            return spans[k] * (value / flows[k])
        if normalizers[k] <= 0:
            return 0.0
        return spans[k] * ((value / flows[k]) ** power) / normalizers[k]

    ribbons: list[Ribbon] = []
    for i in range(n):
        for j in range(i + 1, n):
            value = magnitude[i, j]
            if value == 0:
                continue

            src_width = width(i, value)
            tgt_width = width(j, value)

            src_start = float(cursor[i])
            cursor[i] += src_width
            tgt_start = float(cursor[j])
            cursor[j] += tgt_width

            ribbons.append(
                Ribbon(
                    RibbonEndpoint(i, src_start, float(cursor[i])),
                    RibbonEndpoint(j, tgt_start, float(cursor[j])),
                    float(matrix[i, j]),
                )
            )

    logger.debug(
        "Packed %d ribbons over %d arcs (power=%s).",
        len(ribbons),
        n,
        power,
    )
    return ribbons
