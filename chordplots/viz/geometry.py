"""
chordplots/viz/geometry.py - Polygon and curve helpers for renderers.

Turns layout angles into Cartesian point arrays. Nothing here draws; a
renderer feeds the arrays to whatever backend it uses (e.g. a matplotlib
Path / PathPatch). All functions return float64 arrays of shape (k, 2).
"""

import math
from dataclasses import dataclass

import numpy as np

from chordplots.layout.types import ArcSegment, Ribbon


def angle_to_point(angle: float, radius: float) -> np.ndarray:
    """Polar → Cartesian."""
    return np.array([radius * math.cos(angle), radius * math.sin(angle)])


def arc_points(
    start_angle: float,
    end_angle: float,
    radius: float,
    n_points: int = 50,
) -> np.ndarray:
    """Points along an arc, from start_angle to end_angle inclusive."""
    angles = np.linspace(start_angle, end_angle, n_points)
    return np.column_stack([radius * np.cos(angles), radius * np.sin(angles)])


def arc_polygon(
    inner_radius: float,
    outer_radius: float,
    start_angle: float,
    end_angle: float,
    n_points: int = 30,
) -> np.ndarray:
    """
    Annular sector as a closed polygon: outer arc forward, inner arc reversed.
    """
    outer = arc_points(start_angle, end_angle, outer_radius, n_points)
    inner = arc_points(end_angle, start_angle, inner_radius, n_points)
    return np.vstack([outer, inner])


def cubic_bezier_points(p0, p1, p2, p3, n_points: int = 30) -> np.ndarray:
    """Evaluate a cubic Bezier curve at n_points evenly spaced t in [0, 1]."""
    p0, p1, p2, p3 = (np.asarray(p, dtype=np.float64) for p in (p0, p1, p2, p3))
    t = np.linspace(0.0, 1.0, n_points)[:, None]
    s = 1.0 - t
    return s ** 3 * p0 + 3 * s ** 2 * t * p1 + 3 * s * t ** 2 * p2 + t ** 3 * p3


@dataclass(frozen=True, eq=False)
class RibbonPath:
    """Closed outline of one ribbon, ready for a polygon fill."""
    points: np.ndarray
    source_idx: int
    target_idx: int


def ribbon_path(
    ribbon: Ribbon,
    radius: float,
    n_bezier: int = 30,
    tension: float = 0.5,
) -> RibbonPath:
    """
    Outline of a ribbon attached at `radius`.

    Path: source arc → Bezier to target start → target arc → Bezier back to
    source start. Control points sit on the endpoint angles at
    radius × (1 - tension), so tension 0 gives wide curves and tension 1
    pulls them through the centre.

    A self-loop ribbon (never produced by compute_layout) is drawn as the
    source arc closed by a single Bezier.
    """
    src = ribbon.source
    tgt = ribbon.target
    ctrl = radius * (1.0 - tension)
    half = max(n_bezier // 2, 2)

    src_start = angle_to_point(src.start_angle, radius)
    src_end = angle_to_point(src.end_angle, radius)
    tgt_start = angle_to_point(tgt.start_angle, radius)
    tgt_end = angle_to_point(tgt.end_angle, radius)

    parts = [arc_points(src.start_angle, src.end_angle, radius, half)]
    if ribbon.is_self_loop:
        parts.append(cubic_bezier_points(
            src_end,
            angle_to_point(src.end_angle, ctrl),
            angle_to_point(src.start_angle, ctrl),
            src_start,
            n_bezier,
        ))
    else:
        parts.append(cubic_bezier_points(
            src_end,
            angle_to_point(src.end_angle, ctrl),
            angle_to_point(tgt.start_angle, ctrl),
            tgt_start,
            n_bezier,
        ))
        parts.append(arc_points(tgt.start_angle, tgt.end_angle, radius, half))
        parts.append(cubic_bezier_points(
            tgt_end,
            angle_to_point(tgt.end_angle, ctrl),
            angle_to_point(src.start_angle, ctrl),
            src_start,
            n_bezier,
        ))

    return RibbonPath(np.vstack(parts), src.label_idx, tgt.label_idx)


def ribbon_paths(ribbons, radius: float, **kwargs) -> list[RibbonPath]:
    return [ribbon_path(r, radius, **kwargs) for r in ribbons]


@dataclass(frozen=True, eq=False)
class LabelPosition:
    """Anchor point, rotation (radians) and alignment for one arc label."""
    point: np.ndarray
    angle: float
    halign: str
    valign: str


def label_position(
    arc: ArcSegment,
    radius: float,
    offset: float,
    rotate: bool = True,
) -> LabelPosition:
    """
    Place a label just outside the arc midpoint.

    With rotate=True the text follows the radius; labels on the left half
    are flipped by π so they never read upside down.
    """
    mid = arc.midpoint
    point = angle_to_point(mid, radius + offset)

    if not rotate:
        return LabelPosition(point, 0.0, "center", "center")

    # Normalize to (-π, π] before picking the half.
    wrapped = math.atan2(math.sin(mid), math.cos(mid))
    if -math.pi / 2 <= wrapped <= math.pi / 2:
        return LabelPosition(point, wrapped, "left", "center")
    return LabelPosition(point, wrapped + math.pi, "right", "center")


def label_positions(arcs, radius: float, offset: float, rotate: bool = True) -> list[LabelPosition]:
    return [label_position(a, radius, offset, rotate) for a in arcs]
