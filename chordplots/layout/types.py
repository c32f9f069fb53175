"""
chordplots/layout/types.py - Geometry value types produced by layout.

Angles are radians. Every interval is stored with start <= end regardless of
the configured drawing direction.
"""

from dataclasses import asdict, dataclass, replace
from typing import Iterable


@dataclass(frozen=True)
class ArcSegment:
    """
    Arc on the outer circle for a single label.

    Fields:
        label_idx:   Index of the label in the data model.
        start_angle: Leading edge (radians).
        end_angle:   Trailing edge (radians), >= start_angle.
        value:       Total flow of the label (sum of |row|).
    """
    label_idx: int
    start_angle: float
    end_angle: float
    value: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def midpoint(self) -> float:
        return (self.start_angle + self.end_angle) / 2


@dataclass(frozen=True)
class RibbonEndpoint:
    """One end of a ribbon: a sub-interval of the owning label's arc."""
    label_idx: int
    start_angle: float
    end_angle: float

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle

    @property
    def midpoint(self) -> float:
        return (self.start_angle + self.end_angle) / 2


@dataclass(frozen=True)
class Ribbon:
    """
    Connection between two labels.

    value is the original matrix cell, sign included. Endpoint widths are
    derived from its magnitude only.
    """
    source: RibbonEndpoint
    target: RibbonEndpoint
    value: float

    @property
    def is_self_loop(self) -> bool:
        return self.source.label_idx == self.target.label_idx


@dataclass(frozen=True)
class ChordLayout:
    """
    Complete layout for rendering a chord diagram.

    Fields:
        arcs:         One ArcSegment per label, addressable by label index.
        ribbons:      Ribbons in matrix scan order (upper triangle, row-major)
                      unless a filter reordered them.
        inner_radius: Radius at which ribbons attach.
        outer_radius: Outer radius of the arc band.
        gap_angle:    Realized angular size of each gap.
    """
    arcs: tuple[ArcSegment, ...]
    ribbons: tuple[Ribbon, ...]
    inner_radius: float
    outer_radius: float
    gap_angle: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "arcs", tuple(self.arcs))
        object.__setattr__(self, "ribbons", tuple(self.ribbons))

    @property
    def n_arcs(self) -> int:
        return len(self.arcs)

    @property
    def n_ribbons(self) -> int:
        return len(self.ribbons)

    def with_ribbons(self, ribbons: Iterable[Ribbon]) -> "ChordLayout":
        """New layout sharing this layout's arcs, with a replaced ribbon list."""
        return replace(self, ribbons=tuple(ribbons))

    def to_dict(self) -> dict:
        """JSON-ready representation (lists of plain dicts)."""
        return {
            "inner_radius": self.inner_radius,
            "outer_radius": self.outer_radius,
            "gap_angle": self.gap_angle,
            "arcs": [asdict(a) for a in self.arcs],
            "ribbons": [asdict(r) for r in self.ribbons],
        }
