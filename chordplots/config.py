"""
chordplots/config.py - All tunable parameters for chord layout.

No layout constant should be hardcoded in an algorithm module. Radii, gap
policy, orientation, ordering and ribbon shaping live here so that a layout
is fully described by (data model, LayoutConfig).

Validation happens once, at construction. A LayoutConfig that exists is a
valid LayoutConfig; the algorithms never re-check these fields.
"""

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Union

from chordplots.errors import ConfigurationError


class SortBy(str, Enum):
    """Visitation order policy for arcs around the circle."""

    NONE = "none"
    # Original entity index order.

    VALUE = "value"
    # Descending total flow; ties keep original index order.

    GROUP = "group"
    # Groups in their original order, descending flow inside each group.

    @classmethod
    def coerce(cls, value: Union["SortBy", str]) -> "SortBy":
        """Accept a SortBy member or its string name; reject anything else."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                pass
        allowed = ", ".join(repr(m.value) for m in cls)
        raise ConfigurationError(
            f"sort_by must be one of {allowed}; got {value!r}",
            field="sort_by",
            value=value,
        )


FixedOrder = Optional[Sequence[Union[int, str]]]


@dataclass(frozen=True)
class LayoutConfig:
    """
    Immutable configuration for compute_layout().

    All fields have documented defaults. Override by constructing a new
    LayoutConfig (or calling .replace()) with the desired values.
    """

    # ── Radii ─────────────────────────────────────────────────────────────────
    inner_radius: float = 0.92
    # Radius at which ribbons attach. Must be > 0.

    outer_radius: float = 1.0
    # Outer edge of the arc band. Must be > inner_radius.

    # ── Arc and gap allocation ────────────────────────────────────────────────
    gap_fraction: float = 0.05
    # Baseline fraction of the full turn reserved for gaps, in [0, 1).

    arc_scale: float = 1.0
    # Shrinks only the arc (content) portion, in (0, 1].
    # content = 2π × (1 - gap_fraction) × arc_scale; the rest is gap.

    # ── Orientation ───────────────────────────────────────────────────────────
    start_angle: float = math.pi / 2
    # Angle of the first visited arc's leading edge (0 = right, π/2 = top).

    direction: int = 1
    # +1 = counterclockwise, -1 = clockwise.

    # ── Order ─────────────────────────────────────────────────────────────────
    sort_by: SortBy = SortBy.GROUP
    # Ignored when fixed_order is set.

    fixed_order: FixedOrder = None
    # Explicit visitation order as entity indices or label names.
    # Checked against the data model at layout time (it needs N).

    # ── Ribbon thickness ──────────────────────────────────────────────────────
    ribbon_width_power: float = 1.0
    # Endpoint width ∝ (|value| / flow) ** power, renormalized per arc.
    # > 1 exaggerates thick ribbons, < 1 evens them out.

    def __post_init__(self) -> None:
        for name in ("inner_radius", "outer_radius", "gap_fraction",
                     "arc_scale", "start_angle", "ribbon_width_power"):
            raw = getattr(self, name)
            try:
                number = float(raw)
            except (TypeError, ValueError):
                raise ConfigurationError(
                    f"{name} must be a real number; got {raw!r}",
                    field=name,
                    value=raw,
                ) from None
            if not math.isfinite(number):
                raise ConfigurationError(
                    f"{name} must be finite; got {raw!r}", field=name, value=raw
                )
            object.__setattr__(self, name, number)

        if self.inner_radius <= 0:
            raise ConfigurationError(
                f"inner_radius must be > 0; got {self.inner_radius}",
                field="inner_radius",
                value=self.inner_radius,
            )
        if self.outer_radius <= self.inner_radius:
            raise ConfigurationError(
                f"outer_radius must be > inner_radius ({self.inner_radius}); "
                f"got {self.outer_radius}",
                field="outer_radius",
                value=self.outer_radius,
            )
        if not 0.0 <= self.gap_fraction < 1.0:
            raise ConfigurationError(
                f"gap_fraction must be in [0, 1); got {self.gap_fraction}",
                field="gap_fraction",
                value=self.gap_fraction,
            )
        if not 0.0 < self.arc_scale <= 1.0:
            raise ConfigurationError(
                f"arc_scale must be in (0, 1]; got {self.arc_scale}",
                field="arc_scale",
                value=self.arc_scale,
            )
        if self.direction not in (1, -1) or isinstance(self.direction, bool):
            raise ConfigurationError(
                f"direction must be +1 or -1; got {self.direction!r}",
                field="direction",
                value=self.direction,
            )
        object.__setattr__(self, "direction", int(self.direction))
        if self.ribbon_width_power <= 0:
            raise ConfigurationError(
                f"ribbon_width_power must be > 0; got {self.ribbon_width_power}",
                field="ribbon_width_power",
                value=self.ribbon_width_power,
            )

        object.__setattr__(self, "sort_by", SortBy.coerce(self.sort_by))

        if self.fixed_order is not None:
            if isinstance(self.fixed_order, (str, bytes)):
                raise ConfigurationError(
                    f"fixed_order must be a sequence of indices or labels; "
                    f"got {self.fixed_order!r}",
                    field="fixed_order",
                    value=self.fixed_order,
                )
            # Freeze to a tuple so the config stays hashable.
            object.__setattr__(self, "fixed_order", tuple(self.fixed_order))

    @property
    def content_angle(self) -> float:
        """Portion of the full turn allocated to arcs."""
        return 2 * math.pi * (1.0 - self.gap_fraction) * self.arc_scale

    def replace(self, **changes) -> "LayoutConfig":
        """Return a validated copy with the given fields changed."""
        return dataclasses.replace(self, **changes)


# Singleton default; import this everywhere instead of constructing anew.
DEFAULT_CONFIG = LayoutConfig()
