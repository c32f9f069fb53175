"""
chordplots/viz/colors.py - Colour schemes for arcs and ribbons.

Schemes are plain frozen dataclasses resolved against a layout element and
its data model. Colours are RGB (or RGBA) float tuples in [0, 1]; every
colour argument accepts anything matplotlib understands ('steelblue',
'#4682b4', (0.27, 0.51, 0.71), ...) and is parsed once, when the scheme is
built.

Schemes:
    GroupColorScheme       - one colour per group; ribbons blend the two ends.
    CategoricalColorScheme - one colour per label, cycling a palette.
    GradientColorScheme    - arcs by flow, ribbons by value, on a colormap.
    DivergingColorScheme   - ribbons coloured by signed value (diff matrices).

Palettes are given by name ("wong", the default, or "modern") or as an
explicit sequence of colours.
"""

from dataclasses import dataclass
from typing import Sequence, Union

import matplotlib
import matplotlib.colors as mcolors
import numpy as np

from chordplots.data.cooccurrence import CoOccurrenceMatrix
from chordplots.errors import ConfigurationError
from chordplots.layout.types import ArcSegment, Ribbon

RGB = tuple[float, float, float]
RGBA = tuple[float, float, float, float]

# Wong (2011), Nature Methods 8:441 - colourblind-safe categorical palette.
WONG_PALETTE: tuple[str, ...] = (
    "#0072B2",  # blue
    "#009E73",  # bluish green
    "#D55E00",  # vermillion
    "#CC79A7",  # reddish purple
    "#F0E442",  # yellow
    "#56B4E9",  # sky blue
    "#E69F00",  # orange
    "#000000",  # black
)

MODERN_PALETTE: tuple[str, ...] = (
    "#4292c6",  # blue
    "#f46d43",  # coral
    "#32b67b",  # teal
    "#8c564b",  # warm brown
    "#c779c6",  # soft purple
    "#f1c40f",  # golden yellow
    "#1f77b4",  # deep blue
    "#d66000",  # burnt orange
    "#2ca02c",  # forest green
    "#9467bd",  # rich purple
    "#e31a1c",  # red
    "#009e73",  # emerald
    "#bcbd22",  # olive
    "#17becf",  # cyan
    "#9edae5",  # sky blue
    "#fdae61",  # peach
    "#b2abd2",  # lavender
    "#dc4c3a",  # rust red
    "#575961",  # charcoal
    "#87ceeb",  # light cyan
)

PALETTES: dict[str, tuple[str, ...]] = {
    "wong": WONG_PALETTE,
    "modern": MODERN_PALETTE,
}

DEFAULT_GRAY: RGB = (0.4, 0.4, 0.4)


def to_rgb(color) -> RGB:
    """Parse any matplotlib colour spec to an RGB float tuple."""
    return tuple(float(c) for c in mcolors.to_rgb(color))


def _blend(c1, c2, weight: float) -> RGB:
    """weight × c1 + (1 - weight) × c2."""
    a = np.asarray(to_rgb(c1))
    b = np.asarray(to_rgb(c2))
    return tuple(float(x) for x in weight * a + (1.0 - weight) * b)


def _resolve_palette(palette: Union[str, Sequence, None]) -> Sequence:
    if palette is None:
        return WONG_PALETTE
    if isinstance(palette, str):
        try:
            return PALETTES[palette.lower()]
        except KeyError:
            allowed = ", ".join(repr(name) for name in PALETTES)
            raise ConfigurationError(
                f"palette must be one of {allowed} or a sequence of colours; "
                f"got {palette!r}",
                field="palette",
                value=palette,
            ) from None
    if len(palette) == 0:
        raise ConfigurationError("palette must not be empty", field="palette", value=palette)
    return palette


def _cycle(palette: Sequence, n: int) -> tuple[RGB, ...]:
    return tuple(to_rgb(palette[i % len(palette)]) for i in range(n))


def get_colors_for_count(n: int, palette: Union[str, Sequence, None] = "modern") -> tuple[RGB, ...]:
    """n colours from a palette, cycling when n exceeds its length."""
    return _cycle(_resolve_palette(palette), n)


# ── Schemes ───────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class GroupColorScheme:
    group_colors: dict[str, RGB]
    default_color: RGB = DEFAULT_GRAY


@dataclass(frozen=True)
class CategoricalColorScheme:
    colors: tuple[RGB, ...]


@dataclass(frozen=True)
class DivergingColorScheme:
    """
    Diverging scale for signed ribbon values.

    Fields:
        negative_color: Colour at range[0] (largest decrease).
        neutral_color:  Colour at zero.
        positive_color: Colour at range[1] (largest increase).
        range:          (min, max) value range used for normalization.
        symmetric:      Whether range was made symmetric around zero.
    """
    negative_color: RGB
    neutral_color: RGB
    positive_color: RGB
    range: tuple[float, float]
    symmetric: bool


@dataclass(frozen=True)
class GradientColorScheme:
    """
    Continuous colormap scale.

    Arcs are coloured by their flow and ribbons by their value, both mapped
    linearly from range onto the colormap and clipped at either end.
    """
    colormap: str
    range: tuple[float, float]

    def __post_init__(self) -> None:
        if self.colormap not in matplotlib.colormaps:
            raise ConfigurationError(
                f"Unknown matplotlib colormap: {self.colormap!r}",
                field="colormap",
                value=self.colormap,
            )
        lo, hi = (float(v) for v in self.range)
        if not hi > lo:
            raise ConfigurationError(
                f"Gradient range must satisfy min < max; got {self.range!r}",
                field="range",
                value=self.range,
            )
        object.__setattr__(self, "range", (lo, hi))


ColorScheme = Union[
    GroupColorScheme, CategoricalColorScheme, GradientColorScheme, DivergingColorScheme
]


def group_colors(
    model: CoOccurrenceMatrix,
    palette: Union[str, Sequence, None] = None,
) -> GroupColorScheme:
    """One palette colour per group, in group order (palette cycles)."""
    colors = _cycle(_resolve_palette(palette), model.n_groups)
    return GroupColorScheme({g.name: c for g, c in zip(model.groups, colors)})


def categorical_colors(n: int, palette: Union[str, Sequence, None] = None) -> CategoricalColorScheme:
    """n colours cycled from the palette."""
    return CategoricalColorScheme(_cycle(_resolve_palette(palette), n))


def gradient_colors(
    colormap: str = "viridis",
    min_val: float = 0.0,
    max_val: float = 1.0,
) -> GradientColorScheme:
    return GradientColorScheme(colormap, (min_val, max_val))


def gradient_color(scheme: GradientColorScheme, value: float) -> RGB:
    """Map a value onto the colormap, clipping outside the range."""
    lo, hi = scheme.range
    norm = mcolors.Normalize(vmin=lo, vmax=hi, clip=True)
    cmap = matplotlib.colormaps[scheme.colormap]
    return to_rgb(cmap(float(norm(value))))


def diverging_colors(
    model: CoOccurrenceMatrix,
    negative="steelblue",
    neutral="#f7f7f7",
    positive="firebrick",
    symmetric: bool = True,
) -> DivergingColorScheme:
    """
    Diverging scheme fitted to the upper-triangle values of a signed model.

    With symmetric=True the range is (-m, m) where m is the largest
    magnitude, so equal increases and decreases get equally strong colours.
    A degenerate range is widened by ±1.
    """
    upper = model.matrix[np.triu_indices(model.n_labels, k=1)]
    if upper.size == 0:
        lo, hi = -1.0, 1.0
    else:
        lo, hi = float(upper.min()), float(upper.max())

    if symmetric:
        m = max(abs(lo), abs(hi))
        lo, hi = -m, m
    if np.isclose(lo, hi):
        lo, hi = lo - 1.0, hi + 1.0

    return DivergingColorScheme(
        to_rgb(negative), to_rgb(neutral), to_rgb(positive), (lo, hi), symmetric
    )


def diverging_color(scheme: DivergingColorScheme, value: float) -> RGB:
    """Map a signed value onto the diverging scale."""
    lo, hi = scheme.range
    if value <= 0:
        t = 0.0 if lo >= 0 else min(max(value / lo, 0.0), 1.0)
        return _blend(scheme.negative_color, scheme.neutral_color, t)
    t = 0.0 if hi <= 0 else min(max(value / hi, 0.0), 1.0)
    return _blend(scheme.positive_color, scheme.neutral_color, t)


# Alias used with models produced by data.reconcile.diff().
diff_colors = diverging_colors


# ── Resolution ────────────────────────────────────────────────────────────────

def resolve_arc_color(scheme: ColorScheme, arc: ArcSegment, model: CoOccurrenceMatrix) -> RGB:
    """Colour of an arc under the given scheme."""
    if isinstance(scheme, GroupColorScheme):
        return scheme.group_colors.get(model.group_of(arc.label_idx), scheme.default_color)
    if isinstance(scheme, CategoricalColorScheme):
        return scheme.colors[arc.label_idx % len(scheme.colors)]
    if isinstance(scheme, GradientColorScheme):
        return gradient_color(scheme, arc.value)
    if isinstance(scheme, DivergingColorScheme):
        # Arcs carry no sign.
        return scheme.neutral_color
    raise TypeError(f"Unsupported colour scheme: {type(scheme).__name__}")


def resolve_ribbon_color(
    scheme: ColorScheme,
    ribbon: Ribbon,
    model: CoOccurrenceMatrix,
    blend: bool = True,
) -> RGB:
    """
    Colour of a ribbon.

    Group and categorical schemes blend the two endpoint colours 50/50 when
    blend=True and the ends differ. Gradient and diverging schemes colour by
    value and ignore blend.
    """
    if isinstance(scheme, DivergingColorScheme):
        return diverging_color(scheme, ribbon.value)
    if isinstance(scheme, GradientColorScheme):
        return gradient_color(scheme, ribbon.value)

    if isinstance(scheme, GroupColorScheme):
        src_key = model.group_of(ribbon.source.label_idx)
        tgt_key = model.group_of(ribbon.target.label_idx)
        src = scheme.group_colors.get(src_key, scheme.default_color)
        tgt = scheme.group_colors.get(tgt_key, scheme.default_color)
    elif isinstance(scheme, CategoricalColorScheme):
        src_key = ribbon.source.label_idx % len(scheme.colors)
        tgt_key = ribbon.target.label_idx % len(scheme.colors)
        src = scheme.colors[src_key]
        tgt = scheme.colors[tgt_key]
    else:
        raise TypeError(f"Unsupported colour scheme: {type(scheme).__name__}")

    if blend and src_key != tgt_key:
        return _blend(src, tgt, 0.5)
    return src


# ── Utilities ─────────────────────────────────────────────────────────────────

def with_alpha(color, alpha: float) -> RGBA:
    return tuple(float(c) for c in mcolors.to_rgba(color, alpha=alpha))


def darken(color, factor: float = 0.2) -> RGB:
    """Scale every channel toward black by factor."""
    return tuple(c * (1.0 - factor) for c in to_rgb(color))


def lighten(color, factor: float = 0.2) -> RGB:
    """Move every channel toward white by factor."""
    return tuple(c + (1.0 - c) * factor for c in to_rgb(color))
