"""
chordplots - Chord diagram layout engine.

Turns a symmetric co-occurrence matrix of grouped, labelled entities into the
geometry of a chord diagram: one angular arc per entity, sized by its total
flow, and one pair of ribbon endpoints per non-zero pair, packed inside the
two arcs it connects.

Subpackages:
    chordplots.data    - Data model, builders, entity filters, reconciliation.
    chordplots.layout  - Arc allocation, ribbon packing, ribbon filters.
    chordplots.viz     - Read-only geometry and colour helpers for renderers.

Typical use:
    from chordplots import LayoutConfig, compute_layout
    layout = compute_layout(model, LayoutConfig(sort_by="value"))
"""

from chordplots.config import DEFAULT_CONFIG, LayoutConfig, SortBy
from chordplots.data.cooccurrence import CoOccurrenceMatrix, GroupInfo
from chordplots.errors import (
    ChordPlotsError,
    ConfigurationError,
    DimensionError,
    DomainError,
)
from chordplots.layout.engine import compute_layout
from chordplots.layout.filters import filter_ribbons_by_value, filter_ribbons_top_n
from chordplots.layout.order import label_order, resolve_visitation_order

__version__ = "0.1.0"
