"""
chordplots.layout - Chord layout computation.

Modules:
    types    - ArcSegment, RibbonEndpoint, Ribbon, ChordLayout.
    order    - Visitation order policy (none / value / group / fixed).
    arcs     - Arc Allocator: flows → angular arcs + gap size.
    ribbons  - Ribbon Endpoint Packer: matrix cells → endpoint sub-intervals.
    engine   - compute_layout() and layout_with_order(), the pure entry points
               tying the above together.
    filters  - Post-layout ribbon filters (threshold, top-N).

All layout objects are immutable; filters return new layouts that share the
arc tuple of their input.
"""
