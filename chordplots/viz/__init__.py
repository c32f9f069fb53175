"""
chordplots.viz - Read-only helpers for renderers.

Modules:
    geometry  - Arc polygons, Bezier ribbon outlines, label anchors (numpy).
    colors    - Group / categorical / gradient / diverging colour schemes
                (matplotlib colours and colormaps).

Nothing in this package draws or writes files; it converts a ChordLayout
into arrays and colours that any plotting backend can consume.
"""
