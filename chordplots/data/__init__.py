"""
chordplots.data - Data model construction, filtering and reconciliation.

Modules:
    cooccurrence  - CoOccurrenceMatrix / GroupInfo, the validated data model.
    builders      - Build a model from a pandas DataFrame or a networkx graph.
    filters       - Pre-layout entity filters (top-N, minimum flow, threshold)
                    and normalize().
    reconcile     - Align several models on one label layout; signed diff.

Every model is immutable. Filters and reconciliation return new models.
"""
