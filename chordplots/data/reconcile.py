"""
chordplots/data/reconcile.py - Put several data models on one label layout.

Comparing two chord diagrams side by side only works when both place the
same label at the same position. That requires both models to share one
label list and one group partition, after which a single visitation order
(see chordplots.layout.order) applies to all of them.

Two reconciliation policies are offered:

    union_models      - every label seen in any input; absent labels are
                        zero-filled (they get a zero-width arc).
    intersect_models  - only labels present in every input.

diff() builds on union_models to produce a signed change matrix.
"""

import logging
from typing import Sequence

import numpy as np

from chordplots.data.cooccurrence import CoOccurrenceMatrix, GroupInfo
from chordplots.errors import ConfigurationError, DimensionError

logger = logging.getLogger(__name__)


def _collect_groups(models: Sequence[CoOccurrenceMatrix]) -> dict[str, list[str]]:
    """
    Merge the group partitions of all models, in first-seen order.

    Raises DimensionError if a label belongs to different groups in
    different models.
    """
    if not models:
        raise ConfigurationError("At least one model is required", field="models", value=[])

    group_labels: dict[str, list[str]] = {}
    label_group: dict[str, str] = {}
    for model in models:
        for g in model.groups:
            bucket = group_labels.setdefault(g.name, [])
            for label in g.labels:
                owner = label_group.get(label)
                if owner is None:
                    label_group[label] = g.name
                    bucket.append(label)
                elif owner != g.name:
                    raise DimensionError(
                        f"Label {label!r} belongs to group {owner!r} in one model "
                        f"and {g.name!r} in another",
                        field="groups",
                        value=label,
                    )
    return group_labels


def _realign(
    model: CoOccurrenceMatrix,
    group_labels: dict[str, list[str]],
) -> CoOccurrenceMatrix:
    """Re-express model on the given group layout, zero-filling absent labels."""
    labels: list[str] = []
    groups: list[GroupInfo] = []
    for name, members in group_labels.items():
        if not members:
            continue
        start = len(labels)
        groups.append(GroupInfo(name, tuple(members), range(start, start + len(members))))
        labels.extend(members)

    matrix = np.zeros((len(labels), len(labels)), dtype=np.float64)
    target = [k for k, label in enumerate(labels) if label in model.label_to_index]
    source = [model.label_to_index[labels[k]] for k in target]
    if target:
        matrix[np.ix_(target, target)] = model.matrix[np.ix_(source, source)]

    return CoOccurrenceMatrix(matrix, tuple(labels), tuple(groups))


def union_models(models: Sequence[CoOccurrenceMatrix]) -> list[CoOccurrenceMatrix]:
    """
    Align models on the union of their labels.

    Group order is first-seen across the inputs; within a group, labels are
    ordered by first appearance (labels of the first model first, then any
    new labels from later models). Labels missing from a model get zero rows
    and columns in that model's aligned copy.

    Returns:
        One aligned model per input, in input order.
    """
    group_labels = _collect_groups(models)
    aligned = [_realign(m, group_labels) for m in models]
    logger.debug(
        "Union-aligned %d models onto %d labels.",
        len(models),
        aligned[0].n_labels,
    )
    return aligned


def intersect_models(models: Sequence[CoOccurrenceMatrix]) -> list[CoOccurrenceMatrix]:
    """
    Align models on the labels they all share.

    Order follows the first model (its group order, then its label order).
    Groups left empty are dropped.

    Returns:
        One aligned model per input, in input order.
    """
    group_labels = _collect_groups(models)
    shared = set(models[0].labels)
    for m in models[1:]:
        shared &= set(m.labels)

    first = models[0]
    layout: dict[str, list[str]] = {}
    for g in first.groups:
        kept = [label for label in g.labels if label in shared]
        if kept:
            layout[g.name] = kept

    dropped = sum(len(v) for v in group_labels.values()) - len(shared)
    logger.debug(
        "Intersection-aligned %d models onto %d labels (%d labels dropped).",
        len(models),
        len(shared),
        dropped,
    )
    return [_realign(m, layout) for m in models]


def diff(
    after: CoOccurrenceMatrix,
    before: CoOccurrenceMatrix,
    absolute: bool = False,
) -> CoOccurrenceMatrix:
    """
    Signed change between two snapshots: after - before.

    Both models are union-aligned first, so a pair present in only one
    snapshot shows up as a pure increase or decrease. Positive cells mean
    the pair grew. Layout sizes ribbons by magnitude and keeps the sign on
    each ribbon for colouring.

    Args:
        after:    Later snapshot.
        before:   Earlier snapshot.
        absolute: Store |after - before| instead of the signed change.
    """
    a, b = union_models([after, before])
    delta = a.matrix - b.matrix
    if absolute:
        delta = np.abs(delta)
    return CoOccurrenceMatrix(delta, a.labels, a.groups)
