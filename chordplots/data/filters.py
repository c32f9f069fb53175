"""
chordplots/data/filters.py - Pre-layout entity filters.

These operate on the data model, not on a layout: they decide which entities
get an arc at all. Each returns a brand-new CoOccurrenceMatrix whose matrix
is sliced to the surviving entities (rows and columns) and whose groups are
rebuilt:

    - surviving entities keep their original relative order,
    - groups keep their original order,
    - indices are renumbered to a contiguous 0..K-1 range,
    - groups left without members are dropped.

The input model is never mutated.
"""

import logging
from typing import Iterable

import numpy as np

from chordplots.data.cooccurrence import CoOccurrenceMatrix, GroupInfo
from chordplots.errors import ConfigurationError

logger = logging.getLogger(__name__)


def subset_model(
    model: CoOccurrenceMatrix,
    keep: Iterable[int],
) -> CoOccurrenceMatrix:
    """
    Restrict a model to a set of entity indices.

    Args:
        model: Source data model.
        keep:  Indices to retain. Order and duplicates are irrelevant; the
               survivors are always emitted in original index order.

    Returns:
        New CoOccurrenceMatrix over the surviving entities.
    """
    surviving = sorted(set(int(i) for i in keep))
    for i in surviving:
        if not 0 <= i < model.n_labels:
            raise ConfigurationError(
                f"Entity index {i} out of range 0..{model.n_labels - 1}",
                field="keep",
                value=i,
            )

    idx = np.asarray(surviving, dtype=int)
    matrix = model.matrix[np.ix_(idx, idx)]
    labels = tuple(model.labels[i] for i in surviving)

    survivor_set = set(surviving)
    groups: list[GroupInfo] = []
    start = 0
    for g in model.groups:
        remaining = [model.labels[i] for i in g.indices if i in survivor_set]
        if not remaining:
            continue
        groups.append(
            GroupInfo(g.name, tuple(remaining), range(start, start + len(remaining)))
        )
        start += len(remaining)

    return CoOccurrenceMatrix(matrix, labels, tuple(groups))


def filter_entities_top_n(model: CoOccurrenceMatrix, n: int) -> CoOccurrenceMatrix:
    """
    Keep only the n entities with the highest total flow.

    Ties are broken by original index (the lower index survives). n at or
    above the entity count keeps everything.

    Raises:
        ConfigurationError: n is negative.
    """
    if n < 0:
        raise ConfigurationError(f"n must be >= 0; got {n}", field="n", value=n)

    flows = model.flows()
    ranked = sorted(range(model.n_labels), key=lambda i: -flows[i])
    kept = ranked[:n]

    logger.debug(
        "Top-%d entity filter: keeping %d of %d entities.",
        n,
        len(kept),
        model.n_labels,
    )
    return subset_model(model, kept)


def filter_entities_by_min_aggregate_flow(
    model: CoOccurrenceMatrix,
    min_flow: float,
) -> CoOccurrenceMatrix:
    """
    Keep only entities whose total flow is at least min_flow.

    Flow is the sum of absolute row values, so signed (difference) matrices
    are filtered by magnitude of change.
    """
    flows = model.flows()
    kept = [i for i in range(model.n_labels) if flows[i] >= min_flow]

    if not kept and model.n_labels:
        logger.warning(
            "min_flow=%s removed all %d entities; the resulting model is empty.",
            min_flow,
            model.n_labels,
        )
    else:
        logger.debug(
            "Min-flow filter (>= %s): keeping %d of %d entities.",
            min_flow,
            len(kept),
            model.n_labels,
        )
    return subset_model(model, kept)


def filter_by_threshold(model: CoOccurrenceMatrix, min_value: float) -> CoOccurrenceMatrix:
    """
    Zero every cell whose magnitude is below min_value.

    Unlike the entity filters, the label set and groups are unchanged; weak
    pairs simply stop producing ribbons and stop contributing to flow.
    """
    matrix = np.array(model.matrix)
    matrix[np.abs(matrix) < min_value] = 0.0
    return CoOccurrenceMatrix(matrix, model.labels, model.groups)


def normalize(model: CoOccurrenceMatrix) -> CoOccurrenceMatrix:
    """
    Divide every cell by the matrix total so the cells sum to 1.

    A model whose total is zero or negative has no meaningful proportions
    and is returned unchanged.
    """
    total = float(model.matrix.sum())
    if total <= 0:
        logger.debug("normalize: total is %g, returning model unchanged.", total)
        return model
    return CoOccurrenceMatrix(model.matrix / total, model.labels, model.groups)
