"""
chordplots/layout/order.py - Visitation order of arcs around the circle.

The visitation order is the permutation in which arcs are placed, distinct
from label index order. It is exposed separately from compute_layout() so a
caller can ask "in which order would these labels appear?" and reuse the
answer as fixed_order for a second, related diagram.

Policies (SortBy):
    none   - identity order.
    value  - descending flow, stable on ties.
    group  - groups in original order; descending flow (stable) inside each.
    fixed  - an explicit permutation; always wins over sort_by.
"""

import logging
from collections import Counter
from typing import Optional, Sequence, Union

import numpy as np

from chordplots.config import SortBy
from chordplots.data.cooccurrence import CoOccurrenceMatrix
from chordplots.errors import ConfigurationError

logger = logging.getLogger(__name__)


def _descending(indices: Sequence[int], flows: Sequence[float]) -> list[int]:
    # sorted() is stable, so equal flows keep their relative index order.
    return sorted(indices, key=lambda i: -flows[i])


def validate_fixed_order(
    model: CoOccurrenceMatrix,
    fixed_order: Sequence[Union[int, str]],
) -> list[int]:
    """
    Resolve fixed_order to indices and check it is a permutation of 0..N-1.

    Entries may be integer indices or label names (mixing is allowed).

    Raises:
        ConfigurationError: wrong length, unknown label, index out of range,
                            or a repeated entry.
    """
    n = model.n_labels
    entries = list(fixed_order)
    if len(entries) != n:
        raise ConfigurationError(
            f"fixed_order length ({len(entries)}) must equal the number of "
            f"labels ({n})",
            field="fixed_order",
            value=entries,
        )

    resolved: list[int] = []
    for entry in entries:
        if isinstance(entry, str):
            if entry not in model.label_to_index:
                raise ConfigurationError(
                    f"fixed_order contains unknown label {entry!r}",
                    field="fixed_order",
                    value=entry,
                )
            resolved.append(model.label_to_index[entry])
        elif isinstance(entry, (int, np.integer)) and not isinstance(entry, bool):
            if not 0 <= entry < n:
                raise ConfigurationError(
                    f"fixed_order index {entry} out of range 0..{n - 1}",
                    field="fixed_order",
                    value=entry,
                )
            resolved.append(int(entry))
        else:
            raise ConfigurationError(
                f"fixed_order entries must be int indices or label names; "
                f"got {entry!r}",
                field="fixed_order",
                value=entry,
            )

    if sorted(resolved) != list(range(n)):
        repeated = [i for i, c in Counter(resolved).items() if c > 1]
        raise ConfigurationError(
            f"fixed_order must be a permutation of 0..{n - 1}; "
            f"repeated entries: {sorted(repeated)}",
            field="fixed_order",
            value=entries,
        )
    return resolved


def resolve_visitation_order(
    model: CoOccurrenceMatrix,
    sort_by: Union[SortBy, str] = SortBy.GROUP,
    fixed_order: Optional[Sequence[Union[int, str]]] = None,
    flows: Optional[np.ndarray] = None,
) -> list[int]:
    """
    Return the order in which label indices are visited around the circle.

    Args:
        model:       Data model.
        sort_by:     'none', 'value' or 'group' (or a SortBy member).
        fixed_order: Explicit permutation of indices or labels. Overrides
                     sort_by entirely when given.
        flows:       Precomputed model.flows(), to avoid recomputation.

    Returns:
        A permutation of range(model.n_labels).

    Raises:
        ConfigurationError: unknown sort_by, or invalid fixed_order.
    """
    if fixed_order is not None:
        return validate_fixed_order(model, fixed_order)

    policy = SortBy.coerce(sort_by)
    n = model.n_labels
    if flows is None:
        flows = model.flows()

    if policy is SortBy.NONE:
        order = list(range(n))
    elif policy is SortBy.VALUE:
        order = _descending(range(n), flows)
    else:
        order = []
        for g in model.groups:
            order.extend(_descending(g.indices, flows))

    logger.debug("Resolved %s visitation order over %d labels.", policy.value, n)
    return order


def label_order(
    model: CoOccurrenceMatrix,
    sort_by: Union[SortBy, str] = SortBy.GROUP,
    fixed_order: Optional[Sequence[Union[int, str]]] = None,
) -> list[str]:
    """
    Label names in the order they appear around the circle.

    Pass the result as fixed_order when laying out a second model that
    shares these labels (see chordplots.data.reconcile) to get a directly
    comparable diagram.
    """
    return [model.labels[i] for i in resolve_visitation_order(model, sort_by, fixed_order)]
