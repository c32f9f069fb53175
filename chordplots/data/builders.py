"""
chordplots/data/builders.py - Build a CoOccurrenceMatrix from common inputs.

Two sources are supported:

    cooccurrence_matrix(df, columns)
        A pandas DataFrame of observations. Each row is one observation; the
        labels found in different columns of the same row co-occur once.
        Each column becomes a group, in column order.

    from_graph(G, group_attr, weight)
        A weighted networkx graph. Nodes are grouped by a node attribute and
        the matrix is the symmetric weighted adjacency.

Both hand their result to the CoOccurrenceMatrix constructor, which performs
every consistency check.
"""

import logging
from itertools import combinations
from typing import Sequence

import networkx as nx
import numpy as np
import pandas as pd

from chordplots.data.cooccurrence import CoOccurrenceMatrix, GroupInfo
from chordplots.data.filters import normalize as normalize_model
from chordplots.errors import ConfigurationError

logger = logging.getLogger(__name__)

UNGROUPED = "ungrouped"


def cooccurrence_matrix(
    df: pd.DataFrame,
    columns: Sequence[str],
    normalize: bool = False,
) -> CoOccurrenceMatrix:
    """
    Count label co-occurrences across the given DataFrame columns.

    Algorithm:
        1. For each column, collect its unique non-missing values as strings,
           sorted for a stable ordering. The column name becomes the group.
        2. Map every cell to its global label index (missing → NaN).
        3. For every pair of distinct columns, add 1 to both (i, j) and (j, i)
           for each row where both cells are present.

    Labels are never counted against themselves, so the diagonal is zero.
    With normalize=True the counts are divided by their total (see
    filters.normalize), so the cells sum to 1.

    Args:
        df:        Observation table.
        columns:   Columns to analyse. Must exist in df.
        normalize: Return proportions instead of raw counts.

    Returns:
        CoOccurrenceMatrix with integer-valued counts, or proportions when
        normalize=True.

    Raises:
        ConfigurationError: columns is empty or names a missing column.
        DimensionError:     the same label appears in two columns.

    Example:
        df = pd.DataFrame({"V": ["v1", "v1"], "J": ["j1", "j2"]})
        cooc = cooccurrence_matrix(df, ["V", "J"])
    """
    columns = list(columns)
    if not columns:
        raise ConfigurationError("columns must not be empty", field="columns", value=columns)
    missing = [c for c in columns if c not in df.columns]
    if missing:
        raise ConfigurationError(
            f"Columns not found in DataFrame: {missing}",
            field="columns",
            value=missing,
        )

    labels: list[str] = []
    groups: list[GroupInfo] = []
    index_frames: dict[str, pd.Series] = {}

    for col in columns:
        as_str = df[col].dropna().astype(str)
        col_labels = sorted(as_str.unique())
        start = len(labels)
        lookup = {label: start + k for k, label in enumerate(col_labels)}
        groups.append(
            GroupInfo(str(col), tuple(col_labels), range(start, start + len(col_labels)))
        )
        labels.extend(col_labels)
        index_frames[col] = df[col].map(
            lambda v, lookup=lookup: lookup[str(v)] if pd.notna(v) else np.nan
        )

    n = len(labels)
    counts = np.zeros((n, n), dtype=np.float64)
    codes = pd.DataFrame(index_frames)

    for a, b in combinations(columns, 2):
        pair = codes[[a, b]].dropna().astype(int)
        if pair.empty:
            continue
        ia = pair[a].to_numpy()
        ib = pair[b].to_numpy()
        np.add.at(counts, (ia, ib), 1.0)
        np.add.at(counts, (ib, ia), 1.0)

    logger.info(
        "Built co-occurrence matrix: %d observations, %d labels in %d groups.",
        len(df),
        n,
        len(groups),
    )
    model = CoOccurrenceMatrix(counts, tuple(labels), tuple(groups))
    if normalize:
        return normalize_model(model)
    return model


def from_graph(
    G: nx.Graph,
    group_attr: str = "group",
    weight: str = "weight",
) -> CoOccurrenceMatrix:
    """
    Convert a weighted networkx graph into a CoOccurrenceMatrix.

    Node order:
        Groups appear in the order their first member was added to G; within
        a group, nodes keep their insertion order. Nodes lacking group_attr
        are collected into a group named 'ungrouped'.

    Directed graphs are symmetrised as A + Aᵀ (reciprocal edges add up);
    self-loop weights stay on the diagonal unchanged. Edges without the
    weight attribute count as 1.

    Args:
        G:          networkx Graph or DiGraph.
        group_attr: Node attribute holding the group name.
        weight:     Edge attribute holding the strength.

    Returns:
        CoOccurrenceMatrix with labels str(node).
    """
    members: dict[str, list] = {}
    for node, data in G.nodes(data=True):
        members.setdefault(str(data.get(group_attr, UNGROUPED)), []).append(node)

    nodelist = [node for group_nodes in members.values() for node in group_nodes]
    adjacency = nx.to_numpy_array(G, nodelist=nodelist, weight=weight, dtype=float)

    if G.is_directed():
        diagonal = np.diag(adjacency).copy()
        adjacency = adjacency + adjacency.T
        np.fill_diagonal(adjacency, diagonal)

    labels = [str(node) for node in nodelist]
    groups: list[GroupInfo] = []
    start = 0
    for name, group_nodes in members.items():
        size = len(group_nodes)
        groups.append(GroupInfo(name, tuple(labels[start:start + size]), range(start, start + size)))
        start += size

    logger.debug(
        "Converted graph with %d nodes and %d edges into %d groups.",
        G.number_of_nodes(),
        G.number_of_edges(),
        len(groups),
    )
    return CoOccurrenceMatrix(adjacency, tuple(labels), tuple(groups))
