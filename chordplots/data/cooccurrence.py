"""
chordplots/data/cooccurrence.py - The validated co-occurrence data model.

A CoOccurrenceMatrix bundles three things that must agree with each other:

    matrix  - N×N float64 strengths, conceptually symmetric. Cells may be
              signed (e.g. a snapshot difference); layout sizes geometry by
              magnitude and keeps the sign for colouring.
    labels  - N unique entity labels, in index order.
    groups  - a partition of 0..N-1 into contiguous, ordered blocks.

Every consistency check happens here, at construction. Layout code assumes a
CoOccurrenceMatrix is valid and never re-checks dimensions.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Sequence, Union

import numpy as np

from chordplots.errors import ConfigurationError, DimensionError, DomainError

logger = logging.getLogger(__name__)

LabelOrIndex = Union[int, str]


@dataclass(frozen=True)
class GroupInfo:
    """
    A named, contiguous block of labels (e.g. the V, D and J gene calls).

    Fields:
        name:    Group identifier.
        labels:  Labels in this group, in index order.
        indices: Index range of the group inside the full label list.
    """

    name: str
    labels: tuple[str, ...]
    indices: range

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", tuple(str(label) for label in self.labels))
        if not isinstance(self.indices, range) or self.indices.step != 1:
            raise DimensionError(
                f"Group '{self.name}' indices must be a contiguous range; "
                f"got {self.indices!r}",
                field="indices",
                value=self.indices,
            )
        if len(self.labels) != len(self.indices):
            raise DimensionError(
                f"Group '{self.name}' has {len(self.labels)} labels but spans "
                f"{len(self.indices)} indices",
                field="indices",
                value=self.indices,
            )

    def __len__(self) -> int:
        return len(self.labels)

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)


@dataclass(frozen=True, eq=False)
class CoOccurrenceMatrix:
    """
    Co-occurrence strengths between grouped labels.

    Construct with a square matrix, its labels and the group partition.
    The matrix is copied to a read-only float64 array, so the model can be
    shared freely between layouts without defensive copies.

    Raises:
        DimensionError: non-square matrix, size/label mismatch, duplicate
                        labels, or groups that do not tile 0..N-1 in order.
        DomainError:    NaN or infinite cells.
    """

    matrix: np.ndarray
    labels: tuple[str, ...]
    groups: tuple[GroupInfo, ...]
    label_to_index: dict[str, int] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        arr = np.array(self.matrix, dtype=np.float64)
        if arr.ndim != 2 or arr.shape[0] != arr.shape[1]:
            raise DimensionError(
                f"Matrix must be square; got shape {arr.shape}",
                field="matrix",
                value=arr.shape,
            )

        labels = tuple(str(label) for label in self.labels)
        n = len(labels)
        if arr.shape[0] != n:
            raise DimensionError(
                f"Matrix size {arr.shape} doesn't match label count {n}",
                field="labels",
                value=n,
            )

        label_to_index = {label: i for i, label in enumerate(labels)}
        if len(label_to_index) != n:
            dupes = sorted(l for l, c in Counter(labels).items() if c > 1)
            raise DimensionError(
                f"Labels must be unique; duplicated: {dupes}",
                field="labels",
                value=dupes,
            )

        groups = tuple(self.groups)
        expected_start = 0
        for g in groups:
            if g.indices.start != expected_start:
                raise DimensionError(
                    f"Group '{g.name}' starts at index {g.indices.start}; "
                    f"expected {expected_start} (groups must be contiguous "
                    f"and in order)",
                    field="groups",
                    value=g.name,
                )
            if g.labels != labels[g.indices.start:g.indices.stop]:
                raise DimensionError(
                    f"Group '{g.name}' labels do not match labels "
                    f"{g.indices.start}..{g.indices.stop - 1}",
                    field="groups",
                    value=g.name,
                )
            expected_start = g.indices.stop
        if expected_start != n:
            raise DimensionError(
                f"Groups cover {expected_start} labels; expected {n}",
                field="groups",
                value=expected_start,
            )

        if not np.all(np.isfinite(arr)):
            raise DomainError(
                "Matrix contains NaN or infinite values",
                field="matrix",
            )

        if n and not np.allclose(arr, arr.T):
            logger.debug(
                "Co-occurrence matrix is asymmetric; ribbons use the upper triangle."
            )

        arr.setflags(write=False)
        object.__setattr__(self, "matrix", arr)
        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "groups", groups)
        object.__setattr__(self, "label_to_index", label_to_index)

    # ── Construction helpers ─────────────────────────────────────────────────

    @classmethod
    def from_group_sizes(
        cls,
        matrix,
        labels: Sequence[str],
        group_names: Sequence[str],
        group_sizes: Sequence[int],
    ) -> "CoOccurrenceMatrix":
        """
        Build the model from consecutive group block sizes.

        Example:
            from_group_sizes(m, ["v1", "v2", "j1"], ["V", "J"], [2, 1])
        """
        if len(group_names) != len(group_sizes):
            raise ConfigurationError(
                f"group_names ({len(group_names)}) and group_sizes "
                f"({len(group_sizes)}) must have the same length",
                field="group_sizes",
                value=list(group_sizes),
            )
        if any(s < 0 for s in group_sizes) or sum(group_sizes) != len(labels):
            raise ConfigurationError(
                f"group_sizes must be non-negative and sum to the number of "
                f"labels ({len(labels)}); got {list(group_sizes)}",
                field="group_sizes",
                value=list(group_sizes),
            )

        labels = [str(label) for label in labels]
        groups = []
        start = 0
        for name, size in zip(group_names, group_sizes):
            groups.append(
                GroupInfo(str(name), tuple(labels[start:start + size]),
                          range(start, start + size))
            )
            start += size
        return cls(matrix, tuple(labels), tuple(groups))

    # ── Accessors ─────────────────────────────────────────────────────────────

    @property
    def n_labels(self) -> int:
        return len(self.labels)

    @property
    def n_groups(self) -> int:
        return len(self.groups)

    @property
    def shape(self) -> tuple[int, int]:
        return self.matrix.shape

    def __len__(self) -> int:
        return len(self.labels)

    def index_of(self, label: LabelOrIndex) -> int:
        """Resolve a label name (or pass through an index) to an index."""
        if isinstance(label, str):
            if label not in self.label_to_index:
                raise KeyError(f"Unknown label: {label!r}")
            return self.label_to_index[label]
        idx = int(label)
        if not 0 <= idx < self.n_labels:
            raise IndexError(f"Label index {idx} out of range 0..{self.n_labels - 1}")
        return idx

    def value(self, a: LabelOrIndex, b: LabelOrIndex) -> float:
        """Matrix cell for a pair given as indices or label names."""
        return float(self.matrix[self.index_of(a), self.index_of(b)])

    def __getitem__(self, key: tuple[LabelOrIndex, LabelOrIndex]) -> float:
        a, b = key
        return self.value(a, b)

    def total_flow(self, label: LabelOrIndex) -> float:
        """Sum of absolute values in the label's row (diagonal included)."""
        return float(np.abs(self.matrix[self.index_of(label)]).sum())

    def flows(self) -> np.ndarray:
        """Total flow of every label, in index order."""
        return np.abs(self.matrix).sum(axis=1)

    def group_of(self, label: LabelOrIndex) -> str:
        """Name of the group a label belongs to."""
        idx = self.index_of(label)
        for g in self.groups:
            if idx in g.indices:
                return g.name
        raise DimensionError(f"Label index {idx} not found in any group", value=idx)

    def group_position(self, label: LabelOrIndex) -> int:
        """Position of the label's group within self.groups."""
        idx = self.index_of(label)
        for pos, g in enumerate(self.groups):
            if idx in g.indices:
                return pos
        raise DimensionError(f"Label index {idx} not found in any group", value=idx)
