"""
chordplots/tests/conftest.py - Shared pytest fixtures for the chordplots test suite.

Fixtures:
    vdj_model        - 9 gene labels in three groups (V, D, J), zero diagonal.
    star_model       - Three labels; label 2 connects to both others (10, 20).
    pair_model       - Two labels joined by a single pair of value 5.
    signed_model     - Zero-diagonal model with positive and negative cells.
    vdj_calls        - Observation DataFrame of V/D/J gene calls.
    build_model      - Factory for ad-hoc models (single group by default).
"""

import numpy as np
import pandas as pd
import pytest

from chordplots.data.cooccurrence import CoOccurrenceMatrix


def make_model(matrix, labels=None, group_names=None, group_sizes=None) -> CoOccurrenceMatrix:
    """Build a CoOccurrenceMatrix with sensible defaults for tests."""
    matrix = np.asarray(matrix, dtype=float)
    n = matrix.shape[0]
    if labels is None:
        labels = [f"e{i}" for i in range(n)]
    if group_names is None:
        group_names, group_sizes = ["all"], [n]
    return CoOccurrenceMatrix.from_group_sizes(matrix, labels, group_names, group_sizes)


def random_symmetric(n: int, seed: int = 41, density: float = 0.6) -> np.ndarray:
    """Zero-diagonal symmetric non-negative matrix with some empty cells."""
    rng = np.random.default_rng(seed)
    upper = np.triu(rng.uniform(1.0, 50.0, size=(n, n)), k=1)
    upper[rng.random((n, n)) > density] = 0.0
    upper = np.triu(upper, k=1)
    return upper + upper.T


@pytest.fixture
def vdj_model() -> CoOccurrenceMatrix:
    labels = ["v1", "v2", "v3", "v4", "d1", "d2", "d3", "j1", "j2"]
    return make_model(random_symmetric(9), labels, ["V", "D", "J"], [4, 3, 2])


@pytest.fixture
def star_model() -> CoOccurrenceMatrix:
    matrix = [[0, 0, 10], [0, 0, 20], [10, 20, 0]]
    return make_model(matrix, ["a", "b", "c"])


@pytest.fixture
def pair_model() -> CoOccurrenceMatrix:
    return make_model([[0, 5], [5, 0]], ["a", "b"])


@pytest.fixture
def signed_model() -> CoOccurrenceMatrix:
    matrix = [
        [0.0, -8.0, 3.0],
        [-8.0, 0.0, 5.0],
        [3.0, 5.0, 0.0],
    ]
    return make_model(matrix, ["x", "y", "z"])


@pytest.fixture
def vdj_calls() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "V_call": ["IGHV1-2", "IGHV1-2", "IGHV3-23", "IGHV3-23", "IGHV1-2"],
            "D_call": ["IGHD3-10", "IGHD2-2", "IGHD3-10", "IGHD3-10", None],
            "J_call": ["IGHJ4", "IGHJ4", "IGHJ6", "IGHJ4", "IGHJ6"],
        }
    )


@pytest.fixture
def build_model():
    """Factory fixture: build_model(matrix, labels=None, group_names=None, group_sizes=None)."""
    return make_model
