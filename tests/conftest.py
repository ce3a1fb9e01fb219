"""
Pytest configuration and shared fixtures.

This file is automatically discovered by pytest and provides fixtures
available to all test modules.
"""

import numpy as np
import pytest


def _make_items(vectors, prefix="s"):
    return [{"key": f"{prefix}{i}", "vec": list(map(float, v))} for i, v in enumerate(vectors)]


@pytest.fixture
def blob_vectors():
    """
    Three tight, well-separated blobs of 10 points each in 8 dimensions.

    Returns a tuple of (vectors, true_labels).
    """
    rng = np.random.default_rng(42)
    K, per, d = 3, 10, 8
    centers = np.eye(d)[:K] * 10.0
    X = np.vstack([centers[k] + rng.standard_normal((per, d)) * 0.05 for k in range(K)])
    labels = np.repeat(np.arange(K), per)
    return X, labels


@pytest.fixture
def blob_items(blob_vectors):
    """The blob vectors as clustering items."""
    X, _ = blob_vectors
    return _make_items(X, prefix="item_")


@pytest.fixture
def make_items():
    """Factory wrapping vectors as ``{key, vec}`` items keyed ``<prefix><i>``."""
    return _make_items
