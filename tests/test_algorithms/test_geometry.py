"""
Tests for vector geometry primitives.
"""

import numpy as np
import pytest

from smart_clusters.algorithms.geometry import (
    cos_sim,
    cosine_distance,
    euclidean_distance,
    pairwise_cosine_distances,
    shuffle_array,
    compute_centroid,
    compute_medoid,
)


# ------------------------------------------------------------------
# cos_sim / distances
# ------------------------------------------------------------------


def test_cos_sim_identical_vectors():
    """Identical vectors have similarity 1."""
    assert cos_sim([1, 2, 3], [1, 2, 3]) == pytest.approx(1.0)


def test_cos_sim_mixed_sign():
    """Mixed-sign vectors: [1,-1,2]·[2,-1,1] / 6 = 5/6."""
    assert cos_sim([1, -1, 2], [2, -1, 1]) == pytest.approx(5 / 6, abs=1e-12)


def test_cos_sim_zero_vector_returns_zero():
    """A zero-magnitude vector gives 0 instead of dividing by zero."""
    assert cos_sim([0, 0, 0], [1, 2, 3]) == 0.0
    assert cos_sim([0, 0], [0, 0]) == 0.0


def test_cos_sim_length_mismatch():
    """Vectors of different lengths are rejected."""
    with pytest.raises(ValueError, match="Vectors must have the same length"):
        cos_sim([1, 2], [1, 2, 3])


def test_cosine_distance_range():
    """Opposite vectors are at distance 2, orthogonal at 1."""
    assert cosine_distance([1, 0], [-1, 0]) == pytest.approx(2.0)
    assert cosine_distance([1, 0], [0, 1]) == pytest.approx(1.0)
    assert cosine_distance([1, 1], [2, 2]) == pytest.approx(0.0, abs=1e-12)


def test_euclidean_distance():
    """3-4-5 triangle."""
    assert euclidean_distance([0, 0], [3, 4]) == pytest.approx(5.0)
    with pytest.raises(ValueError):
        euclidean_distance([0, 0], [1, 2, 3])


def test_pairwise_cosine_distances_matches_scalar():
    """Vectorised matrix agrees with the scalar cosine distance."""
    rng = np.random.default_rng(42)
    X = rng.standard_normal((12, 5))
    X[3] = 0.0  # zero row
    dist = pairwise_cosine_distances(X)

    assert dist.shape == (12, 12)
    np.testing.assert_array_equal(dist, dist.T)
    np.testing.assert_array_equal(np.diag(dist), np.zeros(12))
    for i in range(12):
        for j in range(i + 1, 12):
            assert dist[i, j] == pytest.approx(cosine_distance(X[i], X[j]), abs=1e-9)
    # Zero row is at distance 1 from everything else
    np.testing.assert_allclose(np.delete(dist[3], 3), 1.0)


# ------------------------------------------------------------------
# shuffle_array
# ------------------------------------------------------------------


def test_shuffle_array_is_permutation_in_place():
    """Shuffling permutes the same list object."""
    indices = list(range(20))
    out = shuffle_array(indices, np.random.default_rng(0))
    assert out is indices
    assert sorted(indices) == list(range(20))


def test_shuffle_array_seeded_is_deterministic():
    """Same seed, same permutation."""
    a = shuffle_array(list(range(50)), np.random.default_rng(7))
    b = shuffle_array(list(range(50)), np.random.default_rng(7))
    assert a == b


def test_shuffle_array_trivial_inputs():
    """Empty and single-element inputs are left alone."""
    assert shuffle_array([], np.random.default_rng(0)) == []
    assert shuffle_array([5], np.random.default_rng(0)) == [5]


def test_shuffle_array_reaches_every_position():
    """Each element lands in every position over enough draws."""
    rng = np.random.default_rng(123)
    seen = {i: set() for i in range(4)}
    for _ in range(400):
        perm = shuffle_array(list(range(4)), rng)
        for pos, value in enumerate(perm):
            seen[value].add(pos)
    assert all(positions == {0, 1, 2, 3} for positions in seen.values())


# ------------------------------------------------------------------
# centroid / medoid
# ------------------------------------------------------------------


def test_compute_centroid():
    """Centroid is the coordinate-wise mean."""
    assert compute_centroid([[0, 0], [2, 4], [4, 2]]) == pytest.approx([2.0, 2.0])
    assert compute_centroid([]) is None


def test_compute_medoid():
    """Medoid is the input point with the smallest total distance."""
    points = [[0, 0], [1, 0], [2, 0], [10, 0]]
    assert compute_medoid(points) == [1, 0]
    assert compute_medoid([[3, 3]]) == [3, 3]
    assert compute_medoid([]) is None


def test_compute_medoid_first_wins_ties():
    """With two points both sums are equal, so the first is returned."""
    assert compute_medoid([[0, 0], [1, 1]]) == [0, 0]
