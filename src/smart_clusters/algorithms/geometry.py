"""
Vector geometry primitives.

Provides cosine similarity, the distance functions used by the clustering
engine, index shuffling for medoid initialisation, and centroid/medoid helpers.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Union
import numpy as np

Vector = Union[Sequence[float], np.ndarray]


def cos_sim(vec_a: Vector, vec_b: Vector) -> float:
    """
    Cosine similarity between two vectors.

    Args:
        vec_a: First vector
        vec_b: Second vector

    Returns:
        Similarity in [-1, 1]; 0.0 when either vector has zero magnitude

    Raises:
        ValueError: If the vectors have different lengths
    """
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError("Vectors must have the same length")
    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a < 1e-12 or norm_b < 1e-12:
        return 0.0
    return float(np.dot(a, b) / (norm_a * norm_b))


def cosine_distance(vec_a: Vector, vec_b: Vector) -> float:
    """Default clustering distance: ``1 - cos_sim(a, b)``."""
    return 1.0 - cos_sim(vec_a, vec_b)


def euclidean_distance(vec_a: Vector, vec_b: Vector) -> float:
    """Euclidean (L2) distance between two vectors."""
    a = np.asarray(vec_a, dtype=np.float64)
    b = np.asarray(vec_b, dtype=np.float64)
    if a.shape != b.shape:
        raise ValueError("Vectors must have the same length")
    return float(np.linalg.norm(a - b))


def pairwise_cosine_distances(X: np.ndarray) -> np.ndarray:
    """
    Cosine distance between every pair of rows of *X*.

    Rows with zero magnitude have similarity 0 (distance 1) to every other
    row. Only the upper triangle is taken from the product; it is mirrored
    into the lower triangle and the diagonal is set to exactly 0.

    Args:
        X: Array of shape (n_samples, n_features)

    Returns:
        Symmetric (n_samples, n_samples) distance matrix
    """
    norms = np.linalg.norm(X, axis=1, keepdims=True)
    safe = np.where(norms < 1e-12, 1.0, norms)
    X_norm = np.where(norms < 1e-12, 0.0, X / safe)
    upper = np.triu(1.0 - (X_norm @ X_norm.T), k=1)
    dist = upper + upper.T
    np.fill_diagonal(dist, 0.0)
    return dist


def shuffle_array(
    indices: Union[List[int], np.ndarray], rng: Optional[np.random.Generator] = None
) -> Union[List[int], np.ndarray]:
    """
    Shuffle *indices* in place with a Fisher-Yates pass.

    Args:
        indices: Mutable sequence to permute
        rng: NumPy random generator (a fresh unseeded one when omitted)

    Returns:
        The same *indices* object, permuted
    """
    if rng is None:
        rng = np.random.default_rng()
    for i in range(len(indices) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        indices[i], indices[j] = indices[j], indices[i]
    return indices


def compute_centroid(points: Sequence[Vector]) -> Optional[List[float]]:
    """
    Arithmetic mean of *points*.

    Returns:
        The centroid as a list, or None if there are no points
    """
    if points is None or len(points) == 0:
        return None
    X = np.asarray(points, dtype=np.float64)
    return X.mean(axis=0).tolist()


def compute_medoid(points: Sequence[Vector]) -> Optional[Vector]:
    """
    The input point with the minimum sum of Euclidean distances to all others.

    The first such point wins ties.

    Returns:
        The medoid point (one of *points*), or None if there are no points
    """
    if points is None or len(points) == 0:
        return None
    if len(points) == 1:
        return points[0]
    X = np.asarray(points, dtype=np.float64)
    diffs = X[:, None, :] - X[None, :, :]
    dist = np.sqrt(np.sum(diffs ** 2, axis=2))
    return points[int(np.argmin(dist.sum(axis=1)))]
