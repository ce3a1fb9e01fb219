"""
K-medoids (PAM-like) clustering over a precomputed distance matrix.

Provides the distance matrix builder, random medoid initialisation and the
assign/update refinement loop shared by full and abbreviated runs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence
import numpy as np

from .geometry import Vector, pairwise_cosine_distances, shuffle_array
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

DistanceFn = Callable[[Vector, Vector], float]

DEFAULT_MAX_ITERATIONS = 100
ABBREVIATED_MAX_ITERATIONS = 10


@dataclass
class PamResult:
    """Result of a single PAM run."""

    assignments: np.ndarray
    medoids: List[int]
    n_iter: int = 0
    converged: bool = False


def build_distance_matrix(
    vectors: Sequence[Vector], distance_fn: Optional[DistanceFn] = None
) -> np.ndarray:
    """
    Build the full symmetric pairwise distance matrix.

    With a caller-supplied *distance_fn* only the upper triangle (i < j) is
    evaluated, n(n-1)/2 calls in total, and mirrored into the lower triangle.
    Without one, cosine distance is computed for all pairs in one pass.

    Args:
        vectors: n vectors of equal length
        distance_fn: ``(vec_a, vec_b) -> float``; smaller means more similar

    Returns:
        Array of shape (n, n) with a zero diagonal
    """
    n = len(vectors)
    if n == 0:
        return np.zeros((0, 0), dtype=np.float64)

    if distance_fn is None:
        X = np.vstack([np.asarray(v, dtype=np.float64) for v in vectors])
        return pairwise_cosine_distances(X)

    dist = np.zeros((n, n), dtype=np.float64)
    for i in range(n):
        for j in range(i + 1, n):
            d = distance_fn(vectors[i], vectors[j])
            dist[i, j] = d
            dist[j, i] = d
    return dist


def init_medoids(n: int, K: int, rng: np.random.Generator) -> List[int]:
    """
    Draw up to *K* distinct random medoid indices out of ``range(n)``.

    Shuffles the full index list and keeps the first K, so fewer than K
    indices come back when K > n.
    """
    indices = list(range(n))
    shuffle_array(indices, rng)
    return indices[:K]


def assign_to_medoids(dist: np.ndarray, medoids: Sequence[int]) -> np.ndarray:
    """
    Assign every point to its nearest medoid.

    The earlier medoid wins ties. NaN distances never count as nearest; a
    point whose distances are all NaN joins cluster 0.

    Returns:
        (n,) array of cluster ids, each an index into *medoids*
    """
    sub = dist[:, list(medoids)]  # (n, m)
    sub = np.where(np.isnan(sub), np.inf, sub)
    return np.argmin(sub, axis=1)


def update_medoids(
    dist: np.ndarray, assignments: np.ndarray, medoids: List[int]
) -> bool:
    """
    Move each cluster's medoid to the member minimising total in-cluster distance.

    The current medoid is kept unless a member is strictly better; among
    equally good members the earliest wins. Clusters without members are
    skipped. *medoids* is updated in place.

    Returns:
        True if any medoid changed
    """
    changed = False
    for cluster_id in range(len(medoids)):
        members = np.where(assignments == cluster_id)[0]
        if len(members) == 0:
            continue

        current = medoids[cluster_id]
        # Column j holds the total distance from members[j] to all members
        candidate_sums = dist[np.ix_(members, members)].sum(axis=0)
        # Sum the current medoid's column the same way so equal totals compare equal
        at_current = np.flatnonzero(members == current)
        if len(at_current):
            best_sum = candidate_sums[at_current[0]]
        else:
            best_sum = dist[np.ix_(members, [current])].sum(axis=0)[0]
        j = int(np.argmin(candidate_sums))
        if candidate_sums[j] < best_sum and members[j] != current:
            medoids[cluster_id] = int(members[j])
            changed = True
    return changed


def pam(
    dist: np.ndarray,
    K: int,
    *,
    rng: np.random.Generator,
    max_iter: int = DEFAULT_MAX_ITERATIONS,
) -> PamResult:
    """
    Partitioning Around Medoids on a precomputed distance matrix.

    Starts from K random medoids and alternates an assignment pass and a
    medoid update pass until an update changes nothing or *max_iter* passes
    have run. When K exceeds the number of points only n medoids exist and
    the remaining cluster ids never receive members.

    Args:
        dist: Symmetric (n, n) distance matrix
        K: Requested number of clusters
        rng: NumPy random generator used for the initial medoids
        max_iter: Maximum number of assign/update passes

    Returns:
        PamResult with the assignments from the last assignment pass and the
        medoids after the last update pass
    """
    n = dist.shape[0]
    medoids = init_medoids(n, K, rng)
    assignments = np.full(n, -1, dtype=int)

    n_iter = 0
    changed = True
    while n_iter < max_iter and changed:
        n_iter += 1
        assignments = assign_to_medoids(dist, medoids)
        changed = update_medoids(dist, assignments, medoids)
        logger.debug("PAM iteration %d (K=%d): medoids changed=%s", n_iter, K, changed)

    converged = not changed
    if not converged:
        logger.debug("PAM stopped at max_iter=%d without converging (K=%d)", max_iter, K)
    return PamResult(
        assignments=assignments.astype(int),
        medoids=medoids,
        n_iter=n_iter,
        converged=converged,
    )


def pam_abbreviated(
    dist: np.ndarray, K: int, *, rng: np.random.Generator
) -> tuple[np.ndarray, List[int]]:
    """
    Short PAM run used when scoring candidate K values.

    Same mechanics as :func:`pam`, capped at 10 passes.

    Returns:
        Tuple of (assignments, medoids)
    """
    result = pam(dist, K, rng=rng, max_iter=ABBREVIATED_MAX_ITERATIONS)
    return result.assignments, result.medoids
