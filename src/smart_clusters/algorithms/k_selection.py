"""
Cluster-count selection.

Provides the silhouette evaluator and the heuristic that resolves K when the
caller does not fix it.
"""

from __future__ import annotations

from typing import Optional
import numpy as np

from .kmedoids import pam_abbreviated
from ..utils.logging_config import get_logger

logger = get_logger(__name__)

SMALL_N_THRESHOLD = 20
MEDIUM_N_MAX = 100
MEDIUM_N_K = 20
SEARCH_K_MIN = 25
ITEMS_PER_SEARCH_K = 50


def silhouette_score(assignments: np.ndarray, K: int, dist: np.ndarray) -> float:
    """
    Mean silhouette of a clustering over a precomputed distance matrix.

    For point i in cluster c:

    - ``a(i)``: mean distance to the other members of c, or 0 when c has no
      other members (that 0 still counts towards the mean)
    - ``b(i)``: smallest mean distance from i to the members of another
      non-empty cluster
    - ``s(i) = (b(i) - a(i)) / max(a(i), b(i))``

    ``s(i)`` is 0 when ``max(a(i), b(i)) == 0`` or when no other non-empty
    cluster exists.

    Args:
        assignments: (n,) cluster ids in ``range(K)``
        K: Number of cluster ids
        dist: Symmetric (n, n) distance matrix with a zero diagonal

    Returns:
        Mean of s(i) over all points (0.0 for no points)
    """
    assignments = np.asarray(assignments, dtype=int)
    n = len(assignments)
    if n == 0:
        return 0.0

    onehot = (assignments[:, None] == np.arange(K)[None, :]).astype(np.float64)  # (n, K)
    counts = onehot.sum(axis=0)  # (K,)
    sums = dist @ onehot  # (n, K): total distance from i to each cluster

    rows = np.arange(n)
    own_counts = counts[assignments]
    # The diagonal is zero, so sums[i, own] already excludes i itself
    a = np.zeros(n, dtype=np.float64)
    multi = own_counts > 1
    a[multi] = sums[rows[multi], assignments[multi]] / (own_counts[multi] - 1)

    with np.errstate(divide="ignore", invalid="ignore"):
        means = sums / counts[None, :]
    other_ok = (counts[None, :] > 0) & (onehot == 0)
    b = np.where(other_ok, means, np.inf).min(axis=1)

    sil = np.zeros(n, dtype=np.float64)
    denom = np.maximum(a, b)
    ok = multi & np.isfinite(b) & (denom > 0)
    sil[ok] = (b[ok] - a[ok]) / denom[ok]
    return float(np.mean(sil))


def select_k(dist: np.ndarray, *, rng: np.random.Generator) -> int:
    """
    Pick a cluster count for n points when the caller gives none.

    - n < 20: ``max(2, n // 2)``
    - 20 <= n <= 100: 20
    - n > 100: try every K in ``[25, n // 50]`` with an abbreviated PAM run
      and keep the K with the strictly highest mean silhouette. When that
      range is empty the answer is 25.

    Args:
        dist: Symmetric (n, n) distance matrix
        rng: NumPy random generator for the trial runs' initial medoids

    Returns:
        The chosen K
    """
    n = dist.shape[0]
    if n < SMALL_N_THRESHOLD:
        return max(2, n // 2)
    if n <= MEDIUM_N_MAX:
        return MEDIUM_N_K

    max_k = n // ITEMS_PER_SEARCH_K
    best_k = SEARCH_K_MIN
    best_silhouette = -np.inf
    for k in range(SEARCH_K_MIN, max_k + 1):
        assignments, _ = pam_abbreviated(dist, k, rng=rng)
        score = silhouette_score(assignments, k, dist)
        logger.debug("K search: K=%d silhouette=%.6f", k, score)
        if score > best_silhouette:
            best_k = k
            best_silhouette = score

    if max_k < SEARCH_K_MIN:
        logger.debug("K search range [%d, %d] is empty; using K=%d", SEARCH_K_MIN, max_k, best_k)
    else:
        logger.info("K search over [%d, %d] selected K=%d (silhouette=%.6f)",
                    SEARCH_K_MIN, max_k, best_k, best_silhouette)
    return best_k


def resolve_k(
    dist: np.ndarray,
    clusters_ct: Optional[int],
    *,
    rng: np.random.Generator,
) -> int:
    """Use *clusters_ct* when given, otherwise :func:`select_k`."""
    if clusters_ct is not None:
        return clusters_ct
    return select_k(dist, rng=rng)
