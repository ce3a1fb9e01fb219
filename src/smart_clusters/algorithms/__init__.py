"""
Algorithm Core Library - k-medoids clustering and K selection.

This module provides the numeric building blocks behind ``cluster_sources``
with minimal dependencies. Designed for reuse and testing.
"""

from .geometry import (
    cos_sim,
    cosine_distance,
    euclidean_distance,
    pairwise_cosine_distances,
    shuffle_array,
    compute_centroid,
    compute_medoid,
)
from .kmedoids import (
    build_distance_matrix,
    init_medoids,
    assign_to_medoids,
    update_medoids,
    pam,
    pam_abbreviated,
    PamResult,
)
from .k_selection import silhouette_score, select_k, resolve_k

__all__ = [
    # Geometry
    "cos_sim",
    "cosine_distance",
    "euclidean_distance",
    "pairwise_cosine_distances",
    "shuffle_array",
    "compute_centroid",
    "compute_medoid",
    # K-medoids
    "build_distance_matrix",
    "init_medoids",
    "assign_to_medoids",
    "update_medoids",
    "pam",
    "pam_abbreviated",
    "PamResult",
    # K selection
    "silhouette_score",
    "select_k",
    "resolve_k",
]
