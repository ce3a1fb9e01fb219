"""
Source clustering entry point.

Groups embedded items into K clusters with k-medoids over a precomputed
distance matrix, choosing K automatically when the caller does not fix it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import numbers

import numpy as np

from .algorithms.geometry import Vector
from .algorithms.k_selection import resolve_k
from .algorithms.kmedoids import build_distance_matrix, pam
from .config import ClusterConfig
from .exceptions import InvalidClusterInputError
from .utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class Item:
    """An embedded source to cluster."""

    key: str
    vec: Vector


@dataclass
class Cluster:
    """One output cluster."""

    key: str
    center_source_key: Optional[str]
    members: List[str] = field(default_factory=list)
    number_of_members: int = field(init=False)

    def __post_init__(self):
        """Derive the member count."""
        self.number_of_members = len(self.members)

    def to_dict(self) -> Dict[str, Any]:
        """Plain mapping form of the cluster."""
        return {
            "key": self.key,
            "center_source_key": self.center_source_key,
            "members": list(self.members),
            "number_of_members": self.number_of_members,
        }


ItemIn = Union[Item, Mapping[str, Any]]


def _normalize_items(items: Sequence[ItemIn]) -> List[Item]:
    """Check item shapes and return them as Item objects."""
    if isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise InvalidClusterInputError(
            f"items must be a sequence of items, got {type(items).__name__}"
        )

    normalized: List[Item] = []
    seen = set()
    for i, raw in enumerate(items):
        if isinstance(raw, Item):
            key, vec = raw.key, raw.vec
        elif isinstance(raw, Mapping):
            if "key" not in raw or "vec" not in raw:
                raise InvalidClusterInputError(f"items[{i}] must have 'key' and 'vec'")
            key, vec = raw["key"], raw["vec"]
        else:
            raise InvalidClusterInputError(
                f"items[{i}] must be an Item or a mapping, got {type(raw).__name__}"
            )

        if not isinstance(key, str):
            raise InvalidClusterInputError(f"items[{i}].key must be a string, got {key!r}")
        if key in seen:
            raise InvalidClusterInputError(f"Duplicate item key: {key!r}")
        seen.add(key)

        if isinstance(vec, (str, bytes)) or not isinstance(vec, (Sequence, np.ndarray)):
            raise InvalidClusterInputError(f"items[{i}].vec must be a sequence of numbers")
        if len(vec) == 0:
            raise InvalidClusterInputError(f"items[{i}].vec is empty")
        if not all(isinstance(x, numbers.Real) and not isinstance(x, bool) for x in vec):
            raise InvalidClusterInputError(f"items[{i}].vec must contain only numbers")

        normalized.append(Item(key=key, vec=vec))
    return normalized


def assemble_clusters(
    items: Sequence[Item], assignments: np.ndarray, medoids: Sequence[int], K: int
) -> List[Cluster]:
    """
    Build exactly K output clusters.

    Members keep the original item order. A cluster id with no medoid slot or
    no members gets ``center_source_key=None``.
    """
    clusters: List[Cluster] = []
    for cluster_id in range(K):
        members = [items[i].key for i in np.where(assignments == cluster_id)[0]]
        center = None
        if cluster_id < len(medoids) and members:
            center = items[medoids[cluster_id]].key
        clusters.append(
            Cluster(key=f"cluster_{cluster_id}", center_source_key=center, members=members)
        )
    return clusters


def cluster_sources(
    items: Sequence[ItemIn],
    config: Union[ClusterConfig, Mapping[str, Any], None] = None,
) -> List[Cluster]:
    """
    Cluster items into K groups with k-medoids (PAM).

    Steps:
    1. Validate items and options
    2. Build the pairwise distance matrix once
    3. Resolve K: ``clusters_ct`` if given, otherwise a size-based heuristic
       with a silhouette search for large inputs
    4. Refine random initial medoids with assign/update passes until stable
       or ``max_iterations`` is reached
    5. Emit K clusters

    When K exceeds the number of items only that many medoids are drawn; the
    output is still padded to K clusters, the extra ones empty with no center.

    Args:
        items: Items as ``Item`` objects or ``{"key": ..., "vec": [...]}`` mappings
        config: ``ClusterConfig``, a mapping of the same options, or None

    Returns:
        List of K clusters (empty list when there are no items)

    Raises:
        InvalidClusterInputError: If items or options are malformed
    """
    cfg = ClusterConfig.coerce(config)
    source_items = _normalize_items(items)
    n = len(source_items)
    if n == 0:
        return []

    rng = cfg.make_rng()
    max_iter = cfg.resolved_max_iterations()

    dist = build_distance_matrix([item.vec for item in source_items], cfg.distance_fn)

    if cfg.clusters_ct is None and cfg.auto_optimize_k:
        logger.debug("auto_optimize_k set; K will be chosen automatically")
    K = resolve_k(dist, cfg.clusters_ct, rng=rng)
    if K > n:
        logger.debug("K=%d exceeds %d items; %d clusters will be empty", K, n, K - n)
    logger.info("Clustering %d items into K=%d clusters", n, K)

    result = pam(dist, K, rng=rng, max_iter=max_iter)
    logger.debug(
        "PAM finished after %d iterations (converged=%s)", result.n_iter, result.converged
    )

    return assemble_clusters(source_items, result.assignments, result.medoids, K)
