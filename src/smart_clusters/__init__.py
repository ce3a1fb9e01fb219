"""
Smart Clusters - Core Package

Groups embedded sources into clusters around representative medoids.

This package provides:
- ``cluster_sources``: k-medoids clustering with automatic K selection
- Algorithm building blocks (distance matrix, PAM, silhouette)
- Environment-driven configuration and logging helpers
"""

__version__ = "0.1.0"

from .clustering import cluster_sources, assemble_clusters, Cluster, Item
from .config import ClusterConfig, config
from .exceptions import InvalidClusterInputError

# Explicitly import subpackages to ensure they're discoverable
from . import algorithms
from . import utils

__all__ = [
    "cluster_sources",
    "assemble_clusters",
    "Cluster",
    "Item",
    "ClusterConfig",
    "config",
    "InvalidClusterInputError",
    "algorithms",
    "utils",
]
