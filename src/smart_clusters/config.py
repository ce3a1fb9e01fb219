"""
Configuration management for Smart Clusters.

Process-wide defaults come from environment variables (typically from a .env
file, loaded with python-dotenv). Per-call options live in ``ClusterConfig``
and take precedence over those defaults.

Usage:
    from smart_clusters.config import config, ClusterConfig

    # Environment-driven defaults
    config.clustering.max_iterations

    # Per-call options
    cfg = ClusterConfig(clusters_ct=8, seed=42)
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

import numpy as np
from dotenv import load_dotenv

from .exceptions import InvalidClusterInputError
from .utils.logging_config import get_logger

logger = get_logger(__name__)

# Look for .env in project root (parent of src/)
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(env_path)


def _is_positive_int(value: Any) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool) and value > 0


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name, "")
    if raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"Environment variable {name} must be an integer, got {raw!r}") from e


@dataclass
class ClusteringDefaults:
    """Defaults applied when a call does not set an option."""
    max_iterations: int = 100
    seed: Optional[int] = None
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate defaults loaded from the environment."""
        if not _is_positive_int(self.max_iterations):
            raise ValueError(
                f"SMART_CLUSTERS_MAX_ITERATIONS must be a positive integer, "
                f"got {self.max_iterations!r}"
            )
        if not self.log_level:
            self.log_level = "WARNING"
        if not isinstance(logging.getLevelName(str(self.log_level).upper()), int):
            raise ValueError(
                f"SMART_CLUSTERS_LOG_LEVEL must be a logging level name, "
                f"got {self.log_level!r}"
            )


class Config:
    """
    Application configuration loaded from environment variables.

    Environment variables can be set:
    1. In a .env file in the project root
    2. In the system environment
    3. In a container/deployment environment
    """

    def __init__(self):
        """Load configuration from environment."""
        self.clustering = ClusteringDefaults(
            max_iterations=_env_int("SMART_CLUSTERS_MAX_ITERATIONS", 100),
            seed=_env_int("SMART_CLUSTERS_SEED", None),
            log_level=os.getenv("SMART_CLUSTERS_LOG_LEVEL", "WARNING"),
        )


# Global config instance
config = Config()


@dataclass
class ClusterConfig:
    """
    Options for a single ``cluster_sources`` call.

    Attributes:
        clusters_ct: Number of clusters; chosen automatically when None
        max_iterations: Cap on assign/update passes (config default when None)
        auto_optimize_k: Accepted for compatibility; K is searched automatically
            whenever ``clusters_ct`` is None
        distance_fn: ``(vec_a, vec_b) -> float``; cosine distance when None
        seed: Seed for the medoid initialisation RNG
        rng: NumPy random generator; takes precedence over ``seed``
    """
    clusters_ct: Optional[int] = None
    max_iterations: Optional[int] = None
    auto_optimize_k: bool = False
    distance_fn: Optional[Callable[[Any, Any], float]] = None
    seed: Optional[int] = None
    rng: Optional[np.random.Generator] = None

    def __post_init__(self):
        """Validate option types and ranges."""
        if self.clusters_ct is not None and not _is_positive_int(self.clusters_ct):
            raise InvalidClusterInputError(
                f"clusters_ct must be a positive integer, got {self.clusters_ct!r}"
            )
        if self.max_iterations is not None and not _is_positive_int(self.max_iterations):
            raise InvalidClusterInputError(
                f"max_iterations must be a positive integer, got {self.max_iterations!r}"
            )
        if not isinstance(self.auto_optimize_k, bool):
            raise InvalidClusterInputError(
                f"auto_optimize_k must be a bool, got {self.auto_optimize_k!r}"
            )
        if self.distance_fn is not None and not callable(self.distance_fn):
            raise InvalidClusterInputError("distance_fn must be callable")
        if self.seed is not None and (
            not isinstance(self.seed, (int, np.integer)) or isinstance(self.seed, bool)
        ):
            raise InvalidClusterInputError(f"seed must be an integer, got {self.seed!r}")
        if self.rng is not None and not isinstance(self.rng, np.random.Generator):
            raise InvalidClusterInputError("rng must be a numpy.random.Generator")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "ClusterConfig":
        """
        Build a ClusterConfig from a plain mapping.

        Unknown keys are ignored with a warning.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(k for k in options if k not in known)
        if unknown:
            logger.warning("Ignoring unknown cluster config keys: %s", ", ".join(unknown))
        return cls(**{k: v for k, v in options.items() if k in known})

    @classmethod
    def coerce(
        cls, options: Union["ClusterConfig", Mapping[str, Any], None]
    ) -> "ClusterConfig":
        """Accept None, a ClusterConfig, or a mapping."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        if isinstance(options, Mapping):
            return cls.from_dict(options)
        raise InvalidClusterInputError(
            f"config must be a ClusterConfig, a mapping, or None; got {type(options).__name__}"
        )

    def resolved_max_iterations(self) -> int:
        """Per-call max_iterations, falling back to the environment default."""
        if self.max_iterations is not None:
            return self.max_iterations
        return config.clustering.max_iterations

    def make_rng(self) -> np.random.Generator:
        """RNG for this call: ``rng``, else one seeded by ``seed`` or the env default."""
        if self.rng is not None:
            return self.rng
        seed = self.seed if self.seed is not None else config.clustering.seed
        return np.random.default_rng(seed)
