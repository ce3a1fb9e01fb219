"""
Command-line entry point: cluster items from a JSON file.

Usage:
    smart-clusters items.json
    smart-clusters items.json --clusters-ct 8 --seed 42
    cat items.json | smart-clusters - --metric euclidean --log-level INFO

The input is a JSON array of ``{"key": "...", "vec": [...]}`` objects. The
clusters are written to stdout as a JSON array.
"""

import argparse
import json
import sys
from typing import List, Optional

from .algorithms.geometry import euclidean_distance
from .clustering import cluster_sources
from .config import ClusterConfig, config
from .utils.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

METRICS = {
    "cosine": None,
    "euclidean": euclidean_distance,
}


def build_parser() -> argparse.ArgumentParser:
    """Argument parser for the ``smart-clusters`` command."""
    parser = argparse.ArgumentParser(
        prog="smart-clusters",
        description="Cluster embedded items with k-medoids",
    )
    parser.add_argument("items", help="Path to a JSON array of {key, vec} items, or '-' for stdin")
    parser.add_argument("--clusters-ct", type=int, default=None,
                        help="Number of clusters (chosen automatically when omitted)")
    parser.add_argument("--max-iterations", type=int, default=None,
                        help="Maximum assign/update passes (default: SMART_CLUSTERS_MAX_ITERATIONS or 100)")
    parser.add_argument("--auto-optimize-k", action="store_true",
                        help="Choose K automatically (the default when --clusters-ct is omitted)")
    parser.add_argument("--metric", choices=sorted(METRICS), default="cosine",
                        help="Distance metric (default: cosine)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Seed for the initial medoids")
    parser.add_argument("--log-level", default=config.clustering.log_level,
                        help="Logging level (default: SMART_CLUSTERS_LOG_LEVEL or WARNING)")
    return parser


def _load_items(path: str):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, "r", encoding="utf-8") as fh:
        return json.load(fh)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the command; returns the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        setup_logging(args.log_level)
        items = _load_items(args.items)
        cfg = ClusterConfig(
            clusters_ct=args.clusters_ct,
            max_iterations=args.max_iterations,
            auto_optimize_k=args.auto_optimize_k,
            distance_fn=METRICS[args.metric],
            seed=args.seed,
        )
        clusters = cluster_sources(items, cfg)
    except (OSError, ValueError) as e:
        # JSONDecodeError and InvalidClusterInputError are ValueErrors
        logger.debug("Clustering failed", exc_info=True)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    json.dump([c.to_dict() for c in clusters], sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
