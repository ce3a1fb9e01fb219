"""Exceptions raised by Smart Clusters."""


class InvalidClusterInputError(ValueError):
    """Items or cluster configuration passed to ``cluster_sources`` are malformed."""
