"""
Test suite for Smart Clusters.

This package contains all tests organized by component:
- test_algorithms/: Tests for geometry, k-medoids and K selection
- top level: Tests for cluster_sources, configuration and the CLI
"""
