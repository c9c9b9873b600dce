"""
merkle-commit - Metrics Module

Prometheus metrics for Merkle tree operations.

Exports:
- Tree build times and sizes
- Proof generation counters
- Verification outcomes
"""

from merkle_commit.metrics.merkle_metrics import (
    MerkleMetrics,
    get_merkle_metrics,
)

__all__ = [
    "MerkleMetrics",
    "get_merkle_metrics",
]
