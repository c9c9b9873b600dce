"""
merkle-commit - Merkle Metrics

Prometheus metrics for tree construction, proof derivation and proof
verification. Recording only happens when MERKLE_METRICS_ENABLED is set.
"""

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Histogram

import structlog

from merkle_commit.core.config import settings

logger = structlog.get_logger(__name__)


class MerkleMetrics:
    """
    Centralized metrics for Merkle tree operations.

    Provides visibility into:
    - Tree build times and sizes
    - Proof generation counts
    - Verification outcomes
    """

    def __init__(self, registry: CollectorRegistry = REGISTRY) -> None:
        """Initialize all Merkle metrics."""
        self._registry = registry
        self._init_build_metrics()
        self._init_proof_metrics()

    def _init_build_metrics(self) -> None:
        """Initialize tree construction metrics."""
        self.build_duration = Histogram(
            "merkle_commit_build_duration_seconds",
            "Merkle tree build time",
            buckets=[0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0],
            registry=self._registry,
        )

        self.tree_leaves = Histogram(
            "merkle_commit_tree_leaves",
            "Number of (padded) leaves in built Merkle trees",
            buckets=[1, 2, 8, 64, 512, 4096, 32768, 262144],
            registry=self._registry,
        )

        self.trees_built = Counter(
            "merkle_commit_trees_built_total",
            "Total Merkle trees built",
            registry=self._registry,
        )

    def _init_proof_metrics(self) -> None:
        """Initialize proof metrics."""
        self.proofs_generated = Counter(
            "merkle_commit_proofs_generated_total",
            "Merkle inclusion proofs derived",
            registry=self._registry,
        )

        self.verifications = Counter(
            "merkle_commit_verifications_total",
            "Merkle proof verifications",
            ["result"],
            registry=self._registry,
        )

    # Convenience methods

    def record_build(self, duration: float, leaf_count: int) -> None:
        """Record Merkle tree build."""
        self.trees_built.inc()
        self.build_duration.observe(duration)
        self.tree_leaves.observe(leaf_count)

    def record_proof(self) -> None:
        """Record proof derivation."""
        self.proofs_generated.inc()

    def record_verification(self, valid: bool) -> None:
        """Record Merkle proof verification."""
        result = "valid" if valid else "invalid"
        self.verifications.labels(result=result).inc()


# Singleton instance
_merkle_metrics: MerkleMetrics | None = None


def get_merkle_metrics() -> MerkleMetrics | None:
    """
    Get global Merkle metrics instance.

    Returns None while metrics are disabled, so callers can skip recording.
    """
    global _merkle_metrics
    if not settings.METRICS_ENABLED:
        return None
    if _merkle_metrics is None:
        _merkle_metrics = MerkleMetrics()
        logger.debug("Registered Merkle metrics")
    return _merkle_metrics
