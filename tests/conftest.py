"""
Pytest configuration and shared fixtures for Merkle tests.
"""

import hashlib
from collections.abc import Generator

import pytest
from prometheus_client import CollectorRegistry

from merkle_commit.core.config import settings
from merkle_commit.crypto.hash import ByteLike, Hash, Hasher, as_bytes
from merkle_commit.crypto.hashers import Sha3Hasher
from merkle_commit.metrics import merkle_metrics
from merkle_commit.metrics.merkle_metrics import MerkleMetrics


class TruncatedSha256Hasher(Hasher):
    """4-byte hasher relying on the default concat_hashes."""

    output_size = 4

    def hash(self, value: ByteLike) -> Hash:
        return self.hash_type(hashlib.sha256(as_bytes(value)).digest()[:4])


@pytest.fixture
def hasher() -> Sha3Hasher:
    """Create the SHA3-256 hasher."""
    return Sha3Hasher()


@pytest.fixture
def small_hasher() -> TruncatedSha256Hasher:
    """Create a hasher with a non-default output size."""
    return TruncatedSha256Hasher()


@pytest.fixture
def digit_items() -> list[str]:
    """Items "0".."7"."""
    return [str(n) for n in range(8)]


@pytest.fixture
def metrics_registry(
    monkeypatch: pytest.MonkeyPatch,
) -> Generator[CollectorRegistry, None, None]:
    """Enable metrics, recording into a private registry."""
    registry = CollectorRegistry()
    monkeypatch.setattr(settings, "METRICS_ENABLED", True)
    monkeypatch.setattr(merkle_metrics, "_merkle_metrics", MerkleMetrics(registry))
    yield registry
