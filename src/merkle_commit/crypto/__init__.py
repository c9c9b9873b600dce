"""
merkle-commit - Cryptographic Utilities

Provides hash values, the hasher capability, Merkle tree construction,
proof generation, and verification.
"""

from merkle_commit.crypto.hash import (
    ByteLike,
    Hash,
    Hash32,
    Hasher,
    as_bytes,
    concat_hashes,
)
from merkle_commit.crypto.merkle import (
    MerkleProof,
    MerkleTree,
    PositionedHash,
    ProofDirection,
    build,
    verify_proof,
)

__all__ = [
    "ByteLike",
    "Hash",
    "Hash32",
    "Hasher",
    "as_bytes",
    "concat_hashes",
    "MerkleProof",
    "MerkleTree",
    "PositionedHash",
    "ProofDirection",
    "build",
    "verify_proof",
]
