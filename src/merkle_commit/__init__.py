"""
merkle-commit

Perfect Merkle trees over a pluggable hash function.

Usage:
    from merkle_commit import MerkleTree
    from merkle_commit.crypto.hashers import Sha3Hasher

    hasher = Sha3Hasher()
    tree = MerkleTree([b"a", b"b", b"c"], hasher)
    proof = tree.proof(1)
    assert proof.validate(b"b", hasher)
"""

from merkle_commit.crypto import (
    Hash,
    Hash32,
    Hasher,
    MerkleProof,
    MerkleTree,
    PositionedHash,
    ProofDirection,
    build,
    verify_proof,
)

__all__ = [
    "Hash",
    "Hash32",
    "Hasher",
    "MerkleProof",
    "MerkleTree",
    "PositionedHash",
    "ProofDirection",
    "build",
    "verify_proof",
]
