"""
merkle-commit - Merkle Tree Implementation

Provides perfect (power-of-two) Merkle tree construction over any Hasher,
inclusion proof generation, and verification.

Construction rules:
- Leaves are hasher.hash(item), in input order
- Parents are concat_hashes(hasher, left, right)
- The leaf level is padded on the right to the next power of two by
  repeating the hash of the last item

All nodes live in one flat tuple, level by level from the leaves up, so a
tree with leaf_count leaves holds 2 * leaf_count - 1 hashes and the root is
the last one.
"""

import time
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum

import structlog

from merkle_commit.crypto.hash import ByteLike, Hash, Hasher, concat_hashes
from merkle_commit.metrics import get_merkle_metrics

logger = structlog.get_logger(__name__)


class ProofDirection(str, Enum):
    """Side of the path node the sibling sits on."""

    LEFT = "L"
    RIGHT = "R"


@dataclass(frozen=True)
class PositionedHash:
    """
    Single element in a Merkle proof path.

    Attributes:
        hash: The sibling hash at this level
        direction: Whether the sibling is LEFT or RIGHT of the path
    """

    hash: Hash
    direction: ProofDirection

    @classmethod
    def left(cls, sibling: Hash) -> "PositionedHash":
        return cls(hash=sibling, direction=ProofDirection.LEFT)

    @classmethod
    def right(cls, sibling: Hash) -> "PositionedHash":
        return cls(hash=sibling, direction=ProofDirection.RIGHT)

    @property
    def is_left(self) -> bool:
        return self.direction == ProofDirection.LEFT

    def combine(self, current: Hash, hasher: Hasher) -> Hash:
        """Hash the path node with this sibling on its recorded side."""
        if self.is_left:
            return concat_hashes(hasher, self.hash, current)
        return concat_hashes(hasher, current, self.hash)

    def __repr__(self) -> str:
        side = "Left" if self.is_left else "Right"
        return f"{side}({self.hash})"


@dataclass(frozen=True)
class MerkleProof:
    """
    Merkle inclusion proof for a leaf.

    Holds its own copy of the root and the sibling path, so it stays usable
    after the tree it came from is gone.

    Attributes:
        root: Merkle root the proof was derived against
        path: Sibling hashes ordered from the leaf level to the root
    """

    root: Hash
    path: tuple[PositionedHash, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))

    def __len__(self) -> int:
        return len(self.path)

    def compute_root(self, item: ByteLike, hasher: Hasher) -> Hash:
        """
        Recompute the root from an item and this proof's path.

        Args:
            item: Candidate item (not its hash)
            hasher: Hasher the tree was built with

        Returns:
            Root implied by the item and path
        """
        current = hasher.hash(item)
        for element in self.path:
            current = element.combine(current, hasher)
        return current

    def validate(self, item: ByteLike, hasher: Hasher) -> bool:
        """
        Check that the item is committed to by this proof's root.

        A wrong item, an altered path entry, or a root from another tree all
        yield False.
        """
        return self.compute_root(item, hasher) == self.root


def _next_power_of_two(n: int) -> int:
    return 1 << (n - 1).bit_length()


class MerkleTree:
    """
    Perfect Merkle tree over an ordered, non-empty list of items.

    Features:
    - Deterministic construction from ordered items
    - Any Hasher, any output size
    - Padding by duplicating the last leaf hash
    - Immutable after construction

    Example:
        >>> tree = MerkleTree([b"a", b"b", b"c"], Sha3Hasher())
        >>> tree.leaf_count
        4
        >>> tree.proof(2).validate(b"c", Sha3Hasher())
        True
    """

    def __init__(self, items: Iterable[ByteLike], hasher: Hasher) -> None:
        """
        Build the tree.

        Args:
            items: Non-empty ordered items (bytes-like or str)
            hasher: Hasher for leaves and parents

        Raises:
            TypeError: If items is a single str or bytes-like value
            ValueError: If items is empty
        """
        if isinstance(items, (str, bytes, bytearray, memoryview, Hash)):
            raise TypeError(
                f"Merkle tree items must be a sequence of items, not a single {type(items).__name__}"
            )
        items = list(items)
        if len(items) == 0:
            raise ValueError("Merkle tree must not be empty")

        started = time.perf_counter()
        leaf_count = _next_power_of_two(len(items))

        nodes = [hasher.hash(item) for item in items]
        nodes.extend([nodes[-1]] * (leaf_count - len(items)))

        level_start = 0
        level_len = leaf_count
        while level_len > 1:
            level = nodes[level_start : level_start + level_len]
            nodes.extend(
                concat_hashes(hasher, level[i], level[i + 1])
                for i in range(0, level_len, 2)
            )
            level_start += level_len
            level_len //= 2

        self._nodes = tuple(nodes)
        self._leaf_count = leaf_count
        self._item_count = len(items)

        duration = time.perf_counter() - started
        metrics = get_merkle_metrics()
        if metrics is not None:
            metrics.record_build(duration, leaf_count)

        logger.debug(
            "Built Merkle tree",
            item_count=self._item_count,
            leaf_count=leaf_count,
            hash_size=len(self.root()),
        )

    def root(self) -> Hash:
        """Get the root hash (Merkle root)."""
        return self._nodes[-1]

    @property
    def leaf_count(self) -> int:
        """Number of leaves, padding included; always a power of two."""
        return self._leaf_count

    @property
    def item_count(self) -> int:
        """Number of items the tree was built from."""
        return self._item_count

    @property
    def depth(self) -> int:
        """Number of levels above the leaves, i.e. the proof path length."""
        return self._leaf_count.bit_length() - 1

    @property
    def hash_size(self) -> int:
        return len(self.root())

    @property
    def nodes(self) -> tuple[Hash, ...]:
        """All node hashes, leaves first and root last."""
        return self._nodes

    def leaf_hash(self, index: int) -> Hash:
        """
        Get the hash of a leaf by index.

        Raises:
            IndexError: If index out of bounds
        """
        self._check_leaf_index(index)
        return self._nodes[index]

    def proof(self, index: int) -> MerkleProof:
        """
        Generate inclusion proof for a leaf.

        Padding leaves have proofs too; they validate against the last item.

        Args:
            index: Leaf index, 0 <= index < leaf_count

        Returns:
            MerkleProof with the path ordered leaf to root

        Raises:
            IndexError: If index out of bounds
        """
        self._check_leaf_index(index)

        path: list[PositionedHash] = []
        level_start = 0
        level_len = self._leaf_count
        while level_len > 1:
            offset = index - level_start
            if offset % 2 == 0:
                path.append(PositionedHash.right(self._nodes[index + 1]))
            else:
                path.append(PositionedHash.left(self._nodes[index - 1]))

            index = level_start + level_len + offset // 2
            level_start += level_len
            level_len //= 2

        metrics = get_merkle_metrics()
        if metrics is not None:
            metrics.record_proof()

        return MerkleProof(root=self.root(), path=tuple(path))

    def proofs(self) -> Iterator[MerkleProof]:
        """Generate proofs for every leaf, in leaf order."""
        for index in range(self._leaf_count):
            yield self.proof(index)

    def _check_leaf_index(self, index: int) -> None:
        if not 0 <= index < self._leaf_count:
            raise IndexError(
                f"Leaf index {index} out of bounds for {self._leaf_count} leaves"
            )

    def __len__(self) -> int:
        return self._leaf_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleTree):
            return NotImplemented
        return self._leaf_count == other._leaf_count and self._nodes == other._nodes

    def __hash__(self) -> int:
        return hash(self._nodes)

    def __repr__(self) -> str:
        return f"MerkleTree(leaf_count={self._leaf_count}, root={self.root()})"


def build(items: Iterable[ByteLike], hasher: Hasher) -> MerkleTree:
    """Build a Merkle tree from items. See MerkleTree."""
    return MerkleTree(items, hasher)


def verify_proof(proof: MerkleProof, item: ByteLike, hasher: Hasher) -> bool:
    """
    Verify a Merkle inclusion proof for an item.

    Same result as proof.validate(), but also records the outcome.

    Returns:
        True if proof is valid
    """
    valid = proof.validate(item, hasher)

    metrics = get_merkle_metrics()
    if metrics is not None:
        metrics.record_verification(valid)

    if not valid:
        logger.debug("Merkle proof rejected", root=str(proof.root), path_len=len(proof))
    return valid
