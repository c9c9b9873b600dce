"""
merkle-commit - Concrete Hashers

hashlib-backed implementations of the Hasher capability. The Merkle tree
never imports this module; callers pick a hasher and pass it in.
"""

import hashlib
from enum import Enum
from functools import partial
from typing import Any, Callable, ClassVar

from merkle_commit.core.config import settings
from merkle_commit.crypto.hash import ByteLike, Hash, Hasher, as_bytes


class HashAlgorithm(str, Enum):
    """Algorithms with a bundled hasher."""

    SHA3_256 = "sha3_256"
    SHA256 = "sha256"
    BLAKE2B_256 = "blake2b_256"
    BLAKE2S_256 = "blake2s_256"


class HashlibHasher(Hasher):
    """
    Hasher backed by a hashlib constructor.

    concat_hashes feeds both halves into one digest object instead of
    building the concatenated bytes first; the result is identical.
    """

    algorithm: ClassVar[HashAlgorithm]
    output_size: ClassVar[int] = 32
    _constructor: ClassVar[Callable[..., Any]]

    def hash(self, value: ByteLike) -> Hash:
        digest = self._constructor(as_bytes(value)).digest()
        return self.hash_type(digest)

    def concat_hashes(self, left: Hash, right: Hash) -> Hash:
        digest = self._constructor()
        digest.update(bytes(left))
        digest.update(bytes(right))
        return self.hash_type(digest.digest())

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Sha3Hasher(HashlibHasher):
    """SHA3-256."""

    algorithm = HashAlgorithm.SHA3_256
    _constructor = staticmethod(hashlib.sha3_256)


class Sha256Hasher(HashlibHasher):
    """SHA-256."""

    algorithm = HashAlgorithm.SHA256
    _constructor = staticmethod(hashlib.sha256)


class Blake2bHasher(HashlibHasher):
    """BLAKE2b truncated to a 32-byte digest."""

    algorithm = HashAlgorithm.BLAKE2B_256
    _constructor = staticmethod(partial(hashlib.blake2b, digest_size=32))


class Blake2sHasher(HashlibHasher):
    """BLAKE2s with its native 32-byte digest."""

    algorithm = HashAlgorithm.BLAKE2S_256
    _constructor = staticmethod(partial(hashlib.blake2s, digest_size=32))


_HASHERS: dict[HashAlgorithm, type[HashlibHasher]] = {
    HashAlgorithm.SHA3_256: Sha3Hasher,
    HashAlgorithm.SHA256: Sha256Hasher,
    HashAlgorithm.BLAKE2B_256: Blake2bHasher,
    HashAlgorithm.BLAKE2S_256: Blake2sHasher,
}


def get_hasher(name: str | HashAlgorithm) -> Hasher:
    """
    Get a hasher by algorithm name.

    Args:
        name: HashAlgorithm member or its value (e.g. "sha3_256")

    Returns:
        Hasher instance

    Raises:
        ValueError: If the algorithm is not supported
    """
    try:
        algorithm = HashAlgorithm(name)
    except ValueError:
        supported = ", ".join(a.value for a in HashAlgorithm)
        raise ValueError(
            f"Unsupported hash algorithm: {name!r} (supported: {supported})"
        ) from None
    return _HASHERS[algorithm]()


def default_hasher() -> Hasher:
    """Get the hasher named by MERKLE_DEFAULT_HASH_ALGORITHM."""
    return get_hasher(settings.DEFAULT_HASH_ALGORITHM)
