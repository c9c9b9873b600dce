"""
merkle-commit - Hash Values and the Hasher Capability

A Hash is an immutable, fixed-size byte string. Each size gets its own
subclass (see Hash.of_size), so a 32-byte value never compares equal to a
20-byte one and a length mismatch is caught at construction.

A Hasher is anything with an ``output_size`` and a ``hash`` method. The
module-level concat_hashes() supplies the default pairing for hashers that
do not define their own; overrides must keep it equal to
``hash(bytes(left) + bytes(right))`` because proof validation relies on it.
"""

from dataclasses import dataclass
from functools import lru_cache
from typing import ClassVar, Protocol, Union, runtime_checkable


@dataclass(frozen=True, order=True, repr=False)
class Hash:
    """
    Fixed-size hash value.

    Ordering is byte-wise lexicographic and only defined between values of
    the same size. ``str()`` gives the 0x-prefixed hex form.

    Example:
        >>> Hash32 = Hash.of_size(4)
        >>> str(Hash32(bytes([0, 1, 2, 3])))
        '0x00010203'
    """

    value: bytes

    size: ClassVar[int | None] = None

    def __post_init__(self) -> None:
        if self.size is None:
            raise TypeError("Hash has no fixed size, use Hash.of_size(n)")
        if not isinstance(self.value, (bytes, bytearray, memoryview)):
            raise TypeError(
                f"{type(self).__name__} expects bytes, got {type(self.value).__name__}"
            )
        raw = bytes(self.value)
        if len(raw) != self.size:
            raise ValueError(
                f"{type(self).__name__} requires exactly {self.size} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "value", raw)

    @classmethod
    def of_size(cls, size: int) -> type["Hash"]:
        """Get the Hash subclass holding exactly ``size`` bytes."""
        return _sized_hash_type(size)

    @classmethod
    def from_hex(cls, text: str) -> "Hash":
        """Parse a hex string, with or without the 0x prefix."""
        return cls(bytes.fromhex(text.removeprefix("0x")))

    def hex(self) -> str:
        return self.value.hex()

    def __bytes__(self) -> bytes:
        return self.value

    def __len__(self) -> int:
        return len(self.value)

    def __str__(self) -> str:
        return f"0x{self.value.hex()}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def __reduce__(self) -> tuple:
        return (_restore_hash, (self.size, self.value))


def _restore_hash(size: int, value: bytes) -> Hash:
    return _sized_hash_type(size)(value)


@lru_cache(maxsize=None)
def _sized_hash_type(size: int) -> type[Hash]:
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValueError(f"Hash size must be a positive integer, got {size!r}")
    return type(
        f"Hash{size}",
        (Hash,),
        {"size": size, "__module__": __name__, "__qualname__": f"Hash{size}"},
    )


Hash32 = Hash.of_size(32)

ByteLike = Union[bytes, bytearray, memoryview, str, Hash]


def as_bytes(value: ByteLike) -> bytes:
    """
    Get the bytes an item is hashed over.

    Strings are UTF-8 encoded; hashes contribute their raw bytes.
    """
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview, Hash)):
        return bytes(value)
    raise TypeError(f"Cannot hash value of type {type(value).__name__}")


@runtime_checkable
class Hasher(Protocol):
    """Hash algorithm with a fixed output size."""

    output_size: int

    def hash(self, value: ByteLike) -> Hash:
        """Calculate the hash of a byte-like value."""
        ...

    def concat_hashes(self, left: Hash, right: Hash) -> Hash:
        """Calculate the hash of the concatenation of two hash values."""
        return self.hash(bytes(left) + bytes(right))

    @property
    def hash_type(self) -> type[Hash]:
        """The Hash subclass this hasher produces."""
        return Hash.of_size(self.output_size)


def concat_hashes(hasher: Hasher, left: Hash, right: Hash) -> Hash:
    """
    Hash two hashes joined left to right with the given hasher.

    Uses the hasher's own concat_hashes when it has one, so hashers that
    only match the protocol structurally still work.
    """
    concat = getattr(hasher, "concat_hashes", None)
    if concat is None:
        return Hasher.concat_hashes(hasher, left, right)
    return concat(left, right)
