"""
Perfect Subtree
Complete binary Merkle tree over a power-of-two number of leaves.

This module provides:
- PerfectSubtree: root + hashed leaves, join with an older same-size subtree
- compute_subtree_root: layer-by-layer root computation
- encode_key: bytes/str key normalization

Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = H(key)
2. Parent hashing: parent = H(left + right)
3. Single leaf: root = leaf
4. join: root = H(older.root + newer.root), base = older.base + newer.base

Leaf count must be a power of two at all times; anything else is a
programming error and raises PreconditionViolationException.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence, Union

from core.crypto.hashing import HashFunction, hash_concat, sha256
from core.schemas.errors import ErrorCodes, PreconditionViolationException
from core.schemas.proof import SiblingPosition


logger = logging.getLogger(__name__)

Key = Union[bytes, str]


def encode_key(key: Key) -> bytes:
    """Return key as bytes; str keys are UTF-8 encoded."""
    if isinstance(key, str):
        return key.encode("utf-8")
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Key must be bytes or str, got {type(key).__name__}")


def is_power_of_two(n: int) -> bool:
    return n > 0 and n & (n - 1) == 0


def _require_power_of_two(n: int) -> None:
    if not is_power_of_two(n):
        raise PreconditionViolationException(
            f"Perfect subtree needs a power-of-two leaf count, got {n}",
            code=ErrorCodes.NOT_POWER_OF_TWO,
            details={"leaf_count": n},
        )


def compute_subtree_root(hashes: Sequence[bytes], digest: HashFunction = sha256) -> bytes:
    """
    Compute the root of a perfect tree over already-hashed leaves.

    Pairs adjacent nodes and hashes them, halving the layer until one
    node remains.

    Example:
        [a, b, c, d] -> [H(a+b), H(c+d)] -> H(H(a+b) + H(c+d))
    """
    _require_power_of_two(len(hashes))

    layer: list[bytes] = list(hashes)
    while len(layer) > 1:
        layer = [
            hash_concat(layer[i], layer[i + 1], digest)
            for i in range(0, len(layer), 2)
        ]
    return layer[0]


@dataclass
class PerfectSubtree:
    """
    A complete binary Merkle tree whose leaf count is a power of two.

    Attributes:
        root: Commitment to base
        base: Hashed leaves in insertion order (oldest first)
        digest: Hash primitive used for every node
    """
    root: bytes
    base: list[bytes]
    digest: HashFunction = field(default=sha256, compare=False, repr=False)

    def __post_init__(self) -> None:
        _require_power_of_two(len(self.base))

    @classmethod
    def from_leaves(cls, leaves: Sequence[Key], digest: HashFunction = sha256) -> "PerfectSubtree":
        """
        Build a subtree from raw keys, hashing each one.

        Raises:
            PreconditionViolationException: If len(leaves) is not a power of two
        """
        return cls.from_hashes([digest(encode_key(leaf)) for leaf in leaves], digest)

    @classmethod
    def from_hashes(cls, hashes: Sequence[bytes], digest: HashFunction = sha256) -> "PerfectSubtree":
        """Build a subtree from already-hashed leaves."""
        base = list(hashes)
        return cls(root=compute_subtree_root(base, digest), base=base, digest=digest)

    def __len__(self) -> int:
        return len(self.base)

    @property
    def size(self) -> int:
        return len(self.base)

    @property
    def height(self) -> int:
        """Number of hashing layers between the leaves and the root."""
        return self.size.bit_length() - 1

    def join(self, other: "PerfectSubtree") -> None:
        """
        Merge an older same-size subtree onto the left of this one.

        self is the newer (right) half, other the older (left) half.
        After the call self covers other.base followed by self.base.

        Raises:
            PreconditionViolationException: If the sizes differ
        """
        if other.size != self.size:
            raise PreconditionViolationException(
                f"Cannot join subtrees of different sizes: {other.size} onto {self.size}",
                code=ErrorCodes.SUBTREE_SIZE_MISMATCH,
                details={"left_size": other.size, "right_size": self.size},
            )
        self.root = hash_concat(other.root, self.root, self.digest)
        self.base = other.base + self.base

    def locate(self, target_hash: bytes) -> int | None:
        """Return the position of the first leaf equal to target_hash, or None."""
        try:
            return self.base.index(target_hash)
        except ValueError:
            return None

    def path(self, index: int) -> list[tuple[bytes, SiblingPosition]]:
        """
        Sibling path from the leaf at index up to this subtree's root.

        Each entry is (sibling, position) where position tells on which
        side the sibling is concatenated. path[0] is the leaf's direct
        sibling, path[-1] the sibling just below the root.
        """
        if not 0 <= index < self.size:
            raise IndexError(f"Leaf index {index} out of range for {self.size} leaves")

        steps: list[tuple[bytes, SiblingPosition]] = []
        layer: list[bytes] = list(self.base)
        while len(layer) > 1:
            position: SiblingPosition = "right" if index % 2 == 0 else "left"
            steps.append((layer[index ^ 1], position))
            layer = [
                hash_concat(layer[i], layer[i + 1], self.digest)
                for i in range(0, len(layer), 2)
            ]
            index //= 2
        return steps

    def generate_proof(self, target_hash: bytes) -> tuple[bool, list[bytes]]:
        """
        Find target_hash among the leaves and collect its sibling path.

        Only the first occurrence (left to right) is matched when the
        same leaf appears more than once.

        Returns:
            (found, siblings) with siblings in root-ward order;
            (False, []) when the leaf is absent.
        """
        index = self.locate(target_hash)
        if index is None:
            return False, []
        return True, [sibling for sibling, _ in self.path(index)]


__all__ = [
    "Key",
    "PerfectSubtree",
    "compute_subtree_root",
    "encode_key",
    "is_power_of_two",
]
