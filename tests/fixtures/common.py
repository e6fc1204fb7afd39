"""
Common test fixtures shared by all test modules.

The identity digest turns every hash into plain concatenation, so the
expected roots and proofs can be written out by hand:
    H(a + b) == b"ab"
"""

import string
from typing import Iterable

from core.crypto.hashing import HashFunction, sha256
from core.merkle import MerkleForest


def identity_digest(data: bytes) -> bytes:
    """Deterministic stub hash: returns its input unchanged."""
    return bytes(data)


def letters(count: int) -> list[bytes]:
    """First count lowercase letters as one-byte keys."""
    return [c.encode() for c in string.ascii_lowercase[:count]]


def numbered_keys(count: int, prefix: str = "key") -> list[bytes]:
    """Distinct keys key-0, key-1, ..."""
    return [f"{prefix}-{i}".encode() for i in range(count)]


def make_forest(keys: Iterable, digest: HashFunction = identity_digest) -> MerkleForest:
    """Batch-built forest (identity digest by default)."""
    return MerkleForest(keys, digest=digest)


def make_incremental_forest(keys: Iterable, digest: HashFunction = sha256) -> MerkleForest:
    """Forest built by appending keys one at a time to an empty forest."""
    forest = MerkleForest(digest=digest)
    for key in keys:
        forest.add_key(key)
    return forest


def populated_slots(forest: MerkleForest) -> list[int]:
    """Indices of non-empty slots."""
    return [i for i, subtree in enumerate(forest.slots) if subtree is not None]
