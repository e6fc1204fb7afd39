"""
Test fixtures package for Merkle forest tests.

Provides helpers for building forests with readable hashes:
- common.py: identity digest stub, key factories, forest builders

Usage:
    from fixtures import identity_digest, letters

    def test_something():
        forest = MerkleForest(letters(6), digest=identity_digest)
"""

from .common import (
    identity_digest,
    letters,
    numbered_keys,
    make_forest,
    make_incremental_forest,
    populated_slots,
)

__all__ = [
    "identity_digest",
    "letters",
    "numbered_keys",
    "make_forest",
    "make_incremental_forest",
    "populated_slots",
]
