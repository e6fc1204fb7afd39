"""
Merkle Forest and Commitments
Incremental Merkle commitment over an append-only key sequence.

This module provides:
- PerfectSubtree: power-of-two Merkle tree with join and proof paths
- MerkleForest: binary-decomposed forest with carry-propagating appends
- MerkleProver / MerkleVerifier: serializable proofs and stateless checks

Canonical Commitment Rules:
1. Leaf hashing: H(key)
2. Parent hashing: H(left + right)
3. Forest aggregation: H(slot.root + running), smallest slot first
4. Empty slot padding: H(running + running)
5. Empty forest: H(b"")

Usage:
    from core.merkle import MerkleForest, MerkleProver, MerkleVerifier

    forest = MerkleForest([b"a", b"b", b"c"])
    forest.add_key(b"d")

    proof = MerkleProver.prove(forest, b"c")
    assert MerkleVerifier.verify(proof, root=forest.root)
"""
from .perfect_subtree import (
    Key,
    PerfectSubtree,
    compute_subtree_root,
    encode_key,
    is_power_of_two,
)

from .forest import (
    MerkleForest,
    ProofTrace,
    forest_add_key,
    forest_new,
    forest_proof,
    forest_root,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    verify_forest_proof,
)


__all__ = [
    # Core types
    "Key",
    "PerfectSubtree",
    "MerkleForest",
    "ProofTrace",
    # Core functions
    "compute_subtree_root",
    "encode_key",
    "is_power_of_two",
    "forest_new",
    "forest_add_key",
    "forest_root",
    "forest_proof",
    "verify_forest_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
