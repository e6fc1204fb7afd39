"""
Merkle Forest Proofs
Structured proof assembly and stateless verification.

This module provides class-based interfaces:
- MerkleProver: Build serializable ForestProof objects from a forest
- MerkleVerifier: Replay a proof against a published root

Verification never touches a forest: it only needs the leaf hash, the
proof steps, the root and the hash primitive.
"""
from __future__ import annotations

import logging
from typing import Iterable, Sequence

from core.crypto.hashing import (
    HashFunction,
    get_hash_function,
    hash_concat,
    hash_name,
    sha256,
    to_hex,
)
from core.merkle.forest import MerkleForest
from core.merkle.perfect_subtree import Key, encode_key
from core.schemas.errors import ErrorCodes, MerkleVerificationException
from core.schemas.proof import (
    ForestProof,
    ForestSummary,
    ProofStep,
    SiblingPosition,
    SlotSummary,
)


logger = logging.getLogger(__name__)


def verify_forest_proof(
    leaf_hash: bytes,
    steps: Sequence[tuple[bytes, SiblingPosition]],
    root: bytes,
    digest: HashFunction = sha256,
) -> bool:
    """
    Replay proof steps from leaf_hash and compare with root.

    Algorithm:
    1. Start with the leaf hash
    2. For each (sibling, position):
       - position "right": tracked = H(tracked + sibling)
       - position "left":  tracked = H(sibling + tracked)
    3. Check the tracked value equals root

    Args:
        leaf_hash: Hash of the proven key
        steps: (sibling, position) pairs in replay order
        root: Published forest root
        digest: Hash primitive the forest was built with

    Returns:
        True if the proof reproduces root, False otherwise
    """
    tracked = leaf_hash
    for sibling, position in steps:
        if position == "right":
            tracked = hash_concat(tracked, sibling, digest)
        else:
            tracked = hash_concat(sibling, tracked, digest)
    return tracked == root


class MerkleProver:
    """
    Convenience class for generating forest proofs and summaries.

    Example:
        >>> forest = MerkleForest([b"a", b"b", b"c"])
        >>> proof = MerkleProver.prove(forest, b"b")
        >>> proof.found
        True
    """

    @staticmethod
    def prove(forest: MerkleForest, key: Key) -> ForestProof:
        """
        Generate a ForestProof for key.

        An absent key yields found=False and no steps.
        """
        trace = forest.trace_proof(key)
        return ForestProof(
            key_hash=to_hex(forest.digest(encode_key(key))),
            root=to_hex(forest.root),
            found=trace.found,
            steps=[
                ProofStep(sibling=to_hex(sibling), position=position, layer=layer)
                for sibling, position, layer in trace.steps
            ],
            slot=trace.slot,
            leaf_index=trace.leaf_index,
            leaf_count=forest.leaf_count,
            is_complete=forest.is_complete,
            hash_algorithm=hash_name(forest.digest),
        )

    @staticmethod
    def compute_root(keys: Iterable[Key], digest: HashFunction = sha256) -> bytes:
        """Compute the forest root for a batch of keys."""
        return MerkleForest(keys, digest=digest).root

    @staticmethod
    def summarize(forest: MerkleForest) -> ForestSummary:
        """Describe a forest's root and slots."""
        return ForestSummary(
            root=to_hex(forest.root),
            leaf_count=forest.leaf_count,
            is_complete=forest.is_complete,
            hash_algorithm=hash_name(forest.digest),
            slots=[
                SlotSummary(
                    index=i,
                    size=subtree.size if subtree is not None else 0,
                    root=to_hex(subtree.root) if subtree is not None else None,
                )
                for i, subtree in enumerate(forest.slots)
            ],
        )


class MerkleVerifier:
    """
    Convenience class for verifying forest proofs.

    The hash primitive defaults to the one named in the proof; pass
    digest explicitly for unregistered (custom) primitives.
    """

    @staticmethod
    def _digest_for(proof: ForestProof, digest: HashFunction | None) -> HashFunction:
        if digest is not None:
            return digest
        return get_hash_function(proof.hash_algorithm)

    @staticmethod
    def verify(
        proof: ForestProof,
        root: bytes | None = None,
        digest: HashFunction | None = None,
    ) -> bool:
        """
        Verify a ForestProof.

        Args:
            proof: Proof to verify
            root: Trusted root to check against (defaults to proof.root)
            digest: Hash primitive override

        Returns:
            True if the proof is valid, False otherwise
        """
        if not proof.found:
            return False
        expected = root if root is not None else proof.root_bytes
        return verify_forest_proof(
            proof.key_hash_bytes,
            [(step.sibling_bytes, step.position) for step in proof.steps],
            expected,
            MerkleVerifier._digest_for(proof, digest),
        )

    @staticmethod
    def verify_key(
        key: Key,
        proof: ForestProof,
        root: bytes | None = None,
        digest: HashFunction | None = None,
    ) -> bool:
        """Verify that proof proves key (not just some leaf) under root."""
        hasher = MerkleVerifier._digest_for(proof, digest)
        if hasher(encode_key(key)) != proof.key_hash_bytes:
            return False
        return MerkleVerifier.verify(proof, root=root, digest=hasher)

    @staticmethod
    def require_key(
        key: Key,
        proof: ForestProof,
        digest: HashFunction | None = None,
    ) -> None:
        """
        Check that proof was made for key.

        Raises:
            MerkleVerificationException: If the key hash differs from proof.key_hash
        """
        hasher = MerkleVerifier._digest_for(proof, digest)
        key_hash = hasher(encode_key(key))
        if key_hash != proof.key_hash_bytes:
            raise MerkleVerificationException(
                "Proof was made for a different key",
                code=ErrorCodes.LEAF_HASH_MISMATCH,
                details={"key_hash": to_hex(key_hash), "proof_key_hash": proof.key_hash},
            )

    @staticmethod
    def require_valid(
        proof: ForestProof,
        root: bytes | None = None,
        digest: HashFunction | None = None,
    ) -> None:
        """
        Verify a proof, raising on failure.

        Raises:
            MerkleVerificationException: If the key was not found or the
                replayed root differs from the expected one
        """
        if not proof.found:
            raise MerkleVerificationException(
                "Proof does not cover a present key",
                code=ErrorCodes.LEAF_HASH_MISMATCH,
                details={"key_hash": proof.key_hash},
            )
        if not MerkleVerifier.verify(proof, root=root, digest=digest):
            logger.warning(f"Proof for {proof.key_hash} does not reproduce the root")
            raise MerkleVerificationException(
                "Proof does not reproduce the expected root",
                code=ErrorCodes.ROOT_MISMATCH,
                details={
                    "key_hash": proof.key_hash,
                    "root": to_hex(root) if root is not None else proof.root,
                },
            )


__all__ = [
    "MerkleProver",
    "MerkleVerifier",
    "verify_forest_proof",
]
