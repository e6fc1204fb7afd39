"""
Merkle Forest
Incremental Merkle commitment over an append-only sequence of keys.

The forest keeps one optional PerfectSubtree per bit of the element
count: slot i holds a subtree of 2**i leaves exactly when bit i of the
count is set. Appending a key works like a binary increment: equal-size
subtrees are joined and carried upward until an empty slot is found.

Root Aggregation Rules (Hard Contracts):
1. Slots are scanned from the smallest to the largest.
2. A populated slot folds as running = H(slot.root + running).
3. The first populated slot seeds running with its own root before
   folding, unless it is also the top slot (complete forest), in which
   case the forest root is that slot's root.
4. An empty slot above a populated one pads as running = H(running + running).
   Empty slots below the first populated slot contribute nothing.
5. Empty forest: root = H(b"")

Proofs:
- proof(key) returns the flat list of sibling/aggregate hashes.
- An absent key yields an empty list; so does the only key of a
  one-element forest, whose root is its own leaf hash.
- Only the first occurrence of a duplicated key is ever proven.

Not thread-safe. Serialize add_key calls and serve concurrent readers
from snapshot().
"""
from __future__ import annotations

import copy
import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from core.crypto.hashing import HashFunction, hash_concat, sha256
from core.merkle.perfect_subtree import Key, PerfectSubtree, encode_key
from core.schemas.proof import ProofLayer, SiblingPosition


logger = logging.getLogger(__name__)


@dataclass
class ProofTrace:
    """
    Raw result of a proof lookup.

    steps holds (hash, position, layer) triples in replay order.
    """
    found: bool
    slot: int | None = None
    leaf_index: int | None = None
    steps: list[tuple[bytes, SiblingPosition, ProofLayer]] = field(default_factory=list)

    @property
    def siblings(self) -> list[bytes]:
        return [sibling for sibling, _, _ in self.steps]


class MerkleForest:
    """
    Forest of perfect subtrees following the binary decomposition of
    the element count.

    Attributes:
        slots: Optional subtree per bit position (slot i <=> 2**i leaves)
        root: Aggregate commitment over all slots
        is_complete: True iff at most one slot is populated
        digest: Hash primitive shared by every subtree
    """

    def __init__(self, keys: Iterable[Key] = (), digest: HashFunction = sha256) -> None:
        """
        Build a forest from an initial batch of keys.

        The count is decomposed from the least significant bit upward;
        each set bit i consumes the next 2**i keys in their original order.
        """
        data = [encode_key(key) for key in keys]
        self.digest = digest
        self.slots: list[Optional[PerfectSubtree]] = []
        self.is_complete = True
        self.root = b""

        remaining = len(data)
        position = 0
        exponent = 0
        while remaining > 0:
            if remaining % 2 == 1:
                size = 1 << exponent
                self.slots.append(
                    PerfectSubtree.from_leaves(data[position:position + size], digest)
                )
                position += size
                if remaining != 1:
                    self.is_complete = False
            else:
                self.slots.append(None)
            exponent += 1
            remaining //= 2

        self.update_root()

    @classmethod
    def from_stream(cls, keys: Iterable[Key], digest: HashFunction = sha256) -> "MerkleForest":
        """
        Build in one call the forest that appending keys one by one produces.

        The count is decomposed from the most significant bit downward, so
        the largest slot holds the oldest keys, as add_key leaves them.
        """
        data = [encode_key(key) for key in keys]
        forest = cls(digest=digest)

        count = len(data)
        slots: list[Optional[PerfectSubtree]] = [None] * count.bit_length()
        position = 0
        for exponent in reversed(range(count.bit_length())):
            if count >> exponent & 1:
                size = 1 << exponent
                slots[exponent] = PerfectSubtree.from_leaves(data[position:position + size], digest)
                position += size

        forest.slots = slots
        forest.is_complete = bin(count).count("1") <= 1
        forest.update_root()
        return forest

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def leaf_count(self) -> int:
        return sum(subtree.size for subtree in self.slots if subtree is not None)

    def __len__(self) -> int:
        return self.leaf_count

    def get_root(self) -> bytes:
        return self.root

    def subtree(self, index: int) -> Optional[PerfectSubtree]:
        """Return the subtree in slot index (None if empty or out of range)."""
        if 0 <= index < len(self.slots):
            return self.slots[index]
        return None

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, (bytes, bytearray, memoryview, str)):
            return False
        target = self.digest(encode_key(key))
        return any(
            subtree.locate(target) is not None
            for subtree in self.slots
            if subtree is not None
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MerkleForest):
            return NotImplemented
        return (
            self.root == other.root
            and self.slots == other.slots
            and self.is_complete == other.is_complete
        )

    def __repr__(self) -> str:
        populated = [i for i, subtree in enumerate(self.slots) if subtree is not None]
        return (
            f"MerkleForest(leaf_count={self.leaf_count}, slots={populated}, "
            f"is_complete={self.is_complete}, root={self.root.hex()})"
        )

    def snapshot(self) -> "MerkleForest":
        """Return an independent copy, unaffected by later add_key calls."""
        return copy.deepcopy(self)

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def _fold(self, running: bytes | None, subtree: Optional[PerfectSubtree], is_top: bool) -> bytes | None:
        """Fold one slot into the running aggregate."""
        if subtree is None:
            if running is None:
                return None
            return hash_concat(running, running, self.digest)
        if running is None:
            if is_top:
                return subtree.root
            running = subtree.root
        return hash_concat(subtree.root, running, self.digest)

    def update_root(self) -> None:
        """Recompute the aggregate root across all slots."""
        running: bytes | None = None
        top = len(self.slots) - 1
        for i, subtree in enumerate(self.slots):
            running = self._fold(running, subtree, i == top)
        self.root = running if running is not None else self.digest(b"")

    def add_key(self, key: Key) -> None:
        """
        Append one key.

        The new one-leaf subtree absorbs every populated slot from the
        bottom up (each one joining on its left) and lands in the first
        empty slot, or in a new top slot when every slot was populated.
        """
        tree = PerfectSubtree.from_hashes([self.digest(encode_key(key))], self.digest)
        self.is_complete = False

        for i, subtree in enumerate(self.slots):
            if subtree is None:
                self.slots[i] = tree
                self.update_root()
                return
            logger.debug(f"Carrying {subtree.size}-leaf subtree out of slot {i}")
            tree.join(subtree)
            self.slots[i] = None

        self.slots.append(tree)
        self.is_complete = True
        logger.debug(f"Forest overflowed into new top slot {len(self.slots) - 1}")
        self.update_root()

    def extend(self, keys: Iterable[Key]) -> None:
        """Append several keys in order."""
        for key in keys:
            self.add_key(key)

    # ------------------------------------------------------------------
    # Proofs
    # ------------------------------------------------------------------

    def trace_proof(self, key: Key) -> ProofTrace:
        """
        Locate key and assemble its proof steps with their positions.

        Subtree steps follow the leaf path. The first forest step carries
        the aggregate of all smaller slots and sits on the right; later
        forest steps (larger slot roots, or the padding value for empty
        slots) sit on the left. A complete forest drops the trailing step.
        """
        target = self.digest(encode_key(key))
        trace = ProofTrace(found=False)
        running: bytes | None = None
        top = len(self.slots) - 1

        for i, subtree in enumerate(self.slots):
            if not trace.found:
                if subtree is not None:
                    index = subtree.locate(target)
                    if index is not None:
                        trace.found = True
                        trace.slot = i
                        trace.leaf_index = index
                        trace.steps.extend(
                            (sibling, position, "subtree")
                            for sibling, position in subtree.path(index)
                        )
                        smaller = running if running is not None else subtree.root
                        trace.steps.append((smaller, "right", "forest"))
            elif subtree is not None:
                trace.steps.append((subtree.root, "left", "forest"))
            else:
                trace.steps.append((running, "left", "forest"))
            running = self._fold(running, subtree, i == top)

        if not trace.found:
            logger.debug("Key not present in forest, returning empty proof")
            return ProofTrace(found=False)

        if self.is_complete:
            trace.steps.pop()
        return trace

    def proof(self, key: Key) -> list[bytes]:
        """
        Return the flat proof for key: sibling and aggregate hashes in
        replay order, or an empty list when key is absent.
        """
        return self.trace_proof(key).siblings


# ----------------------------------------------------------------------
# Procedural interface
# ----------------------------------------------------------------------

def forest_new(keys: Iterable[Key], digest: HashFunction = sha256) -> MerkleForest:
    """Build a forest from an initial batch of keys."""
    return MerkleForest(keys, digest=digest)


def forest_add_key(forest: MerkleForest, key: Key) -> None:
    forest.add_key(key)


def forest_root(forest: MerkleForest) -> bytes:
    return forest.root


def forest_proof(forest: MerkleForest, key: Key) -> list[bytes]:
    """Return the flat proof for key (empty when absent)."""
    return forest.proof(key)


__all__ = [
    "MerkleForest",
    "ProofTrace",
    "forest_new",
    "forest_add_key",
    "forest_root",
    "forest_proof",
]
