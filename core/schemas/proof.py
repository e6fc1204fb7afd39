"""
Schemas
File: proof.py

Purpose: Serializable proof and forest summary schemas.

All hashes are carried as 0x-prefixed hex strings so that proofs can be
written to JSON and verified later without access to the forest.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


SiblingPosition = Literal["left", "right"]
ProofLayer = Literal["subtree", "forest"]


def _check_hex(value: str) -> str:
    if not value.startswith("0x"):
        raise ValueError(f"hash must be 0x-prefixed hex, got: {value[:10]}...")
    bytes.fromhex(value[2:])
    return value.lower()


class ProofStep(BaseModel):
    """
    One hashing step of an inclusion proof.

    position is where the sibling sits when combined with the tracked value:
    "left" means parent = H(sibling || tracked), "right" means
    parent = H(tracked || sibling).
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    sibling: str = Field(..., description="0x-prefixed sibling or aggregate hash")
    position: SiblingPosition = Field(..., description="Side of the sibling in the concatenation")
    layer: ProofLayer = Field(..., description="Subtree-internal step or forest aggregation step")

    @field_validator("sibling")
    @classmethod
    def _validate_sibling(cls, v: str) -> str:
        return _check_hex(v)

    @property
    def sibling_bytes(self) -> bytes:
        return bytes.fromhex(self.sibling[2:])


class ForestProof(BaseModel):
    """
    Self-describing inclusion proof for one key of a Merkle forest.

    steps replays from key_hash to root. A complete forest (a single
    populated slot) carries no trailing forest step: its root is the
    subtree root itself.
    """

    model_config = ConfigDict(extra="forbid")

    key_hash: str = Field(..., description="0x-prefixed leaf hash of the proven key")
    root: str = Field(..., description="0x-prefixed forest root the proof commits to")
    found: bool = Field(..., description="Whether the key was present in the forest")
    steps: list[ProofStep] = Field(default_factory=list)
    slot: int | None = Field(default=None, ge=0, description="Slot index holding the key")
    leaf_index: int | None = Field(default=None, ge=0, description="Leaf position inside the slot subtree")
    leaf_count: int = Field(default=0, ge=0, description="Forest size when the proof was made")
    is_complete: bool = Field(default=False)
    hash_algorithm: str = Field(default="sha256")

    @field_validator("key_hash", "root")
    @classmethod
    def _validate_hash(cls, v: str) -> str:
        return _check_hex(v)

    @property
    def siblings(self) -> list[bytes]:
        """The flat proof: sibling hashes in replay order."""
        return [step.sibling_bytes for step in self.steps]

    @property
    def key_hash_bytes(self) -> bytes:
        return bytes.fromhex(self.key_hash[2:])

    @property
    def root_bytes(self) -> bytes:
        return bytes.fromhex(self.root[2:])


class SlotSummary(BaseModel):
    """Summary of one forest slot."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    index: int = Field(..., ge=0)
    size: int = Field(..., ge=0, description="Number of leaves, 0 for an empty slot")
    root: str | None = Field(default=None)


class ForestSummary(BaseModel):
    """Read-only summary of a forest state."""

    model_config = ConfigDict(extra="forbid")

    root: str
    leaf_count: int = Field(..., ge=0)
    is_complete: bool
    hash_algorithm: str = Field(default="sha256")
    slots: list[SlotSummary] = Field(default_factory=list)


__all__ = [
    "SiblingPosition",
    "ProofLayer",
    "ProofStep",
    "ForestProof",
    "SlotSummary",
    "ForestSummary",
]
