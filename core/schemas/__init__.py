"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
"""

# Error models and exceptions
from .errors import (
    ConfigurationException,
    ErrorCodes,
    ForestError,
    ForestException,
    MerkleVerificationException,
    PreconditionViolationException,
    UnsupportedHashAlgorithmException,
)

# Proof and summary schemas
from .proof import (
    ForestProof,
    ForestSummary,
    ProofLayer,
    ProofStep,
    SiblingPosition,
    SlotSummary,
)

__all__ = [
    # Errors
    "ConfigurationException",
    "ErrorCodes",
    "ForestError",
    "ForestException",
    "MerkleVerificationException",
    "PreconditionViolationException",
    "UnsupportedHashAlgorithmException",
    # Proofs
    "ForestProof",
    "ForestSummary",
    "ProofLayer",
    "ProofStep",
    "SiblingPosition",
    "SlotSummary",
]
