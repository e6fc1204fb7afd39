"""
Schemas
File: errors.py

Purpose: Standard error taxonomy across the Merkle forest.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Key absence is not an error: proof lookups signal it with an empty proof.
Duplicate keys are not an error either.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across the forest."""

    # Structural preconditions (programming errors)
    PRECONDITION_VIOLATION = "PRECONDITION_VIOLATION"
    NOT_POWER_OF_TWO = "NOT_POWER_OF_TWO"
    SUBTREE_SIZE_MISMATCH = "SUBTREE_SIZE_MISMATCH"

    # Hash primitive
    UNSUPPORTED_HASH_ALGORITHM = "UNSUPPORTED_HASH_ALGORITHM"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"
    LEAF_HASH_MISMATCH = "LEAF_HASH_MISMATCH"

    # Configuration
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"

    # CLI input
    KEY_FILE_ERROR = "KEY_FILE_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ForestError(BaseModel):
    """
    Base error model for structured error communication.

    Used for reporting errors (e.g. in CLI JSON output) without exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.MERKLE_PROOF_INVALID],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ForestException":
        """Convert this error model to a raised exception."""
        return ForestException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ForestException(Exception):
    """
    Base exception for all Merkle forest errors.

    Carries structured error information and can be converted
    to a ForestError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "FOREST_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ForestError:
        """Convert this exception to a ForestError model."""
        return ForestError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class PreconditionViolationException(ForestException):
    """
    Raised when a structural precondition is broken by the caller.

    These are programming errors. Continuing would commit to a corrupted
    root, so nothing inside the forest catches them.
    """

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.PRECONDITION_VIOLATION,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


class UnsupportedHashAlgorithmException(ForestException):
    """Raised when a configured hash algorithm is not registered."""

    def __init__(
        self,
        message: str,
        algorithm: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if algorithm:
            full_details["algorithm"] = algorithm
        super().__init__(
            message=message,
            code=ErrorCodes.UNSUPPORTED_HASH_ALGORITHM,
            details=full_details,
            retryable=False,
        )


class MerkleVerificationException(ForestException):
    """Exception raised when Merkle proof verification fails."""

    def __init__(
        self,
        message: str,
        code: str = ErrorCodes.MERKLE_PROOF_INVALID,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=code,
            details=details,
            retryable=False,
        )


class ConfigurationException(ForestException):
    """Exception raised when configuration cannot be loaded or is invalid."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if path:
            full_details["path"] = path
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIGURATION_ERROR,
            details=full_details,
            retryable=False,
        )


__all__ = [
    "ErrorCodes",
    "ForestError",
    "ForestException",
    "PreconditionViolationException",
    "UnsupportedHashAlgorithmException",
    "MerkleVerificationException",
    "ConfigurationException",
]
