"""
Hashing Utilities
Hash primitive interface and registry for the Merkle forest.

This module provides:
- The HashFunction interface injected into subtrees and forests
- SHA-256 (default), SHA3-256, BLAKE2b-256 and SHA-512 digests
- hash_concat: the single node-combination rule
- Hex encoding/decoding with 0x prefix

Security/Determinism Notes:
- Always hash raw bytes exactly as given
- The same HashFunction must be used for leaves and internal nodes
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
from typing import Callable

from core.schemas.errors import UnsupportedHashAlgorithmException


HashFunction = Callable[[bytes], bytes]

DEFAULT_HASH_ALGORITHM = "sha256"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte SHA-256 digest

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def sha3_256(data: bytes) -> bytes:
    """Compute SHA3-256 hash of raw bytes (32 bytes)."""
    return hashlib.sha3_256(data).digest()


def blake2b_256(data: bytes) -> bytes:
    """Compute BLAKE2b hash of raw bytes truncated to a 32-byte digest size."""
    return hashlib.blake2b(data, digest_size=32).digest()


def sha512(data: bytes) -> bytes:
    """Compute SHA-512 hash of raw bytes (64 bytes)."""
    return hashlib.sha512(data).digest()


HASH_FUNCTIONS: dict[str, HashFunction] = {
    "sha256": sha256,
    "sha3_256": sha3_256,
    "blake2b_256": blake2b_256,
    "sha512": sha512,
}


def get_hash_function(name: str) -> HashFunction:
    """
    Resolve a hash algorithm name to its HashFunction.

    Names are case-insensitive and dashes are treated as underscores,
    so "SHA3-256" resolves to sha3_256.

    Args:
        name: Algorithm name (see HASH_FUNCTIONS)

    Returns:
        The matching HashFunction

    Raises:
        UnsupportedHashAlgorithmException: If the name is not registered
    """
    key = name.strip().lower().replace("-", "_")
    try:
        return HASH_FUNCTIONS[key]
    except KeyError:
        raise UnsupportedHashAlgorithmException(
            f"Unsupported hash algorithm: {name!r}",
            algorithm=name,
            details={"supported": sorted(HASH_FUNCTIONS)},
        ) from None


def hash_name(digest: HashFunction) -> str:
    """Return the registered name of a HashFunction, or "custom" if unregistered."""
    for name, fn in HASH_FUNCTIONS.items():
        if fn is digest:
            return name
    return "custom"


def hash_concat(left: bytes, right: bytes, digest: HashFunction = sha256) -> bytes:
    """
    Hash the concatenation of two byte sequences.

    This is used for every internal node of the forest:
    parent = digest(left + right)

    Operand order is significant. Within a subtree the left child comes
    first; at forest level the newer (larger) slot root comes first.

    Args:
        left: Left operand
        right: Right operand
        digest: Hash primitive to apply

    Returns:
        Digest of the concatenation
    """
    return digest(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


__all__ = [
    "HashFunction",
    "DEFAULT_HASH_ALGORITHM",
    "HASH_FUNCTIONS",
    "sha256",
    "sha3_256",
    "blake2b_256",
    "sha512",
    "get_hash_function",
    "hash_name",
    "hash_concat",
    "to_hex",
    "from_hex",
]
