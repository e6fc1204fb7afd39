"""
Core cryptographic utilities.

Provides the hash primitive interface shared by the Merkle forest.
"""
from .hashing import (
    HashFunction,
    DEFAULT_HASH_ALGORITHM,
    HASH_FUNCTIONS,
    sha256,
    sha3_256,
    blake2b_256,
    sha512,
    get_hash_function,
    hash_name,
    hash_concat,
    to_hex,
    from_hex,
)

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
