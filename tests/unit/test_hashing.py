"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- digest functions against hashlib
- algorithm registry lookup
- hash_concat operand order
- to_hex/from_hex round trip
"""
import hashlib
import pytest

from core.crypto.hashing import (
    HASH_FUNCTIONS,
    blake2b_256,
    from_hex,
    get_hash_function,
    hash_concat,
    hash_name,
    sha256,
    sha3_256,
    sha512,
    to_hex,
)
from core.schemas.errors import ErrorCodes, UnsupportedHashAlgorithmException


class TestDigests:
    """Tests for the registered digest functions."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == 32

    def test_sha256_empty_bytes(self):
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha3_256_matches_hashlib(self):
        assert sha3_256(b"forest") == hashlib.sha3_256(b"forest").digest()

    def test_blake2b_256_is_32_bytes(self):
        result = blake2b_256(b"forest")

        assert len(result) == 32
        assert result == hashlib.blake2b(b"forest", digest_size=32).digest()

    def test_sha512_is_64_bytes(self):
        assert len(sha512(b"forest")) == 64

    def test_different_inputs_different_outputs(self):
        assert sha256(b"input1") != sha256(b"input2")


class TestRegistry:
    """Tests for get_hash_function() and hash_name()."""

    @pytest.mark.parametrize("name", sorted(HASH_FUNCTIONS))
    def test_registered_names_resolve(self, name):
        assert get_hash_function(name) is HASH_FUNCTIONS[name]

    def test_lookup_is_case_and_dash_insensitive(self):
        assert get_hash_function("SHA3-256") is sha3_256
        assert get_hash_function(" Blake2b-256 ") is blake2b_256

    def test_unknown_algorithm_raises(self):
        with pytest.raises(UnsupportedHashAlgorithmException) as exc_info:
            get_hash_function("md5")

        assert exc_info.value.code == ErrorCodes.UNSUPPORTED_HASH_ALGORITHM
        assert exc_info.value.details["algorithm"] == "md5"
        assert "sha256" in exc_info.value.details["supported"]

    def test_hash_name_of_registered_function(self):
        assert hash_name(sha256) == "sha256"
        assert hash_name(sha3_256) == "sha3_256"

    def test_hash_name_of_custom_function(self):
        assert hash_name(lambda data: data) == "custom"


class TestHashConcat:
    """Tests for hash_concat()."""

    def test_hash_concat_is_digest_of_concatenation(self):
        left = sha256(b"left")
        right = sha256(b"right")

        assert hash_concat(left, right) == hashlib.sha256(left + right).digest()

    def test_hash_concat_order_matters(self):
        left = sha256(b"a")
        right = sha256(b"b")

        assert hash_concat(left, right) != hash_concat(right, left)

    def test_hash_concat_uses_given_digest(self):
        assert hash_concat(b"a", b"b", lambda data: data) == b"ab"


class TestHexConversion:
    """Tests for to_hex() and from_hex()."""

    def test_to_hex_adds_prefix(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_round_trip(self):
        data = sha256(b"round trip")

        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_rejects_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_rejects_invalid_characters(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")
