"""
Hashing Unit Tests
Tests for core/crypto/hashing.py

Tests:
- sha256 stability
- sorted-pair hashing is order independent
- to_hex/from_hex with and without 0x prefix
- decode_hash32 distinguishes bad hex from wrong length
"""
import hashlib
import pytest

from core.crypto.hashing import (
    HASH_LENGTH,
    decode_hash32,
    from_hex,
    hash_sorted_pair,
    sha256,
    to_hex,
)
from core.schemas.errors import (
    EncodingException,
    ErrorCodes,
    InvalidInputException,
)


class TestSha256:
    """Tests for sha256() function."""

    def test_sha256_known_value(self):
        """Test sha256 produces correct hash for known input."""
        expected = hashlib.sha256(b"hello").digest()
        result = sha256(b"hello")

        assert result == expected
        assert len(result) == HASH_LENGTH

    def test_sha256_empty_bytes(self):
        """Test sha256 of empty bytes."""
        assert sha256(b"") == hashlib.sha256(b"").digest()

    def test_sha256_different_inputs_different_outputs(self):
        """Test different inputs produce different hashes."""
        assert sha256(b"input1") != sha256(b"input2")


class TestHashSortedPair:
    """Tests for hash_sorted_pair()."""

    def test_order_independent(self):
        """Swapping the arguments does not change the parent."""
        a = sha256(b"a")
        b = sha256(b"b")

        assert hash_sorted_pair(a, b) == hash_sorted_pair(b, a)

    def test_hashes_smaller_first(self):
        """The smaller value by raw bytes is concatenated first."""
        low = bytes(32)
        high = b"\xff" * 32

        assert hash_sorted_pair(high, low) == sha256(low + high)

    def test_equal_pair(self):
        """A node paired with itself hashes its own concatenation."""
        a = sha256(b"a")

        assert hash_sorted_pair(a, a) == sha256(a + a)


class TestHexConversion:
    """Tests for to_hex() and from_hex() functions."""

    def test_to_hex_plain(self):
        """Test to_hex produces bare lowercase hex by default."""
        assert to_hex(bytes.fromhex("DEADBEEF")) == "deadbeef"

    def test_to_hex_prefixed(self):
        """Test to_hex with prefix=True."""
        assert to_hex(bytes.fromhex("deadbeef"), prefix=True) == "0xdeadbeef"

    def test_from_hex_accepts_prefix(self):
        """Test from_hex strips an optional 0x prefix."""
        assert from_hex("0xdeadbeef") == bytes.fromhex("deadbeef")
        assert from_hex("0XDEADBEEF") == bytes.fromhex("deadbeef")
        assert from_hex("deadbeef") == bytes.fromhex("deadbeef")

    def test_from_hex_empty(self):
        """Test from_hex with just prefix."""
        assert from_hex("0x") == b""

    def test_from_hex_odd_length(self):
        """Test from_hex rejects odd-length hex string."""
        with pytest.raises(InvalidInputException, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        """Test from_hex rejects invalid hex characters."""
        with pytest.raises(InvalidInputException, match="Invalid hex"):
            from_hex("gg")

    def test_from_hex_whitespace_rejected(self):
        """Test from_hex rejects whitespace between digits."""
        with pytest.raises(InvalidInputException, match="Invalid hex"):
            from_hex("de ad")

    def test_from_hex_non_string(self):
        """Test from_hex rejects non-string input."""
        with pytest.raises(InvalidInputException):
            from_hex(b"deadbeef")  # type: ignore[arg-type]

    def test_hex_round_trip_sha256(self):
        """Test round trip with actual SHA-256 hash."""
        hash_value = sha256(b"test data")
        hex_str = to_hex(hash_value)

        assert from_hex(hex_str) == hash_value
        assert len(hex_str) == 64


class TestDecodeHash32:
    """Tests for decode_hash32()."""

    def test_valid_hash(self):
        """A 64-char hex string decodes to 32 bytes."""
        value = sha256(b"root")

        assert decode_hash32(value.hex()) == value
        assert decode_hash32("0x" + value.hex()) == value

    def test_short_value_is_encoding_error(self):
        """Valid hex of the wrong length is an encoding error."""
        with pytest.raises(EncodingException) as exc_info:
            decode_hash32("ab" * 31, field_path="proof[0]")

        assert exc_info.value.code == ErrorCodes.ENCODING_ERROR
        assert exc_info.value.details["actual_length"] == 31
        assert exc_info.value.details["field_path"] == "proof[0]"

    def test_long_value_is_encoding_error(self):
        """Too many bytes is also an encoding error."""
        with pytest.raises(EncodingException):
            decode_hash32("ab" * 33)

    def test_bad_hex_is_invalid_input(self):
        """Non-hex characters are invalid input, not an encoding error."""
        with pytest.raises(InvalidInputException) as exc_info:
            decode_hash32("zz" * 32)

        assert exc_info.value.code == ErrorCodes.INVALID_INPUT

    def test_surrounding_whitespace_rejected(self):
        """Whitespace around an otherwise valid hash is not hex."""
        value = sha256(b"root").hex()

        with pytest.raises(InvalidInputException, match="Invalid hex"):
            decode_hash32(" " + value + " ")
        with pytest.raises(InvalidInputException):
            decode_hash32(value[:32] + "\n" + value[32:])
