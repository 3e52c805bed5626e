"""
Hashing Utilities
Basic hashing and hex codec helpers for Merkle commitments.

This module provides:
- SHA-256 hashing for raw bytes
- Sorted-pair hashing for position-free Merkle parents
- Hex encoding/decoding with an optional 0x prefix
- Strict 32-byte hash decoding for roots and proof elements

Security/Determinism Notes:
- Always hash raw bytes exactly as specified
- Malformed hex and wrong-length hashes are reported as different errors
"""
from __future__ import annotations

import hashlib
import re

from core.schemas.errors import EncodingException, InvalidInputException


HASH_LENGTH = 32

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*")


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


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two nodes after ordering them by raw byte value.

    parent = sha256(min(a, b) + max(a, b))

    Because the pair is sorted, a proof never needs to say whether the
    sibling sits on the left or on the right.
    """
    left, right = sorted((a, b))
    return sha256(left + right)


def to_hex(data: bytes, prefix: bool = False) -> str:
    """
    Convert bytes to a lowercase hexadecimal string.

    Args:
        data: Raw bytes
        prefix: Prepend "0x" when True

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"), prefix=True)
        '0xdeadbeef'
    """
    encoded = data.hex()
    return "0x" + encoded if prefix else encoded


def from_hex(hex_string: str, field_path: str | None = None) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    A leading "0x" is accepted and stripped.

    Raises:
        InvalidInputException: If the string is not valid hex
    """
    if not isinstance(hex_string, str):
        raise InvalidInputException(
            f"Hex value must be a string, got {type(hex_string).__name__}",
            field_path=field_path,
        )

    hex_content = hex_string[2:] if hex_string[:2] in ("0x", "0X") else hex_string

    # bytes.fromhex would silently skip whitespace
    if not _HEX_DIGITS.fullmatch(hex_content):
        raise InvalidInputException(
            f"Invalid hex characters in string: {hex_content!r}",
            field_path=field_path,
        )

    if len(hex_content) % 2 != 0:
        raise InvalidInputException(
            f"Hex string must have even length, got length {len(hex_content)}",
            field_path=field_path,
        )

    return bytes.fromhex(hex_content)


def decode_hash32(hex_string: str, field_path: str | None = None) -> bytes:
    """
    Decode a hex string that must hold exactly one 32-byte hash.

    Raises:
        InvalidInputException: If the string is not valid hex
        EncodingException: If the decoded value is not 32 bytes long
    """
    data = from_hex(hex_string, field_path=field_path)
    if len(data) != HASH_LENGTH:
        raise EncodingException(
            f"Wrong length: expected {HASH_LENGTH} bytes, got {len(data)}",
            expected_length=HASH_LENGTH,
            actual_length=len(data),
            details={"field_path": field_path} if field_path else None,
        )
    return data


__all__ = [
    "HASH_LENGTH",
    "sha256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "decode_hash32",
]
