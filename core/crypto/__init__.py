"""
Core cryptographic utilities.

Hashing and hex codecs shared by the Merkle verifier and the tree builder.
"""
from .hashing import (
    HASH_LENGTH,
    sha256,
    hash_sorted_pair,
    to_hex,
    from_hex,
    decode_hash32,
)

__all__ = [
    "HASH_LENGTH",
    "sha256",
    "hash_sorted_pair",
    "to_hex",
    "from_hex",
    "decode_hash32",
]
