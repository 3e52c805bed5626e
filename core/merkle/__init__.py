"""
Merkle Tree and Commitments
Sorted-pair Merkle tree construction + proof generation/verification.

This module provides:
- MerkleProof: Dataclass representing a Merkle inclusion proof
- leaf_hash: Hash a recipient's (identity, amount) pair
- build_merkle_root / build_merkle_proof: Tree construction for operators
- MerkleVerifier: Check a claimed allotment against the active root

Canonical Commitment Rules:
1. Leaf hashing: sha256(f"{identity}{amount}")
2. Parent hashing: sha256(min(a, b) + max(a, b))
3. Padding: Duplicate last node if odd number at any level
4. Single leaf: root = leaf

Usage:
    from core.merkle import MerkleProver, MerkleVerifier

    built = MerkleProver.build_claims([("wasm1a", 100), ("wasm1b", 250)])
    claim = built.claims["wasm1a"]
    assert MerkleVerifier.verify_hex("wasm1a", 100, claim["proof"], built.root.hex())
"""
from .merkle_tree import (
    MerkleProof,
    leaf_hash,
    merkle_parent,
    build_merkle_root,
    build_merkle_proof,
    compute_root_from_proof,
    verify_merkle_proof,
)

from .merkle_proofs import (
    AirdropClaims,
    MerkleProver,
    MerkleVerifier,
)


__all__ = [
    # Core types
    "MerkleProof",
    "AirdropClaims",
    # Core functions
    "leaf_hash",
    "merkle_parent",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
]
