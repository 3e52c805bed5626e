"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification
for airdrop allotments.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(f"{identity}{amount}".encode("utf-8"))
   - amount is rendered as a base-10 integer with no separators
2. Parent hashing: parent = sha256(min(a, b) + max(a, b))
   - pairs are sorted by raw bytes, so proofs carry no direction bits
3. Padding rule: Duplicate last node if odd number at any level
4. Single leaf: root = leaf, proof is empty

Determinism Notes:
- Leaf ordering is defined by the caller (recipient list order)
- Sorting happens only inside a pair, never across leaves
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.crypto.hashing import sha256, hash_sorted_pair


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        leaf: The leaf hash being proven (32 bytes)
        siblings: Sibling hashes from bottom to top of tree
        root: The Merkle root this proof is against
    """
    leaf: bytes
    siblings: list[bytes]
    root: bytes

    def siblings_hex(self) -> list[str]:
        """Proof elements as lowercase hex strings."""
        return [s.hex() for s in self.siblings]


def leaf_hash(identity: str, amount: int) -> bytes:
    """
    Hash a recipient's (identity, amount) pair into a leaf.

    Example:
        >>> leaf_hash("wasm1abc", 100) == sha256(b"wasm1abc100")
        True
    """
    return sha256(f"{identity}{int(amount)}".encode("utf-8"))


def merkle_parent(left: bytes, right: bytes) -> bytes:
    """
    Compute the parent hash of two child nodes.

    The children are sorted before hashing, so
    merkle_parent(a, b) == merkle_parent(b, a).
    """
    return hash_sorted_pair(left, right)


def _next_level(level: list[bytes]) -> list[bytes]:
    if len(level) % 2 == 1:
        level = level + [level[-1]]
    return [merkle_parent(level[i], level[i + 1]) for i in range(0, len(level), 2)]


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a sequence of leaf hashes.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [a, b, c, c] -> [parent(a,b), parent(c,c)]

    Raises:
        ValueError: If leaves is empty (an airdrop needs recipients)
    """
    if len(leaves) == 0:
        raise ValueError("Cannot build a merkle root from an empty leaf list")

    current_level: list[bytes] = list(leaves)
    while len(current_level) > 1:
        current_level = _next_level(current_level)

    return current_level[0]


def build_merkle_proof(leaves: Sequence[bytes], index: int) -> MerkleProof:
    """
    Generate a Merkle proof for the leaf at the given index.

    Raises:
        IndexError: If index is out of range
        ValueError: If leaves is empty
    """
    if len(leaves) == 0:
        raise ValueError("Cannot generate proof for empty leaf list")

    if index < 0 or index >= len(leaves):
        raise IndexError(
            f"Leaf index {index} out of range for {len(leaves)} leaves"
        )

    siblings: list[bytes] = []
    current_level: list[bytes] = list(leaves)
    current_index = index

    while len(current_level) > 1:
        if len(current_level) % 2 == 1:
            current_level.append(current_level[-1])

        # XOR with 1 flips to the other member of the pair
        siblings.append(current_level[current_index ^ 1])

        current_level = _next_level(current_level)
        current_index = current_index // 2

    return MerkleProof(
        leaf=leaves[index],
        siblings=siblings,
        root=current_level[0],
    )


def compute_root_from_proof(leaf: bytes, siblings: Sequence[bytes]) -> bytes:
    """Fold a leaf through its sibling path using sorted-pair hashing."""
    current_hash = leaf
    for sibling in siblings:
        current_hash = merkle_parent(current_hash, sibling)
    return current_hash


def verify_merkle_proof(proof: MerkleProof) -> bool:
    """
    Verify a Merkle proof against the root it carries.

    Returns:
        True if the proof is valid, False otherwise
    """
    return compute_root_from_proof(proof.leaf, proof.siblings) == proof.root


__all__ = [
    "MerkleProof",
    "leaf_hash",
    "merkle_parent",
    "build_merkle_root",
    "build_merkle_proof",
    "compute_root_from_proof",
    "verify_merkle_proof",
]
