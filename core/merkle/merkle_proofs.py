"""
Merkle Proofs for Airdrop Recipients

Class-based interfaces around merkle_tree.py:
- MerkleProver: build a root and per-recipient proofs from a recipient list
- MerkleVerifier: check a recipient's (identity, amount) claim against a root
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Sequence

from core.crypto.hashing import HASH_LENGTH, decode_hash32, to_hex
from core.merkle.merkle_tree import (
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    compute_root_from_proof,
    leaf_hash,
)
from core.schemas.errors import EncodingException, InvalidInputException


@dataclass
class AirdropClaims:
    """A built airdrop tree: root, total, and one proof per recipient."""
    root: bytes
    total_amount: int
    claims: dict[str, dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "merkle_root": to_hex(self.root),
            "total_amount": str(self.total_amount),
            "claims": self.claims,
        }


class MerkleProver:
    """
    Builds Merkle commitments for a recipient list.

    Example:
        >>> built = MerkleProver.build_claims([("wasm1a", 100), ("wasm1b", 200)])
        >>> built.claims["wasm1a"]["amount"]
        '100'
    """

    @staticmethod
    def leaves_for(recipients: Sequence[tuple[str, int]]) -> list[bytes]:
        return [leaf_hash(identity, amount) for identity, amount in recipients]

    @staticmethod
    def compute_root(recipients: Sequence[tuple[str, int]]) -> bytes:
        """Compute the root committing to every (identity, amount) pair."""
        return build_merkle_root(MerkleProver.leaves_for(recipients))

    @staticmethod
    def prove(recipients: Sequence[tuple[str, int]], index: int) -> MerkleProof:
        """Generate the proof for the recipient at the given index."""
        return build_merkle_proof(MerkleProver.leaves_for(recipients), index)

    @staticmethod
    def build_claims(recipients: Sequence[tuple[str, int]]) -> AirdropClaims:
        """
        Build the root plus a proof for every recipient.

        Raises:
            InvalidInputException: On duplicate identities or negative amounts
            ValueError: If recipients is empty
        """
        seen: set[str] = set()
        for identity, amount in recipients:
            if identity in seen:
                raise InvalidInputException(
                    f"Duplicate recipient: {identity}",
                    field_path="recipients",
                )
            if int(amount) < 0:
                raise InvalidInputException(
                    f"Amount must be non-negative for {identity}",
                    field_path="recipients",
                )
            seen.add(identity)

        leaves = MerkleProver.leaves_for(recipients)
        root = build_merkle_root(leaves)

        claims: dict[str, dict[str, Any]] = {}
        for index, (identity, amount) in enumerate(recipients):
            proof = build_merkle_proof(leaves, index)
            claims[identity] = {
                "index": index,
                "amount": str(int(amount)),
                "proof": proof.siblings_hex(),
            }

        return AirdropClaims(
            root=root,
            total_amount=sum(int(amount) for _, amount in recipients),
            claims=claims,
        )


class MerkleVerifier:
    """
    Verifies a recipient's allotment against a Merkle root.

    Proof elements and the root must be exactly 32 bytes. A wrong length
    raises EncodingException; a well-formed proof that does not reach the
    root simply returns False.
    """

    @staticmethod
    def verify(
        leaf_input: tuple[str, int],
        proof: Sequence[bytes],
        root: bytes,
    ) -> bool:
        """
        Check that (identity, amount) is committed to by root.

        Args:
            leaf_input: (recipient identity, amount)
            proof: Sibling hashes, bottom-up
            root: Expected 32-byte root

        Raises:
            EncodingException: If root or any proof element is not 32 bytes
        """
        if len(root) != HASH_LENGTH:
            raise EncodingException(
                "Merkle root has wrong length",
                actual_length=len(root),
            )
        for position, sibling in enumerate(proof):
            if len(sibling) != HASH_LENGTH:
                raise EncodingException(
                    f"Proof element {position} has wrong length",
                    actual_length=len(sibling),
                    details={"position": position},
                )

        identity, amount = leaf_input
        return compute_root_from_proof(leaf_hash(identity, amount), proof) == root

    @staticmethod
    def decode_proof(proof: Sequence[str]) -> list[bytes]:
        """Decode hex proof elements, enforcing 32 bytes each."""
        return [
            decode_hash32(element, field_path=f"proof[{i}]")
            for i, element in enumerate(proof)
        ]

    @staticmethod
    def verify_hex(
        identity: str,
        amount: int,
        proof: Sequence[str],
        root: str,
    ) -> bool:
        """Hex-string variant of verify() used at the API/CLI boundary."""
        return MerkleVerifier.verify(
            (identity, amount),
            MerkleVerifier.decode_proof(proof),
            decode_hash32(root, field_path="merkle_root"),
        )


__all__ = [
    "AirdropClaims",
    "MerkleProver",
    "MerkleVerifier",
]
