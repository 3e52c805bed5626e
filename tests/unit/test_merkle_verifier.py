"""
Merkle Proof Unit Tests
Tests for core/merkle/merkle_proofs.py

- MerkleProver builds claims whose proofs verify
- MerkleVerifier rejects wrong amounts and flipped bytes with False
- Wrong-length roots or proof elements raise EncodingException
- Malformed hex raises InvalidInputException
"""
import pytest

from core.crypto.hashing import sha256
from core.merkle.merkle_proofs import MerkleProver, MerkleVerifier
from core.schemas.errors import EncodingException, InvalidInputException

from fixtures.common import make_claims, make_recipients


class TestMerkleProver:
    """Tests for MerkleProver."""

    def test_build_claims_covers_every_recipient(self):
        """Every recipient gets an entry with amount and proof."""
        recipients = make_recipients()
        built = MerkleProver.build_claims(recipients)

        assert set(built.claims) == {identity for identity, _ in recipients}
        assert built.total_amount == sum(amount for _, amount in recipients)
        assert built.root == MerkleProver.compute_root(recipients)

    def test_to_dict_renders_strings(self):
        """Root is bare hex, amounts are decimal strings."""
        data = make_claims().to_dict()

        assert len(data["merkle_root"]) == 64
        assert data["total_amount"] == "13840"
        assert data["claims"]["wasm1bob"]["amount"] == "2500"
        assert data["claims"]["wasm1bob"]["index"] == 1

    def test_prove_matches_build_claims(self):
        """prove() and build_claims() agree on the proof."""
        recipients = make_recipients()
        built = MerkleProver.build_claims(recipients)
        proof = MerkleProver.prove(recipients, 3)

        assert proof.siblings_hex() == built.claims["wasm1dave"]["proof"]

    def test_duplicate_recipient_rejected(self):
        """The same identity twice is rejected."""
        with pytest.raises(InvalidInputException, match="Duplicate"):
            MerkleProver.build_claims([("wasm1a", 1), ("wasm1a", 2)])

    def test_negative_amount_rejected(self):
        """Negative amounts are rejected."""
        with pytest.raises(InvalidInputException):
            MerkleProver.build_claims([("wasm1a", -1)])


class TestMerkleVerifier:
    """Tests for MerkleVerifier."""

    def test_every_recipient_verifies(self):
        """Round trip: every built proof verifies against the root."""
        built = make_claims()

        for identity, entry in built.claims.items():
            proof = MerkleVerifier.decode_proof(entry["proof"])
            assert MerkleVerifier.verify((identity, int(entry["amount"])), proof, built.root)

    def test_wrong_amount_fails(self):
        """A proof valid for one amount does not verify another."""
        built = make_claims()
        entry = built.claims["wasm1alice"]
        proof = MerkleVerifier.decode_proof(entry["proof"])

        assert not MerkleVerifier.verify(("wasm1alice", 1_001), proof, built.root)

    def test_wrong_identity_fails(self):
        """Someone else's proof does not verify for the caller."""
        built = make_claims()
        proof = MerkleVerifier.decode_proof(built.claims["wasm1alice"]["proof"])

        assert not MerkleVerifier.verify(("wasm1bob", 1_000), proof, built.root)

    @pytest.mark.parametrize("byte_index", [0, 15, 31])
    def test_flipping_any_proof_byte_fails(self, byte_index):
        """Flipping a single byte in any proof element fails verification."""
        built = make_claims()
        proof = MerkleVerifier.decode_proof(built.claims["wasm1carol"]["proof"])

        for position in range(len(proof)):
            tampered = [bytearray(p) for p in proof]
            tampered[position][byte_index] ^= 0xFF
            assert not MerkleVerifier.verify(
                ("wasm1carol", 333),
                [bytes(p) for p in tampered],
                built.root,
            )

    def test_short_proof_element_raises(self):
        """A 31-byte sibling is an encoding error, not a mismatch."""
        built = make_claims()
        proof = MerkleVerifier.decode_proof(built.claims["wasm1alice"]["proof"])
        proof[0] = proof[0][:31]

        with pytest.raises(EncodingException) as exc_info:
            MerkleVerifier.verify(("wasm1alice", 1_000), proof, built.root)

        assert exc_info.value.details["position"] == 0

    def test_wrong_length_root_raises(self):
        """A root that is not 32 bytes is an encoding error."""
        with pytest.raises(EncodingException):
            MerkleVerifier.verify(("wasm1alice", 1_000), [], sha256(b"x")[:16])

    def test_verify_hex(self):
        """Hex variant accepts the claims file shapes, with or without 0x."""
        built = make_claims()
        data = built.to_dict()
        entry = data["claims"]["wasm1erin"]

        assert MerkleVerifier.verify_hex("wasm1erin", 10_000, entry["proof"], data["merkle_root"])
        assert MerkleVerifier.verify_hex(
            "wasm1erin", 10_000, ["0x" + p for p in entry["proof"]], "0x" + data["merkle_root"]
        )

    def test_verify_hex_bad_hex_raises(self):
        """Malformed hex in a proof is invalid input."""
        data = make_claims().to_dict()

        with pytest.raises(InvalidInputException):
            MerkleVerifier.verify_hex("wasm1erin", 10_000, ["not-hex"], data["merkle_root"])

    def test_decode_proof_wrong_length_raises(self):
        """decode_proof enforces 32 bytes per element."""
        with pytest.raises(EncodingException):
            MerkleVerifier.decode_proof(["ab" * 20])
