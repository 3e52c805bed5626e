"""
Verify Route

Offline proof check: does (address, amount, proof) resolve to a root?
Nothing is written to the ledger.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends

from api.deps import get_state_machine
from api.models.requests import ProofCheckRequest
from api.models.responses import ProofCheckResponse
from core.crypto.hashing import decode_hash32, to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.verification import CheckResult
from distributor.state_machine import ClaimStateMachine


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verify", tags=["verification"])


@router.post("/proof", response_model=ProofCheckResponse)
def verify_proof(
    body: ProofCheckRequest,
    machine: ClaimStateMachine = Depends(get_state_machine),
) -> ProofCheckResponse:
    """
    Check a recipient proof.

    Uses the root in the request when given, otherwise the active root.
    Malformed hex or wrong-length hashes are rejected with 400.
    """
    if body.merkle_root is not None:
        root_hex = to_hex(decode_hash32(body.merkle_root, field_path="merkle_root"))
    else:
        root_hex = machine.snapshot().require_merkle_root().merkle_root

    ok = MerkleVerifier.verify_hex(body.address, body.amount, body.proof, root_hex)
    details = {"address": body.address, "amount": str(body.amount), "proof_length": len(body.proof)}

    if ok:
        check = CheckResult.passed("merkle_proof", "Proof resolves to the root", details)
    else:
        logger.debug(f"Proof for {body.address} does not resolve to {root_hex}")
        check = CheckResult.failed("merkle_proof", "Proof does not resolve to the root", details)

    return ProofCheckResponse(ok=ok, merkle_root=root_hex, check=check)
