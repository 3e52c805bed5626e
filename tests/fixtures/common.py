"""
Common test fixtures shared by all modules.

Provides factory functions for core airdrop data structures:
- distribution schedules
- recipient lists and their built claims
- state machines at each lifecycle stage

These are the foundational building blocks used by higher-level tests.
"""

from decimal import Decimal
from pathlib import Path
from typing import Optional, Sequence

from core.merkle.merkle_proofs import AirdropClaims, MerkleProver
from core.schemas.ledger import Segment
from core.schemas.messages import (
    InitializeRequest,
    ParticipateRequest,
    RegisterMerkleRootRequest,
)
from distributor.context import ExecutionContext
from distributor.state_machine import ClaimStateMachine
from distributor.store import LedgerStore


ADMIN = "wasm1admin"
TOKEN = "wasm1token"
EXPIRY = 1_000


# =============================================================================
# Schedule Factories
# =============================================================================

def make_segment(start: int, end: int, fraction: str) -> Segment:
    return Segment(start=start, end=end, fraction=Decimal(fraction))


def make_schedule() -> list[Segment]:
    """
    Half unlocked at t=0, the other half linearly over [100, 200].
    """
    return [
        make_segment(0, 0, "0.5"),
        make_segment(100, 200, "0.5"),
    ]


def make_linear_schedule(start: int = 0, end: int = 300) -> list[Segment]:
    """Single linear segment releasing everything over [start, end]."""
    return [make_segment(start, end, "1")]


def make_uneven_schedule() -> list[Segment]:
    """Three linear segments with fractions that do not divide evenly."""
    return [
        make_segment(0, 7, "0.333333333333333333"),
        make_segment(7, 20, "0.333333333333333333"),
        make_segment(20, 33, "0.333333333333333334"),
    ]


# =============================================================================
# Recipient / Claims Factories
# =============================================================================

def make_recipients() -> list[tuple[str, int]]:
    """Five recipients, so the tree has an odd level."""
    return [
        ("wasm1alice", 1_000),
        ("wasm1bob", 2_500),
        ("wasm1carol", 333),
        ("wasm1dave", 7),
        ("wasm1erin", 10_000),
    ]


def make_claims(recipients: Optional[Sequence[tuple[str, int]]] = None) -> AirdropClaims:
    return MerkleProver.build_claims(list(recipients or make_recipients()))


def write_recipients_csv(path: Path, recipients: Optional[Sequence[tuple[str, int]]] = None) -> Path:
    lines = ["address,amount"]
    lines.extend(f"{address},{amount}" for address, amount in (recipients or make_recipients()))
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


# =============================================================================
# State Machine Factories
# =============================================================================

def ctx(sender: str = ADMIN, now: int = 0) -> ExecutionContext:
    return ExecutionContext(sender=sender, now=now)


def make_machine(path: Optional[Path] = None) -> ClaimStateMachine:
    return ClaimStateMachine(store=LedgerStore(path))


def make_initialized_machine(
    schedule: Optional[list[Segment]] = None,
    expiry: int = EXPIRY,
    path: Optional[Path] = None,
) -> ClaimStateMachine:
    machine = make_machine(path)
    machine.initialize(
        ctx(ADMIN),
        InitializeRequest(
            token_reference=TOKEN,
            expiry=expiry,
            distribution_schedule=schedule or make_schedule(),
        ),
    )
    return machine


def make_registered_machine(
    claims: Optional[AirdropClaims] = None,
    schedule: Optional[list[Segment]] = None,
    expiry: int = EXPIRY,
    path: Optional[Path] = None,
) -> tuple[ClaimStateMachine, AirdropClaims]:
    """Initialized machine with the default recipients' root registered."""
    claims = claims or make_claims()
    machine = make_initialized_machine(schedule=schedule, expiry=expiry, path=path)
    data = claims.to_dict()
    machine.register_merkle_root(
        ctx(ADMIN),
        RegisterMerkleRootRequest(
            merkle_root=data["merkle_root"],
            total_amount=int(data["total_amount"]),
        ),
    )
    return machine, claims


def participate_request(claims: AirdropClaims, identity: str) -> ParticipateRequest:
    entry = claims.claims[identity]
    return ParticipateRequest(amount=int(entry["amount"]), proof=list(entry["proof"]))
