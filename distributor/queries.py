"""
Read-only queries over a committed ledger snapshot.
"""

from __future__ import annotations

from core.schemas.errors import InvalidInputException
from core.schemas.ledger import Config, GlobalState
from core.schemas.messages import UserStateResponse
from core.vesting.calculator import calc_claimable_amount
from distributor.store import LedgerSnapshot


def get_config(ledger: LedgerSnapshot) -> Config:
    return ledger.require_config()


def get_global_state(ledger: LedgerSnapshot) -> GlobalState:
    return ledger.state


def get_active_root(ledger: LedgerSnapshot) -> str:
    """Hex of the active root. Raises RootNotRegisteredException if none."""
    return ledger.require_merkle_root().merkle_root


def get_user_state(ledger: LedgerSnapshot, identity: str, now: int) -> UserStateResponse:
    """
    Allotment, claim progress and what could be claimed right now.

    Unknown identities report zeros rather than failing.

    Raises:
        InvalidInputException: If now is before the recipient's last claim
    """
    account = ledger.load_user(identity)
    if now < account.last_claim_time:
        raise InvalidInputException(
            f"Query time {now} is before the last claim at {account.last_claim_time}",
            field_path="now",
            details={"now": now, "last_claim_time": account.last_claim_time},
        )

    claimable = 0
    if account.has_participated:
        claimable = calc_claimable_amount(
            assigned_amount=account.assigned_amount or 0,
            claimed_amount=account.claimed_amount,
            schedule=ledger.require_config().distribution_schedule,
            last_claim_time=account.last_claim_time,
            now=now,
        )

    return UserStateResponse(
        user=account.user,
        assigned_amount=account.assigned_amount or 0,
        claimed_amount=account.claimed_amount,
        claimable_amount=claimable,
        last_claim_time=account.last_claim_time,
        status=account.status,
    )
