"""
Claim State Machine

Runs one inbound operation against the ledger:

    Uninitialized --initialize--> Configured --register_merkle_root--> RootRegistered

    per recipient:
    NotParticipating --participate--> Participated --claim--> PartiallyClaimed
                                                   --claim--> FullyClaimed

Each operation reads the records it needs, validates everything, and only
then writes. A rejected operation raises an AirdropException from inside
the store transaction, so nothing it touched is committed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.crypto.hashing import decode_hash32, to_hex
from core.merkle.merkle_proofs import MerkleVerifier
from core.schemas.errors import (
    AlreadyInitializedException,
    AlreadyParticipatedException,
    CannotMigrateException,
    ExpiredException,
    InvalidInputException,
    NotYetExpiredException,
    UnauthorizedException,
    VerificationFailedException,
)
from core.schemas.ledger import (
    Config,
    ContractVersion,
    MerkleRootRecord,
    UINT128_MAX,
)
from core.schemas.messages import (
    InitializeRequest,
    OperationResult,
    ParticipateRequest,
    RegisterMerkleRootRequest,
    TransferInstruction,
    UpdateConfigRequest,
    WithdrawRequest,
)
from core.vesting.calculator import calc_claimable_amount
from core.vesting.schedule import validate_distribution_schedule
from distributor.context import ExecutionContext
from distributor.store import LedgerSnapshot, LedgerStore

logger = logging.getLogger(__name__)


CONTRACT_NAME = "merkle-airdrop"
CONTRACT_VERSION = "0.1.0"


def _require_admin(config: Config, ctx: ExecutionContext) -> None:
    if ctx.sender != config.admin:
        logger.warning(f"Rejected admin operation from {ctx.sender}")
        raise UnauthorizedException(sender=ctx.sender)


@dataclass
class ClaimStateMachine:
    """
    Orchestrates Merkle verification and vesting against the ledger.

    Every public method is one transition and runs inside a single
    store transaction.
    """
    store: LedgerStore

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------

    def initialize(self, ctx: ExecutionContext, msg: InitializeRequest) -> OperationResult:
        """Create the Config. One-time."""
        with self.store.transaction() as ledger:
            if ledger.config is not None:
                raise AlreadyInitializedException()

            validate_distribution_schedule(msg.distribution_schedule)
            if not msg.token_reference:
                raise InvalidInputException(
                    "token_reference must not be empty",
                    field_path="token_reference",
                )

            ledger.contract = ContractVersion(contract=CONTRACT_NAME, version=CONTRACT_VERSION)
            ledger.config = Config(
                admin=msg.admin or ctx.sender,
                token_reference=msg.token_reference,
                expiry=msg.expiry,
                distribution_schedule=list(msg.distribution_schedule),
            )

            logger.info(
                f"Initialized airdrop: admin={ledger.config.admin} "
                f"token={msg.token_reference} expiry={msg.expiry} "
                f"segments={len(msg.distribution_schedule)}"
            )
            return OperationResult(
                action="instantiate",
                attributes={"admin": ledger.config.admin},
            )

    def update_config(self, ctx: ExecutionContext, msg: UpdateConfigRequest) -> OperationResult:
        """Admin-only. Replaces any of admin, expiry and schedule that are given."""
        with self.store.transaction() as ledger:
            config = ledger.require_config().model_copy(deep=True)
            _require_admin(config, ctx)

            if msg.distribution_schedule is not None:
                validate_distribution_schedule(msg.distribution_schedule)
            if msg.admin is not None and not msg.admin:
                raise InvalidInputException("admin must not be empty", field_path="admin")

            attributes: dict[str, str] = {}
            if msg.admin is not None:
                config.admin = msg.admin
                attributes["admin"] = msg.admin
            if msg.expiry is not None:
                config.expiry = msg.expiry
                attributes["expiry"] = str(msg.expiry)
            if msg.distribution_schedule is not None:
                config.distribution_schedule = list(msg.distribution_schedule)
                attributes["segments"] = str(len(msg.distribution_schedule))

            ledger.config = config
            logger.info(f"Config updated by {ctx.sender}: {attributes or 'no changes'}")
            return OperationResult(action="update_config", attributes=attributes)

    def register_merkle_root(
        self,
        ctx: ExecutionContext,
        msg: RegisterMerkleRootRequest,
    ) -> OperationResult:
        """Admin-only. Replaces the active root and the commitment it attests."""
        with self.store.transaction() as ledger:
            config = ledger.require_config()
            _require_admin(config, ctx)

            root_hex = to_hex(decode_hash32(msg.merkle_root, field_path="merkle_root"))

            if ledger.merkle_root is not None and ledger.merkle_root.merkle_root != root_hex:
                logger.warning(
                    f"Replacing merkle root {ledger.merkle_root.merkle_root} "
                    f"(commitment {ledger.merkle_root.total_commitment}) with {root_hex}"
                )

            ledger.merkle_root = MerkleRootRecord(
                merkle_root=root_hex,
                total_commitment=msg.total_amount,
            )
            ledger.state.total_commitment = msg.total_amount

            logger.info(f"Registered merkle root {root_hex} for {msg.total_amount}")
            return OperationResult(
                action="register_merkle_root",
                attributes={
                    "merkle_root": root_hex,
                    "total_amount": str(msg.total_amount),
                },
            )

    def withdraw(self, ctx: ExecutionContext, msg: WithdrawRequest) -> OperationResult:
        """
        Admin-only, after expiry. Sends total_assigned - total_released to
        the given recipient. Writes nothing to the ledger, so calling it
        again returns the same amount.
        """
        ledger = self.store.view()
        config = ledger.require_config()
        _require_admin(config, ctx)

        if ctx.now < config.expiry:
            raise NotYetExpiredException(expiry=config.expiry, now=ctx.now)

        total_assigned = ledger.state.total_assigned
        total_released = ledger.state.total_released
        if total_released > total_assigned:
            raise InvalidInputException(
                "Ledger inconsistent: released exceeds assigned",
                details={
                    "total_assigned": total_assigned,
                    "total_released": total_released,
                },
            )

        if not msg.recipient:
            raise InvalidInputException("recipient must not be empty", field_path="recipient")

        balance = total_assigned - total_released
        logger.warning(
            f"Withdraw of {balance} to {msg.recipient} by {ctx.sender}; "
            f"ledger totals are not adjusted"
        )
        return OperationResult(
            action="withdraw",
            attributes={
                "address": ctx.sender,
                "amount": str(balance),
                "recipient": msg.recipient,
            },
            transfer=TransferInstruction(
                token=config.token_reference,
                recipient=msg.recipient,
                amount=balance,
            ),
        )

    def migrate(self, ctx: ExecutionContext) -> OperationResult:
        """Accept only ledgers written by this contract, then restamp the version."""
        with self.store.transaction() as ledger:
            previous = ledger.contract
            if previous is None or previous.contract != CONTRACT_NAME:
                raise CannotMigrateException(
                    previous_contract=previous.contract if previous else "<none>"
                )
            ledger.contract = ContractVersion(contract=CONTRACT_NAME, version=CONTRACT_VERSION)
            return OperationResult(
                action="migrate",
                attributes={"from_version": previous.version, "to_version": CONTRACT_VERSION},
            )

    # ------------------------------------------------------------------
    # Recipient operations
    # ------------------------------------------------------------------

    def participate(self, ctx: ExecutionContext, msg: ParticipateRequest) -> OperationResult:
        """
        Prove (sender, amount) against the active root and record the
        allotment. Write-once per recipient.
        """
        with self.store.transaction() as ledger:
            config = ledger.require_config()
            if ctx.now >= config.expiry:
                raise ExpiredException(expiry=config.expiry, now=ctx.now)

            account = ledger.load_user(ctx.sender)
            if account.has_participated:
                raise AlreadyParticipatedException(
                    user=ctx.sender,
                    assigned_amount=account.assigned_amount or 0,
                )

            if msg.amount == 0:
                raise InvalidInputException("amount must be positive", field_path="amount")

            root = ledger.require_merkle_root()
            proof = MerkleVerifier.decode_proof(msg.proof)
            root_bytes = decode_hash32(root.merkle_root, field_path="merkle_root")

            if not MerkleVerifier.verify((ctx.sender, msg.amount), proof, root_bytes):
                logger.warning(f"Proof for {ctx.sender} ({msg.amount}) does not match root")
                raise VerificationFailedException(
                    details={"user": ctx.sender, "amount": msg.amount},
                )

            new_total = ledger.state.total_assigned + msg.amount
            if new_total > UINT128_MAX:
                raise InvalidInputException("total assigned amount overflows", field_path="amount")
            if new_total > ledger.state.total_commitment:
                logger.warning(
                    f"Total assigned {new_total} exceeds registered commitment "
                    f"{ledger.state.total_commitment}"
                )

            ledger.state.total_assigned = new_total
            account.assigned_amount = msg.amount
            ledger.save_user(account)

            logger.info(f"Participation accepted: {ctx.sender} assigned {msg.amount}")
            return OperationResult(
                action="participate",
                attributes={
                    "user": ctx.sender,
                    "assigned_amount": str(msg.amount),
                },
            )

    def claim(self, ctx: ExecutionContext) -> OperationResult:
        """
        Pay out what has vested since the last claim. A zero amount is a
        valid no-op claim and still yields a transfer instruction.

        The claim time is recorded even for identities that have not
        participated yet, so a later participation vests from that time.
        """
        with self.store.transaction() as ledger:
            config = ledger.require_config()
            account = ledger.load_user(ctx.sender)

            if ctx.now < account.last_claim_time:
                logger.warning(f"Rejected claim by {ctx.sender} at {ctx.now}: time went backwards")
                raise InvalidInputException(
                    f"Claim time {ctx.now} is before the last claim at {account.last_claim_time}",
                    field_path="now",
                    details={"now": ctx.now, "last_claim_time": account.last_claim_time},
                )

            claimable = calc_claimable_amount(
                assigned_amount=account.assigned_amount or 0,
                claimed_amount=account.claimed_amount,
                schedule=config.distribution_schedule,
                last_claim_time=account.last_claim_time,
                now=ctx.now,
            )
            ledger.state.total_released += claimable
            account.claimed_amount += claimable
            account.last_claim_time = ctx.now
            ledger.save_user(account)

            logger.info(f"Claim by {ctx.sender}: {claimable} at {ctx.now}")
            return OperationResult(
                action="claim",
                attributes={
                    "user": ctx.sender,
                    "claimed_amount": str(claimable),
                },
                transfer=TransferInstruction(
                    token=config.token_reference,
                    recipient=ctx.sender,
                    amount=claimable,
                ),
            )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def snapshot(self) -> LedgerSnapshot:
        """Committed ledger for queries."""
        return self.store.view()
