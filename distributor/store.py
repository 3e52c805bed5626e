"""
Ledger Store

Holds the airdrop ledger and applies each operation all-or-nothing.

The committed snapshot is only replaced when a transaction block exits
cleanly; an exception anywhere inside the block leaves both memory and
disk untouched. When a path is configured, the ledger is written as
canonical JSON via a temp file + os.replace.
"""

from __future__ import annotations

import logging
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from core.schemas.canonical import dumps_canonical, loads_canonical
from core.schemas.errors import NotInitializedException, RootNotRegisteredException
from core.schemas.ledger import (
    Config,
    ContractVersion,
    GlobalState,
    MerkleRootRecord,
    UserAccount,
)

logger = logging.getLogger(__name__)


class LedgerStoreError(Exception):
    """Error reading or writing the persisted ledger."""
    pass


class LedgerSnapshot(BaseModel):
    """
    Every persisted record: one Config, one GlobalState, one active root
    and the recipient accounts keyed by identity.
    """

    model_config = ConfigDict(extra="forbid")

    contract: ContractVersion | None = None
    config: Config | None = None
    state: GlobalState = Field(default_factory=GlobalState)
    merkle_root: MerkleRootRecord | None = None
    users: dict[str, UserAccount] = Field(default_factory=dict)

    def require_config(self) -> Config:
        if self.config is None:
            raise NotInitializedException()
        return self.config

    def require_merkle_root(self) -> MerkleRootRecord:
        if self.merkle_root is None:
            raise RootNotRegisteredException()
        return self.merkle_root

    def load_user(self, identity: str) -> UserAccount:
        """Existing account, or a fresh zero-valued one that is not yet stored."""
        account = self.users.get(identity)
        if account is None:
            return UserAccount(user=identity)
        return account.model_copy()

    def save_user(self, account: UserAccount) -> None:
        self.users[account.user] = account


class LedgerStore:
    """
    Owner of the committed ledger snapshot.

    Usage:
        store = LedgerStore("ledger.json")
        with store.transaction() as ledger:
            ledger.state.total_assigned += 10
        # committed (and flushed) here; an exception would discard it
    """

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._lock = threading.RLock()
        self._snapshot = self._read() if self.path and self.path.exists() else LedgerSnapshot()

    def view(self) -> LedgerSnapshot:
        """A detached copy of the committed ledger for read-only queries."""
        with self._lock:
            return self._snapshot.model_copy(deep=True)

    @contextmanager
    def transaction(self) -> Iterator[LedgerSnapshot]:
        """
        Yield a working copy of the ledger; commit it only on clean exit.

        Transactions are serialized, so concurrent callers observe one
        operation at a time.
        """
        with self._lock:
            working = self._snapshot.model_copy(deep=True)
            yield working
            self._commit(working)

    def _commit(self, working: LedgerSnapshot) -> None:
        if self.path is not None:
            self._write(working)
        self._snapshot = working

    def _read(self) -> LedgerSnapshot:
        assert self.path is not None
        try:
            data = loads_canonical(self.path.read_text(encoding="utf-8"))
            snapshot = LedgerSnapshot.model_validate(data)
        except (OSError, ValueError) as e:
            raise LedgerStoreError(f"Failed to load ledger from {self.path}: {e}") from e
        logger.debug(f"Loaded ledger from {self.path} ({len(snapshot.users)} accounts)")
        return snapshot

    def _write(self, snapshot: LedgerSnapshot) -> None:
        assert self.path is not None
        content = dumps_canonical(snapshot)
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            dir=self.path.parent,
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
            os.replace(tmp_name, self.path)
        except OSError as e:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise LedgerStoreError(f"Failed to write ledger to {self.path}: {e}") from e
