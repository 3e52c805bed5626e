"""
Execution Context

Who is calling and at what time. Supplied by the host for every
operation; the engine never reads the clock itself.
"""

from __future__ import annotations

import time
from dataclasses import dataclass


@dataclass(frozen=True)
class ExecutionContext:
    sender: str
    now: int

    def __post_init__(self) -> None:
        if not self.sender:
            raise ValueError("sender must not be empty")
        if self.now < 0:
            raise ValueError(f"now must be non-negative, got {self.now}")

    @classmethod
    def at_current_time(cls, sender: str) -> "ExecutionContext":
        return cls(sender=sender, now=int(time.time()))
