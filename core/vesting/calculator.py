"""
Time-based vesting calculator.

Converts an allotment plus a distribution schedule into the amount a
recipient may claim at a given time. Pure: no ledger access.

For each segment that overlaps [last_claim_time, now]
(start <= now and end >= last_claim_time):

    segment_total = assigned * fraction
    instant segment (start == end): contributes segment_total
    linear segment: contributes rate * elapsed, where
        rate    = segment_total / (end - start)
        elapsed = min(end, now) - max(start, last_claim_time)

Once the final segment in the schedule has ended (end <= now) the whole
remaining balance is returned instead of the sum, which absorbs rounding
residue. The final segment is the last one in schedule order, whether or
not it contributed.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from core.schemas.ledger import Segment
from core.vesting.fixed_point import mul_floor, ratio_atomics, to_atomics


@dataclass(frozen=True)
class SegmentContribution:
    """Per-segment breakdown, used by the CLI to explain a result."""
    index: int
    segment_total: int
    elapsed_seconds: int
    amount: int


def segment_contributions(
    assigned_amount: int,
    schedule: Sequence[Segment],
    last_claim_time: int,
    now: int,
) -> tuple[list[SegmentContribution], int]:
    """
    Evaluate every overlapping segment.

    Returns:
        (contributions, last_end_time) where last_end_time is the end of
        the last segment visited
    """
    contributions: list[SegmentContribution] = []
    last_end_time = 0

    for index, segment in enumerate(schedule):
        start_time = segment.start
        end_time = segment.end

        if start_time <= now and end_time >= last_claim_time:
            segment_total = mul_floor(assigned_amount, to_atomics(segment.fraction))

            if start_time == end_time:
                contributions.append(
                    SegmentContribution(index, segment_total, 0, segment_total)
                )
            else:
                elapsed = min(end_time, now) - max(start_time, last_claim_time)
                rate = ratio_atomics(segment_total, end_time - start_time)
                contributions.append(
                    SegmentContribution(
                        index,
                        segment_total,
                        elapsed,
                        mul_floor(elapsed, rate),
                    )
                )

        last_end_time = end_time

    return contributions, last_end_time


def calc_claimable_amount(
    assigned_amount: int,
    claimed_amount: int,
    schedule: Sequence[Segment],
    last_claim_time: int,
    now: int,
) -> int:
    """
    Amount vested but not yet paid out as of `now`.

    Callers must pass now >= last_claim_time.

    Args:
        assigned_amount: Recipient's allotment
        claimed_amount: Amount already paid out
        schedule: Validated distribution schedule
        last_claim_time: Time of the previous claim (0 if none)
        now: Current time

    Returns:
        Claimable amount, never more than assigned_amount - claimed_amount

    Example:
        >>> schedule = [Segment(start=0, end=0, fraction="0.5"),
        ...             Segment(start=100, end=200, fraction="0.5")]
        >>> calc_claimable_amount(1000, 0, schedule, 0, 150)
        750
    """
    remaining = max(assigned_amount - claimed_amount, 0)

    contributions, last_end_time = segment_contributions(
        assigned_amount, schedule, last_claim_time, now
    )

    if last_end_time <= now:
        return remaining

    return min(sum(c.amount for c in contributions), remaining)


@dataclass(frozen=True)
class VestingCalculator:
    """Binds a schedule so repeated queries only pass the per-recipient values."""
    schedule: tuple[Segment, ...]

    @classmethod
    def for_schedule(cls, schedule: Sequence[Segment]) -> "VestingCalculator":
        return cls(schedule=tuple(schedule))

    def claimable(
        self,
        assigned_amount: int,
        claimed_amount: int,
        last_claim_time: int,
        now: int,
    ) -> int:
        return calc_claimable_amount(
            assigned_amount, claimed_amount, self.schedule, last_claim_time, now
        )

    @property
    def fully_vested_at(self) -> int:
        """Time from which the whole remaining balance is claimable."""
        return self.schedule[-1].end if self.schedule else 0
