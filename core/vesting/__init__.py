"""
Vesting

Schedule validation and the time-based claimable-amount calculator.

Usage:
    from core.vesting import validate_distribution_schedule, calc_claimable_amount

    validate_distribution_schedule(schedule)
    amount = calc_claimable_amount(assigned, claimed, schedule, last_claim_time, now)
"""
from .calculator import (
    SegmentContribution,
    VestingCalculator,
    calc_claimable_amount,
    segment_contributions,
)
from .fixed_point import DECIMAL_PLACES, from_atomics, to_atomics
from .schedule import (
    check_distribution_schedule,
    is_valid_schedule,
    validate_distribution_schedule,
)

__all__ = [
    "DECIMAL_PLACES",
    "SegmentContribution",
    "VestingCalculator",
    "calc_claimable_amount",
    "check_distribution_schedule",
    "from_atomics",
    "is_valid_schedule",
    "segment_contributions",
    "to_atomics",
    "validate_distribution_schedule",
]
