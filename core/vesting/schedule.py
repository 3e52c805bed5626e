"""
Distribution schedule validation.

Checked at configuration time (initialize and update_config), never when
vesting is computed. The first violation wins:

1. schedule is non-empty
2. each segment has start <= end
3. each fraction is > 0, <= 1, with at most 18 decimal places
4. each start >= previous segment's end
5. fractions sum to exactly 1
"""
from __future__ import annotations

import logging
from typing import Sequence

from core.schemas.errors import InvalidScheduleException
from core.schemas.ledger import Segment
from core.schemas.verification import CheckResult
from core.vesting.fixed_point import ONE, from_atomics, to_atomics

logger = logging.getLogger(__name__)

CHECK_ID = "distribution_schedule"


def validate_distribution_schedule(schedule: Sequence[Segment]) -> None:
    """
    Validate a schedule, raising on the first violation.

    Raises:
        InvalidScheduleException: Describing the first violated invariant
    """
    if len(schedule) == 0:
        raise InvalidScheduleException("Invalid schedule. schedule is empty.")

    sum_of_atomics = 0
    last_end = 0

    for index, segment in enumerate(schedule):
        start, end, fraction = segment.start, segment.end, segment.fraction

        if start > end:
            raise InvalidScheduleException(
                f"Invalid schedule. must be start <= end "
                f"(start: {start}, end: {end}, fraction: {fraction})",
                segment_index=index,
            )

        try:
            atomics = to_atomics(fraction)
        except ValueError as e:
            raise InvalidScheduleException(
                f"Invalid schedule. {e}",
                segment_index=index,
            ) from e

        if atomics <= 0:
            raise InvalidScheduleException(
                f"Invalid schedule. fraction must be > 0 "
                f"(start: {start}, end: {end}, fraction: {fraction})",
                segment_index=index,
            )

        if atomics > ONE:
            raise InvalidScheduleException(
                f"Invalid schedule. fraction must be <= 1 "
                f"(start: {start}, end: {end}, fraction: {fraction})",
                segment_index=index,
            )

        if start < last_end:
            raise InvalidScheduleException(
                f"Invalid schedule. schedule's start >= previous schedule's end "
                f"(previous end: {last_end}, start: {start})",
                segment_index=index,
            )

        last_end = end
        sum_of_atomics += atomics

    if sum_of_atomics != ONE:
        raise InvalidScheduleException(
            f"Sum of fractions must be One(1) (sum: {from_atomics(sum_of_atomics)})",
            details={"sum": str(from_atomics(sum_of_atomics))},
        )


def check_distribution_schedule(schedule: Sequence[Segment]) -> CheckResult:
    """Non-raising variant for reporting."""
    try:
        validate_distribution_schedule(schedule)
    except InvalidScheduleException as e:
        logger.debug(f"Schedule rejected: {e.message}")
        return CheckResult.failed(CHECK_ID, e.message, details=e.details)
    return CheckResult.passed(
        CHECK_ID,
        message=f"Schedule with {len(schedule)} segment(s) is valid",
        details={"segments": len(schedule)},
    )


def is_valid_schedule(schedule: Sequence[Segment]) -> bool:
    return check_distribution_schedule(schedule).ok
