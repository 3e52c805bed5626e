"""
Distribution Schedule Unit Tests
Tests for core/vesting/schedule.py and the Segment model

Tests:
- valid schedules are accepted (adjacent segments allowed)
- each invariant is rejected with InvalidScheduleException
- the first violation is the one reported
- non-raising check variant returns CheckResult
"""
from decimal import Decimal

import pytest
from pydantic import ValidationError

from core.schemas.errors import ErrorCodes, InvalidInputException, InvalidScheduleException
from core.schemas.ledger import Segment
from core.schemas.verification import CheckResult
from core.vesting.schedule import (
    check_distribution_schedule,
    is_valid_schedule,
    validate_distribution_schedule,
)

from fixtures.common import make_schedule, make_segment, make_uneven_schedule


class TestSegmentModel:
    """Tests for Segment parsing."""

    def test_positional_form(self):
        """[start, end, fraction] parses like the mapping form."""
        segment = Segment.model_validate([100, 200, "0.5"])

        assert segment == Segment(start=100, end=200, fraction=Decimal("0.5"))
        assert segment.as_tuple() == (100, 200, "0.5")

    def test_positional_wrong_length(self):
        """Triples only."""
        with pytest.raises(ValidationError):
            Segment.model_validate([100, 200])

    def test_negative_time_rejected(self):
        """Timestamps are unsigned."""
        with pytest.raises(ValidationError):
            Segment(start=-1, end=0, fraction=Decimal("1"))

    def test_is_instant(self):
        assert make_segment(5, 5, "1").is_instant
        assert not make_segment(5, 6, "1").is_instant


class TestValidSchedules:
    """Schedules that must be accepted."""

    def test_default_schedule(self):
        validate_distribution_schedule(make_schedule())

    def test_adjacent_segments(self):
        """start == previous end is not an overlap."""
        validate_distribution_schedule(make_uneven_schedule())

    def test_single_full_segment(self):
        validate_distribution_schedule([make_segment(0, 100, "1")])

    def test_eighteen_decimal_places(self):
        """Exactly 18 places is the limit, not beyond it."""
        validate_distribution_schedule([
            make_segment(0, 0, "0.000000000000000001"),
            make_segment(1, 1, "0.999999999999999999"),
        ])


class TestInvalidSchedules:
    """Each invariant violation is rejected."""

    def test_empty(self):
        with pytest.raises(InvalidScheduleException, match="empty"):
            validate_distribution_schedule([])

    def test_start_after_end(self):
        with pytest.raises(InvalidScheduleException, match="start <= end") as exc_info:
            validate_distribution_schedule([make_segment(200, 100, "1")])

        assert exc_info.value.details["segment_index"] == 0

    @pytest.mark.parametrize("fraction", ["0", "-0.5"])
    def test_non_positive_fraction(self, fraction):
        with pytest.raises(InvalidScheduleException, match="> 0"):
            validate_distribution_schedule([
                make_segment(0, 0, fraction),
                make_segment(1, 1, "1"),
            ])

    def test_fraction_above_one(self):
        with pytest.raises(InvalidScheduleException, match="<= 1"):
            validate_distribution_schedule([
                make_segment(0, 0, "1.5"),
                make_segment(1, 1, "0.5"),
            ])

    def test_too_many_decimal_places(self):
        with pytest.raises(InvalidScheduleException, match="decimal places"):
            validate_distribution_schedule([
                make_segment(0, 0, "0.1234567890123456789"),
            ])

    def test_overlap(self):
        with pytest.raises(InvalidScheduleException, match="previous") as exc_info:
            validate_distribution_schedule([
                make_segment(0, 100, "0.5"),
                make_segment(50, 150, "0.5"),
            ])

        assert exc_info.value.details["segment_index"] == 1

    def test_out_of_order(self):
        with pytest.raises(InvalidScheduleException):
            validate_distribution_schedule([
                make_segment(100, 200, "0.5"),
                make_segment(0, 0, "0.5"),
            ])

    @pytest.mark.parametrize("fractions", [("0.5", "0.4"), ("0.5", "0.6")])
    def test_sum_not_one(self, fractions):
        with pytest.raises(InvalidScheduleException, match="Sum of fractions") as exc_info:
            validate_distribution_schedule([
                make_segment(0, 0, fractions[0]),
                make_segment(1, 1, fractions[1]),
            ])

        expected = Decimal(fractions[0]) + Decimal(fractions[1])
        assert Decimal(exc_info.value.details["sum"]) == expected

    def test_first_violation_wins(self):
        """start > end is reported before the zero fraction on the same segment."""
        with pytest.raises(InvalidScheduleException, match="start <= end"):
            validate_distribution_schedule([make_segment(10, 5, "0")])

    def test_is_invalid_input(self):
        """Schedule errors are a kind of invalid input."""
        with pytest.raises(InvalidInputException) as exc_info:
            validate_distribution_schedule([])

        assert exc_info.value.code == ErrorCodes.INVALID_SCHEDULE
        assert exc_info.value.details["field_path"] == "distribution_schedule"


class TestCheckDistributionSchedule:
    """Tests for the non-raising variant."""

    def test_passed(self, assert_check_passed):
        check = check_distribution_schedule(make_schedule())

        assert_check_passed(check, "distribution_schedule")
        assert check.details["segments"] == 2
        assert is_valid_schedule(make_schedule())

    def test_failed(self, assert_check_failed):
        check = check_distribution_schedule([])

        assert_check_failed(check, "distribution_schedule")
        assert check.is_error
        assert not is_valid_schedule([])

    def test_severity_follows_outcome(self):
        assert check_distribution_schedule(make_schedule()).severity == "info"
        assert check_distribution_schedule([]).severity == "error"

    def test_no_warning_level(self):
        with pytest.raises(ValidationError):
            CheckResult(check_id="distribution_schedule", ok=False, severity="warn", message="x")
