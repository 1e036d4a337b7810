"""Tests for pay period generation and period lookups."""

from __future__ import annotations

from datetime import date, datetime, timedelta

import pytest

from invoicepatch.calculators.payroll_calc import (
    format_period,
    generate_schedule,
    get_current_period,
    get_upcoming_deadlines,
    parse_date,
    summarize_schedule,
)
from invoicepatch.calculators.period_anchors import ExplicitFirstPeriodEnd
from invoicepatch.core.config import PayrollConfig
from invoicepatch.core.exceptions import ValidationError


class TestParseDate:
    def test_iso_string(self):
        assert parse_date("2024-01-01") == date(2024, 1, 1)

    def test_datetime_truncated(self):
        assert parse_date(datetime(2024, 1, 1, 15, 30)) == date(2024, 1, 1)

    def test_invalid_string_raises(self):
        with pytest.raises(ValidationError, match="Invalid date format") as exc_info:
            parse_date("not-a-date")
        assert exc_info.value.field == "start_date"

    def test_wrong_type_raises(self):
        with pytest.raises(ValidationError):
            parse_date(20240101)


class TestGenerateSchedule:
    def test_three_periods_from_monday(self, schedule):
        ends = [p.end_date for p in schedule.periods]
        assert ends == [date(2024, 1, 14), date(2024, 1, 28), date(2024, 2, 11)]
        assert [p.period_number for p in schedule.periods] == [1, 2, 3]
        assert not schedule.has_partial_first_period

    def test_default_deadlines(self, schedule):
        first = schedule.periods[0]
        assert first.submission_deadline == date(2024, 1, 17)
        assert first.payment_date == date(2024, 1, 24)

    def test_configured_offsets(self):
        config = PayrollConfig(submission_offset_days=2, payment_offset_days=5)
        first = generate_schedule("2024-01-01", 1, config=config).periods[0]
        assert first.submission_deadline == date(2024, 1, 16)
        assert first.payment_date == date(2024, 1, 21)

    def test_periods_are_contiguous(self, schedule):
        for prev, cur in zip(schedule.periods, schedule.periods[1:]):
            assert cur.start_date == prev.end_date + timedelta(days=1)

    def test_full_periods_have_ten_working_days(self, schedule):
        assert all(p.days_in_period == 14 for p in schedule.periods)
        assert all(p.working_days == 10 for p in schedule.periods)

    def test_iso_string_start(self):
        assert generate_schedule("2024-01-01", 3) == generate_schedule(date(2024, 1, 1), 3)

    def test_partial_first_period(self):
        anchor = ExplicitFirstPeriodEnd(date(2024, 1, 9))
        schedule = generate_schedule("2024-01-03", 2, anchor=anchor)
        first, second = schedule.periods
        assert first.is_partial_period
        assert first.days_in_period == 7
        assert first.working_days == 5
        assert second.start_date == date(2024, 1, 10)
        assert second.end_date == date(2024, 1, 23)
        assert not second.is_partial_period
        assert schedule.has_partial_first_period

    def test_single_day_first_period(self):
        anchor = ExplicitFirstPeriodEnd(date(2024, 1, 3))
        first = generate_schedule("2024-01-03", 1, anchor=anchor).periods[0]
        assert first.days_in_period == 1
        assert first.working_days == 1

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_raises(self, count):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule("2024-01-01", count)
        assert exc_info.value.field == "period_count"

    def test_non_integer_count_raises(self):
        with pytest.raises(ValidationError):
            generate_schedule("2024-01-01", "3")

    def test_invalid_start_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule("2024-13-45", 3)
        assert exc_info.value.field == "start_date"

    @pytest.mark.parametrize("end", [date(2023, 12, 31), date(2024, 1, 15)])
    def test_anchor_outside_first_fortnight_raises(self, end):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule("2024-01-01", 3, anchor=ExplicitFirstPeriodEnd(end))
        assert exc_info.value.field == "first_period_end"


class TestCurrentPeriod:
    def test_mid_schedule(self, schedule):
        assert get_current_period(schedule, "2024-01-20").period_number == 2

    @pytest.mark.parametrize("day,number", [("2024-01-14", 1), ("2024-01-15", 2)])
    def test_period_boundaries(self, schedule, day, number):
        assert get_current_period(schedule, day).period_number == number

    def test_outside_schedule_is_none(self, schedule):
        assert get_current_period(schedule, "2023-12-31") is None
        assert get_current_period(schedule, "2024-02-12") is None


class TestUpcomingDeadlines:
    def test_far_future_is_empty(self, schedule):
        assert get_upcoming_deadlines(schedule, 3, as_of="2030-01-01") == []

    def test_window_is_inclusive(self, schedule):
        upcoming = get_upcoming_deadlines(schedule, 14, as_of="2024-01-17")
        assert [p.period_number for p in upcoming] == [1, 2]

    def test_excludes_past_deadlines(self, schedule):
        upcoming = get_upcoming_deadlines(schedule, 13, as_of="2024-01-18")
        assert [p.period_number for p in upcoming] == [2]

    def test_negative_horizon_raises(self, schedule):
        with pytest.raises(ValidationError):
            get_upcoming_deadlines(schedule, -1, as_of="2024-01-01")


class TestSummarizeSchedule:
    def test_summary_fields(self, schedule):
        summary = summarize_schedule(schedule, as_of="2024-01-20", horizon_days=60)
        assert summary.total_periods == 3
        assert summary.current_period.period_number == 2
        assert summary.next_submission == date(2024, 1, 31)
        assert summary.next_payment == date(2024, 2, 7)
        assert [p.period_number for p in summary.upcoming_deadlines] == [2, 3]

    def test_outside_schedule_has_no_current(self, schedule):
        summary = summarize_schedule(schedule, as_of="2025-01-01")
        assert summary.current_period is None
        assert summary.next_submission is None
        assert summary.upcoming_deadlines == []


class TestDateRangeLimits:
    def test_too_many_periods_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule(date(2024, 1, 1), 10**6)
        assert exc_info.value.field == "period_count"

    def test_huge_period_count_raises(self):
        with pytest.raises(ValidationError):
            generate_schedule(date(2024, 1, 1), 10**12)

    def test_start_near_end_of_calendar_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule("9999-06-01", 26)
        assert exc_info.value.field == "period_count"

    def test_first_period_past_end_of_calendar_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            generate_schedule("9999-12-25", 1)
        assert exc_info.value.field == "start_date"

    def test_last_representable_schedule(self):
        schedule = generate_schedule("9999-12-01", 1)
        assert schedule.periods[0].payment_date == date(9999, 12, 24)

    @pytest.mark.parametrize("horizon", [10**9, 10**20])
    def test_huge_horizon_covers_rest_of_schedule(self, schedule, horizon):
        upcoming = get_upcoming_deadlines(schedule, horizon, as_of="2024-01-18")
        assert [p.period_number for p in upcoming] == [2, 3]

    def test_horizon_to_end_of_calendar(self, schedule):
        assert get_upcoming_deadlines(schedule, 10, as_of=date.max) == []


class TestPaymentAdjustment:
    def test_off_by_default(self):
        # period 1 of a 2024-06-14 start: ends 06-27, submit 06-30, paid 07-07 (Sunday)
        first = generate_schedule("2024-06-14", 1).periods[0]
        assert first.payment_date == date(2024, 7, 7)

    def test_weekend_payment_moves_to_monday(self):
        config = PayrollConfig(adjust_payment_dates=True)
        first = generate_schedule("2024-06-14", 1, config=config).periods[0]
        assert first.payment_date == date(2024, 7, 8)

    def test_canada_day_payment_moves_to_next_business_day(self):
        # ends 2024-06-21, submit 06-24, paid Monday 07-01
        config = PayrollConfig(adjust_payment_dates=True)
        first = generate_schedule("2024-06-08", 1, config=config).periods[0]
        assert first.submission_deadline == date(2024, 6, 24)
        assert first.payment_date == date(2024, 7, 2)

    def test_christmas_and_boxing_day_skipped(self):
        # ends 2024-12-15, submit 12-18, paid 12-25
        config = PayrollConfig(adjust_payment_dates=True)
        first = generate_schedule("2024-12-02", 1, config=config).periods[0]
        assert first.payment_date == date(2024, 12, 27)

    def test_submission_deadline_is_not_adjusted(self):
        config = PayrollConfig(adjust_payment_dates=True, submission_offset_days=6)
        first = generate_schedule("2024-06-01", 1, config=config).periods[0]
        assert first.submission_deadline == date(2024, 6, 20)


class TestFormatPeriod:
    def test_full_period(self, schedule):
        assert format_period(schedule.periods[0]) == (
            "Period 1: 2024-01-01 - 2024-01-14 (14 days), "
            "submit by 2024-01-17, payment 2024-01-24"
        )

    def test_partial_period_is_marked(self):
        anchor = ExplicitFirstPeriodEnd(date(2024, 1, 9))
        first = generate_schedule("2024-01-03", 1, anchor=anchor).periods[0]
        assert format_period(first).endswith("(7 days), submit by 2024-01-12, payment 2024-01-19 (partial period)")
