"""Bi-weekly payroll schedule generation and period lookups.

A schedule is regenerated from scratch on every call and never mutated;
"advancing" to a new current period means asking ``get_current_period``
with a later date.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from invoicepatch.calculators.pay_dates import adjust_payment_date
from invoicepatch.calculators.period_anchors import anchor_from_config
from invoicepatch.core.config import PayrollConfig
from invoicepatch.core.exceptions import ValidationError
from invoicepatch.core.protocols import PeriodAnchor
from invoicepatch.core.types import DateLike
from invoicepatch.models.payroll import (
    FULL_PERIOD_DAYS,
    PayPeriod,
    PayrollSchedule,
    ScheduleSummary,
)

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)
FULL_SPAN = timedelta(days=FULL_PERIOD_DAYS - 1)


def parse_date(value: DateLike | datetime, field: str = "start_date") -> date:
    """Accept a date, a datetime or an ISO ``YYYY-MM-DD`` string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise ValidationError(f"Invalid date format: {value!r}", field=field) from exc
    raise ValidationError(f"Expected a date, got {type(value).__name__}", field=field)


def _check_positive_int(value: object, field: str, *, allow_zero: bool = False) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"must be an integer, got {value!r}", field=field)
    if value < 0 or (value == 0 and not allow_zero):
        raise ValidationError(f"must be {'non-negative' if allow_zero else 'positive'}", field=field)
    return value


def _build_period(
    number: int, start: date, end: date, partial: bool, config: PayrollConfig
) -> PayPeriod:
    submission = end + timedelta(days=config.submission_offset_days)
    payment = submission + timedelta(days=config.payment_offset_days)
    if config.adjust_payment_dates:
        payment = adjust_payment_date(payment)
    return PayPeriod(
        period_number=number,
        start_date=start,
        end_date=end,
        is_partial_period=partial,
        days_in_period=(end - start).days + 1,
        submission_deadline=submission,
        payment_date=payment,
    )


def generate_schedule(
    start_date: DateLike,
    period_count: int,
    *,
    anchor: Optional[PeriodAnchor] = None,
    config: Optional[PayrollConfig] = None,
) -> PayrollSchedule:
    """Partition time from ``start_date`` into ``period_count`` contiguous periods.

    Period 1 ends where ``anchor`` says (default: configured policy) and is
    partial when shorter than 14 days. Periods 2..n are full 14-day periods.

    Raises:
        ValidationError: unparseable start date, non-positive period count,
            an anchor that puts period 1 outside 1..14 days, or a schedule
            whose dates would run past ``date.max``.
    """
    if config is None:
        config = PayrollConfig()
    start = parse_date(start_date)
    count = _check_positive_int(period_count, "period_count")
    if anchor is None:
        anchor = anchor_from_config(config)

    try:
        latest_end = start + FULL_SPAN
        first_end = parse_date(anchor(start), field="first_period_end")
    except OverflowError as exc:
        raise ValidationError(
            f"first period from {start.isoformat()} ends past {date.max.isoformat()}",
            field="start_date",
        ) from exc
    if not start <= first_end <= latest_end:
        raise ValidationError(
            f"{first_end.isoformat()} must fall within 14 days of {start.isoformat()}",
            field="first_period_end",
        )

    try:
        last_end = first_end + timedelta(days=FULL_PERIOD_DAYS * (count - 1))
        if (date.max - last_end).days < config.submission_offset_days + config.payment_offset_days:
            raise OverflowError("last payment date out of range")

        periods = [_build_period(1, start, first_end, first_end < latest_end, config)]
        period_start = first_end + ONE_DAY
        for number in range(2, count + 1):
            period_end = period_start + FULL_SPAN
            periods.append(_build_period(number, period_start, period_end, False, config))
            period_start = period_end + ONE_DAY
    except OverflowError as exc:
        raise ValidationError(
            f"{count} periods from {start.isoformat()} run past {date.max.isoformat()}",
            field="period_count",
        ) from exc

    logger.debug(
        "Generated %d pay periods from %s (first period %d days, anchor=%r)",
        count, start, periods[0].days_in_period, anchor,
    )
    return PayrollSchedule(
        contract_start_date=start,
        first_period_end=first_end,
        periods=tuple(periods),
    )


def get_current_period(
    schedule: PayrollSchedule, as_of: Optional[DateLike] = None
) -> Optional[PayPeriod]:
    """Period containing ``as_of`` (default today), or None outside the schedule."""
    day = date.today() if as_of is None else parse_date(as_of, field="as_of")
    for period in schedule.periods:
        if period.contains(day):
            return period
    return None


def get_upcoming_deadlines(
    schedule: PayrollSchedule,
    horizon_days: int,
    as_of: Optional[DateLike] = None,
) -> list[PayPeriod]:
    """Periods whose submission deadline falls within ``[as_of, as_of + horizon_days]``."""
    horizon = _check_positive_int(horizon_days, "horizon_days", allow_zero=True)
    day = date.today() if as_of is None else parse_date(as_of, field="as_of")
    try:
        until = day + timedelta(days=horizon)
    except OverflowError:
        until = date.max
    return [p for p in schedule.periods if day <= p.submission_deadline <= until]


def summarize_schedule(
    schedule: PayrollSchedule,
    *,
    as_of: Optional[DateLike] = None,
    horizon_days: int = 60,
) -> ScheduleSummary:
    day = date.today() if as_of is None else parse_date(as_of, field="as_of")
    current = get_current_period(schedule, day)
    return ScheduleSummary(
        as_of=day,
        total_periods=len(schedule.periods),
        contract_start_date=schedule.contract_start_date,
        first_period_end=schedule.first_period_end,
        has_partial_first_period=schedule.has_partial_first_period,
        current_period=current,
        next_submission=current.submission_deadline if current else None,
        next_payment=current.payment_date if current else None,
        upcoming_deadlines=get_upcoming_deadlines(schedule, horizon_days, day),
    )


def format_period(period: PayPeriod) -> str:
    """One-line rendering, e.g. ``Period 1: 2024-01-01 - 2024-01-14 (14 days) ...``."""
    text = (
        f"Period {period.period_number}: {period.start_date.isoformat()} - "
        f"{period.end_date.isoformat()} ({period.days_in_period} days), "
        f"submit by {period.submission_deadline.isoformat()}, "
        f"payment {period.payment_date.isoformat()}"
    )
    return f"{text} (partial period)" if period.is_partial_period else text
