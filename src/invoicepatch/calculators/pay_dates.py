"""Business-day adjustment for payment dates.

Only the fixed-date federal holidays are known here; moveable holidays
(Good Friday, Labour Day, ...) are not.
"""

from __future__ import annotations

from datetime import date, timedelta

# (month, day)
STATUTORY_HOLIDAYS: dict[tuple[int, int], str] = {
    (1, 1): "New Year's Day",
    (7, 1): "Canada Day",
    (12, 25): "Christmas Day",
    (12, 26): "Boxing Day",
}

SATURDAY = 5


def is_statutory_holiday(day: date) -> bool:
    return (day.month, day.day) in STATUTORY_HOLIDAYS


def is_business_day(day: date) -> bool:
    return day.weekday() < SATURDAY and not is_statutory_holiday(day)


def adjust_payment_date(day: date) -> date:
    """Roll ``day`` forward to the first business day on or after it.

    Raises:
        OverflowError: no business day remains before ``date.max``.
    """
    while not is_business_day(day):
        day += timedelta(days=1)
    return day
