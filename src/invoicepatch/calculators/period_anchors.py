"""Period alignment policies: where does pay period 1 end?

Each policy is a callable satisfying ``PeriodAnchor``. The generator checks
that the returned end date leaves period 1 between 1 and 14 days long.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

from invoicepatch.core.config import PayrollConfig
from invoicepatch.core.protocols import PeriodAnchor
from invoicepatch.models.payroll import FULL_PERIOD_DAYS


class FullFirstPeriod:
    """Period 1 is a full 14 days from the contract start; nothing is partial."""

    def __call__(self, start_date: date) -> date:
        return start_date + timedelta(days=FULL_PERIOD_DAYS - 1)

    def __repr__(self) -> str:
        return "FullFirstPeriod()"


@dataclass(frozen=True)
class FixedGridAnchor:
    """Align periods to a 14-day grid passing through ``reference_date``.

    A start date off the grid gets a short first period ending the day
    before the next grid boundary. Reference dates after the start work too.
    """

    reference_date: date

    def __call__(self, start_date: date) -> date:
        offset = (start_date - self.reference_date).days % FULL_PERIOD_DAYS
        return start_date + timedelta(days=FULL_PERIOD_DAYS - offset - 1)


THURSDAY = 3


@dataclass(frozen=True)
class WeekdayEndAnchor:
    """Periods end on a fixed weekday (Thursday unless told otherwise).

    A start in the four days up to and including the end weekday closes on
    the next such weekday after the start, so a Monday start ends that
    Thursday and a Thursday start runs to the following Thursday. A start in
    the three days after the end weekday is folded into the next cycle and
    runs to the second end weekday, at most 14 days.
    """

    weekday: int = THURSDAY

    def __post_init__(self) -> None:
        if not 0 <= self.weekday <= 6:
            raise ValueError(f"weekday must be 0 (Monday) to 6 (Sunday), got {self.weekday}")

    def __call__(self, start_date: date) -> date:
        days = (self.weekday - start_date.weekday()) % 7
        if days == 0:
            days = 7
        elif days > 3:
            days += 7
        return start_date + timedelta(days=days)


@dataclass(frozen=True)
class ExplicitFirstPeriodEnd:
    """Use a first-period end date supplied by the caller (e.g. a payroll cut-off)."""

    end_date: date

    def __call__(self, start_date: date) -> date:
        return self.end_date


def anchor_from_config(config: PayrollConfig) -> PeriodAnchor:
    if config.anchor == "grid":
        return FixedGridAnchor(config.grid_reference_date)
    if config.anchor == "weekday":
        return WeekdayEndAnchor(config.period_end_weekday)
    return FullFirstPeriod()
