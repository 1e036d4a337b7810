"""Pay period, schedule and summary models."""

from __future__ import annotations

import math
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field, computed_field, model_validator

FULL_PERIOD_DAYS = 14


class PayPeriod(BaseModel):
    """One bi-weekly billing window with its deadlines."""

    period_number: int = Field(ge=1)
    start_date: date
    end_date: date
    is_partial_period: bool = False
    days_in_period: int = Field(ge=1, le=FULL_PERIOD_DAYS)
    submission_deadline: date
    payment_date: date

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_ordering(self) -> PayPeriod:
        if self.end_date < self.start_date:
            raise ValueError("end_date precedes start_date")
        if not self.end_date < self.submission_deadline < self.payment_date:
            raise ValueError("deadlines must follow the period end in order")
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def working_days(self) -> int:
        """Estimated Mon-Fri working days, assuming a 5-of-7 week."""
        return math.ceil(self.days_in_period * 5 / 7)

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class PayrollSchedule(BaseModel):
    """Ordered, contiguous pay periods generated from a contract start date."""

    contract_start_date: date
    first_period_end: date
    periods: tuple[PayPeriod, ...]

    model_config = {"frozen": True}

    @property
    def has_partial_first_period(self) -> bool:
        return bool(self.periods) and self.periods[0].is_partial_period

    @property
    def end_date(self) -> date:
        return self.periods[-1].end_date


class ScheduleSummary(BaseModel):
    """Headline facts about a schedule as of a given day."""

    as_of: date
    total_periods: int
    contract_start_date: date
    first_period_end: date
    has_partial_first_period: bool
    current_period: Optional[PayPeriod] = None
    next_submission: Optional[date] = None
    next_payment: Optional[date] = None
    upcoming_deadlines: list[PayPeriod] = Field(default_factory=list)
