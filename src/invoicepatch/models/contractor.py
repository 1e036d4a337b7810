"""Persisted contractor payroll record."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field

from invoicepatch.models.payroll import PayPeriod


class ContractorPayrollRecord(BaseModel):
    """A contractor's schedule plus the individually queryable fields derived from it.

    ``payroll_schedule`` is stored whole; the remaining fields are snapshots
    taken when the record was last saved.
    """

    contractor_id: str
    start_date: date
    first_period_end: date
    payroll_schedule: list[PayPeriod] = Field(default_factory=list)
    current_period: int = 1
    next_submission_deadline: Optional[date] = None
    next_payment_date: Optional[date] = None
    is_partial_first_period: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: Optional[datetime] = None

    model_config = {"str_strip_whitespace": True}
