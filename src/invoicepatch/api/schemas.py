"""Request bodies for the HTTP API."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from invoicepatch.models.tax import DailyWorkEntry

MAX_PERIODS = 520  # 20 years of bi-weekly periods


class PayrollCalculateRequest(BaseModel):
    contract_start_date: str
    number_of_periods: int = Field(default=26, le=MAX_PERIODS)
    first_period_end: Optional[str] = None
    as_of: Optional[str] = None
    horizon_days: Optional[int] = None


class EnrollRequest(BaseModel):
    start_date: str
    number_of_periods: Optional[int] = Field(default=None, le=MAX_PERIODS)
    first_period_end: Optional[str] = None
    as_of: Optional[str] = None


class RefreshRequest(BaseModel):
    as_of: Optional[str] = None


class DailyTaxRequest(DailyWorkEntry):
    """A day's work fields plus the total the client computed, for cross-checking."""

    client_grand_total: Optional[Decimal] = None


class WeeklyTaxRequest(BaseModel):
    daily_entries: list[DailyWorkEntry] = Field(default_factory=list)
    week_start_date: Optional[date] = None
    week_end_date: Optional[date] = None
