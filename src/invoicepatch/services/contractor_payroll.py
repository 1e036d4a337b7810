"""Contractor payroll enrolment: build a schedule, derive its headline fields, persist it."""

from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Any, Optional

from invoicepatch.calculators.payroll_calc import (
    generate_schedule,
    get_current_period,
    parse_date,
)
from invoicepatch.calculators.period_anchors import ExplicitFirstPeriodEnd
from invoicepatch.core.config import AppSettings
from invoicepatch.core.types import ContractorId, DateLike
from invoicepatch.models.contractor import ContractorPayrollRecord
from invoicepatch.models.payroll import PayrollSchedule
from invoicepatch.persistence.payroll_repository import PayrollRecordRepository

logger = logging.getLogger(__name__)


class ContractorPayrollService:
    """Stores each contractor's schedule as an immutable blob plus queryable snapshots.

    Settings and repository are injected at construction time.
    """

    def __init__(
        self,
        *,
        settings: AppSettings,
        repository: PayrollRecordRepository,
    ) -> None:
        self._settings = settings
        self._repo = repository

    def enroll(
        self,
        contractor_id: ContractorId,
        start_date: DateLike,
        period_count: Optional[int] = None,
        *,
        first_period_end: Optional[DateLike] = None,
        as_of: Optional[DateLike] = None,
    ) -> ContractorPayrollRecord:
        """Generate and save a new schedule, replacing any existing record."""
        anchor = None
        if first_period_end is not None:
            anchor = ExplicitFirstPeriodEnd(parse_date(first_period_end, field="first_period_end"))
        schedule = generate_schedule(
            start_date,
            period_count if period_count is not None else self._settings.payroll.default_period_count,
            anchor=anchor,
            config=self._settings.payroll,
        )
        record = ContractorPayrollRecord(
            contractor_id=contractor_id,
            start_date=schedule.contract_start_date,
            first_period_end=schedule.first_period_end,
            payroll_schedule=list(schedule.periods),
            is_partial_first_period=schedule.has_partial_first_period,
            **self._snapshot(schedule, as_of),
        )
        if self._repo.exists(contractor_id):
            logger.warning("Replacing existing payroll record for contractor %s", contractor_id)
        logger.info("Enrolled contractor %s starting %s", contractor_id, record.start_date)
        return self._repo.save(record)

    def get_record(self, contractor_id: ContractorId) -> ContractorPayrollRecord:
        return self._repo.get(contractor_id)

    def refresh(
        self, contractor_id: ContractorId, as_of: Optional[DateLike] = None
    ) -> ContractorPayrollRecord:
        """Re-derive the current period and next deadlines from the stored schedule."""
        record = self._repo.get(contractor_id)
        updated = record.model_copy(
            update={
                **self._snapshot(self.schedule_of(record), as_of),
                "updated_at": datetime.now(timezone.utc),
            }
        )
        return self._repo.save(updated)

    @staticmethod
    def schedule_of(record: ContractorPayrollRecord) -> PayrollSchedule:
        return PayrollSchedule(
            contract_start_date=record.start_date,
            first_period_end=record.first_period_end,
            periods=tuple(record.payroll_schedule),
        )

    @staticmethod
    def _snapshot(schedule: PayrollSchedule, as_of: Optional[DateLike]) -> dict[str, Any]:
        day = date.today() if as_of is None else parse_date(as_of, field="as_of")
        current = get_current_period(schedule, day)
        if current is None:
            logger.warning(
                "%s falls outside schedule %s..%s",
                day, schedule.contract_start_date, schedule.end_date,
            )
        return {
            "current_period": current.period_number if current else 1,
            "next_submission_deadline": current.submission_deadline if current else None,
            "next_payment_date": current.payment_date if current else None,
        }

    async def health_check(self) -> dict[str, Any]:
        return {
            "service": self.__class__.__name__,
            "status": "healthy",
            "environment": self._settings.environment,
        }
