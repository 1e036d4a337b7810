"""Payroll schedule endpoints: ad-hoc calculation and contractor enrolment."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from invoicepatch.api.dependencies import PayrollServiceDep, SettingsDep
from invoicepatch.api.schemas import EnrollRequest, PayrollCalculateRequest, RefreshRequest
from invoicepatch.calculators.payroll_calc import generate_schedule, parse_date, summarize_schedule
from invoicepatch.calculators.period_anchors import ExplicitFirstPeriodEnd
from invoicepatch.core.types import JsonDict

logger = logging.getLogger(__name__)

router = APIRouter(tags=["payroll"])


@router.post("/calculate")
async def calculate_payroll(body: PayrollCalculateRequest, settings: SettingsDep) -> JsonDict:
    """Return a schedule with its current period and deadlines in the horizon."""
    anchor = None
    if body.first_period_end is not None:
        anchor = ExplicitFirstPeriodEnd(parse_date(body.first_period_end, field="first_period_end"))
    schedule = generate_schedule(
        body.contract_start_date,
        body.number_of_periods,
        anchor=anchor,
        config=settings.payroll,
    )
    horizon = (
        body.horizon_days if body.horizon_days is not None
        else settings.payroll.upcoming_horizon_days
    )
    summary = summarize_schedule(schedule, as_of=body.as_of, horizon_days=horizon)
    logger.info(
        "Calculated %d pay periods from %s", len(schedule.periods), schedule.contract_start_date
    )
    return {
        "success": True,
        "data": {
            "schedule": schedule.model_dump(mode="json"),
            "current_period": (
                summary.current_period.model_dump(mode="json") if summary.current_period else None
            ),
            "upcoming_deadlines": [p.model_dump(mode="json") for p in summary.upcoming_deadlines],
            "summary": summary.model_dump(
                mode="json", exclude={"current_period", "upcoming_deadlines"}
            ),
        },
    }


@router.post("/contractors/{contractor_id}")
async def enroll_contractor(
    contractor_id: str, body: EnrollRequest, service: PayrollServiceDep
) -> JsonDict:
    record = service.enroll(
        contractor_id,
        body.start_date,
        body.number_of_periods,
        first_period_end=body.first_period_end,
        as_of=body.as_of,
    )
    return {"success": True, "data": record.model_dump(mode="json")}


@router.get("/contractors/{contractor_id}")
async def get_contractor_record(contractor_id: str, service: PayrollServiceDep) -> JsonDict:
    return {"success": True, "data": service.get_record(contractor_id).model_dump(mode="json")}


@router.post("/contractors/{contractor_id}/refresh")
async def refresh_contractor_record(
    contractor_id: str, body: RefreshRequest, service: PayrollServiceDep
) -> JsonDict:
    record = service.refresh(contractor_id, as_of=body.as_of)
    return {"success": True, "data": record.model_dump(mode="json")}
