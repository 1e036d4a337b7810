"""GST calculation endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter

from invoicepatch.api.dependencies import SettingsDep
from invoicepatch.api.schemas import DailyTaxRequest, WeeklyTaxRequest
from invoicepatch.calculators.jurisdictions import get_province
from invoicepatch.calculators.tax_calc import (
    calculate_daily_tax,
    calculate_tax,
    calculate_weekly_tax,
    validate_tax_calculation,
)
from invoicepatch.calculators.tax_display import format_percent, tax_breakdown_text
from invoicepatch.core.exceptions import ValidationError
from invoicepatch.core.types import JsonDict
from invoicepatch.models.tax import TaxInput

logger = logging.getLogger(__name__)

router = APIRouter(tags=["tax"])


@router.post("/calculate")
async def calculate(body: TaxInput, settings: SettingsDep) -> JsonDict:
    result = calculate_tax(body, rate=settings.tax.rate)
    return {"success": True, "data": result.model_dump(mode="json")}


@router.post("/daily")
async def calculate_daily(body: DailyTaxRequest, settings: SettingsDep) -> JsonDict:
    """Server-side daily calculation; the client's own total is only cross-checked."""
    result = calculate_daily_tax(
        body, rate=settings.tax.rate, travel_rate_per_km=settings.tax.travel_rate_per_km
    )
    tolerance = settings.tax.validation_tolerance
    report = validate_tax_calculation(result, tolerance=tolerance)
    if not report.is_valid:
        raise ValidationError("; ".join(report.errors), field="calculation")

    client_mismatch = (
        body.client_grand_total is not None
        and abs(result.grand_total - body.client_grand_total) > tolerance
    )
    if client_mismatch:
        logger.warning(
            "Client/server calculation mismatch: server=%s client=%s",
            result.grand_total, body.client_grand_total,
        )
    return {
        "success": True,
        "data": {
            "calculation": result.model_dump(mode="json"),
            "validation": report.model_dump(mode="json"),
            "client_mismatch": client_mismatch,
        },
    }


@router.post("/weekly")
async def calculate_weekly(body: WeeklyTaxRequest, settings: SettingsDep) -> JsonDict:
    if (
        body.week_start_date is not None
        and body.week_end_date is not None
        and body.week_end_date < body.week_start_date
    ):
        raise ValidationError("week_end_date precedes week_start_date", field="week_end_date")
    result = calculate_weekly_tax(
        body.daily_entries,
        rate=settings.tax.rate,
        travel_rate_per_km=settings.tax.travel_rate_per_km,
    )
    report = validate_tax_calculation(result, tolerance=settings.tax.validation_tolerance)
    return {
        "success": True,
        "data": {
            "week_start_date": body.week_start_date,
            "week_end_date": body.week_end_date,
            "days": len(body.daily_entries),
            "calculation": result.model_dump(mode="json"),
            "validation": report.model_dump(mode="json"),
        },
    }


@router.post("/breakdown")
async def breakdown(body: TaxInput, settings: SettingsDep) -> JsonDict:
    result = calculate_tax(body, rate=settings.tax.rate)
    return {"success": True, "data": {"text": tax_breakdown_text(result)}}


@router.get("/provinces/{code}")
async def province_rates(code: str) -> JsonDict:
    province = get_province(code)
    return {
        "success": True,
        "data": {
            "code": province.code,
            "name": province.name,
            "gst": str(province.gst),
            "pst": str(province.pst),
            "hst": str(province.hst),
            "total": format_percent(province.rate),
            "business_number_required": province.business_number_required,
        },
    }
