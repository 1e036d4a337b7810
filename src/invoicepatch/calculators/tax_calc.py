"""GST calculation for contractor invoices (Alberta: 5% GST, no PST).

Taxable services and non-taxable reimbursements are kept apart; only the GST
amount is rounded (to the cent, half-up). Every other total is plain Decimal
addition, so results never drift.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from invoicepatch.core.exceptions import ValidationError
from invoicepatch.models.tax import (
    NON_TAXABLE_FIELDS,
    TAXABLE_FIELDS,
    ZERO,
    DailyWorkEntry,
    TaxCalculationResult,
    TaxInput,
    TaxValidationReport,
)

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

ALBERTA_GST_RATE = Decimal("0.05")
ALBERTA_PST_RATE = Decimal("0")
TOTAL_TAX_RATE = ALBERTA_GST_RATE + ALBERTA_PST_RATE
STANDARD_TRAVEL_RATE_PER_KM = Decimal("0.68")

CENT = Decimal("0.01")
DEFAULT_TOLERANCE = CENT
HIGH_GST_RATIO = Decimal("0.15")

AMOUNT_FIELDS = TAXABLE_FIELDS + NON_TAXABLE_FIELDS + (
    "taxable_subtotal",
    "gst_amount",
    "after_tax_subtotal",
    "non_taxable_total",
    "grand_total",
)


def round2(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def _total(source: BaseModel, fields: tuple[str, ...]) -> Decimal:
    return sum((getattr(source, name) for name in fields), ZERO)


def coerce_model(model: type[M], data: M | Mapping[str, Any]) -> M:
    """Validate ``data`` into ``model``, surfacing failures as ValidationError."""
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or None
        raise ValidationError(first["msg"], field=field) from exc


def _check_rate(rate: Decimal | float | str) -> Decimal:
    try:
        value = Decimal(repr(rate)) if isinstance(rate, float) else Decimal(rate)
    except ArithmeticError as exc:
        raise ValidationError(f"not a number: {rate!r}", field="rate") from exc
    if not value.is_finite() or value < ZERO:
        raise ValidationError(f"must be a finite, non-negative rate: {rate!r}", field="rate")
    return value


def calculate_tax(
    amounts: TaxInput | Mapping[str, Any],
    *,
    rate: Decimal = ALBERTA_GST_RATE,
) -> TaxCalculationResult:
    """Compute GST and totals for one set of invoice amounts.

    Raises:
        ValidationError: a required amount is missing, negative or not finite.
    """
    data = coerce_model(TaxInput, amounts)
    rate = _check_rate(rate)

    taxable_subtotal = _total(data, TAXABLE_FIELDS)
    non_taxable_total = _total(data, NON_TAXABLE_FIELDS)
    gst_amount = round2(taxable_subtotal * rate)
    after_tax_subtotal = taxable_subtotal + gst_amount

    return TaxCalculationResult(
        day_rate_total=data.day_rate_total,
        truck_rate_total=data.truck_rate_total,
        additional_charges=data.additional_charges,
        travel_reimbursement=data.travel_reimbursement,
        subsistence=data.subsistence,
        taxable_subtotal=taxable_subtotal,
        gst_amount=gst_amount,
        after_tax_subtotal=after_tax_subtotal,
        non_taxable_total=non_taxable_total,
        grand_total=after_tax_subtotal + non_taxable_total,
        gst_rate=rate,
    )


def daily_tax_input(
    entry: DailyWorkEntry | Mapping[str, Any],
    *,
    travel_rate_per_km: Decimal = STANDARD_TRAVEL_RATE_PER_KM,
) -> TaxInput:
    """Map a day's raw work fields onto the five invoice amounts."""
    day = coerce_model(DailyWorkEntry, entry)
    per_km = day.travel_rate_per_km if day.travel_rate_per_km is not None else travel_rate_per_km
    return TaxInput(
        day_rate_total=day.day_rate if day.day_rate_used else ZERO,
        truck_rate_total=day.truck_rate if day.truck_used else ZERO,
        additional_charges=day.additional_charges,
        travel_reimbursement=day.travel_kms * per_km,
        subsistence=day.subsistence,
    )


def calculate_daily_tax(
    entry: DailyWorkEntry | Mapping[str, Any],
    *,
    rate: Decimal = ALBERTA_GST_RATE,
    travel_rate_per_km: Decimal = STANDARD_TRAVEL_RATE_PER_KM,
) -> TaxCalculationResult:
    return calculate_tax(
        daily_tax_input(entry, travel_rate_per_km=travel_rate_per_km), rate=rate
    )


def calculate_weekly_tax(
    entries: Iterable[DailyWorkEntry | Mapping[str, Any]],
    *,
    rate: Decimal = ALBERTA_GST_RATE,
    travel_rate_per_km: Decimal = STANDARD_TRAVEL_RATE_PER_KM,
) -> TaxCalculationResult:
    """Fold daily calculations into one result.

    Every field is summed across days except GST: per-day rounded GST is not
    accumulated. The aggregate GST is the unrounded daily GST summed and
    rounded once, and the after-tax and grand totals follow from it.
    """
    rate = _check_rate(rate)
    daily = [
        calculate_daily_tax(e, rate=rate, travel_rate_per_km=travel_rate_per_km)
        for e in entries
    ]
    totals = {name: sum((getattr(r, name) for r in daily), ZERO) for name in AMOUNT_FIELDS}

    gst_amount = round2(sum((r.taxable_subtotal * rate for r in daily), ZERO))
    if gst_amount != totals["gst_amount"]:
        logger.debug(
            "Weekly GST %s differs from summed daily GST %s over %d days",
            gst_amount, totals["gst_amount"], len(daily),
        )
    totals["gst_amount"] = gst_amount
    totals["after_tax_subtotal"] = totals["taxable_subtotal"] + gst_amount
    totals["grand_total"] = totals["after_tax_subtotal"] + totals["non_taxable_total"]
    return TaxCalculationResult(**totals, gst_rate=rate)


def validate_tax_calculation(
    result: TaxCalculationResult | Mapping[str, Any],
    *,
    tolerance: Decimal = DEFAULT_TOLERANCE,
) -> TaxValidationReport:
    """Re-derive every total from the result's own inputs and compare.

    Discrepancies beyond ``tolerance`` are errors; unusual but legal values
    are warnings.
    """
    calc = coerce_model(TaxCalculationResult, result)
    errors: list[str] = []
    warnings: list[str] = []

    for name in AMOUNT_FIELDS:
        value = getattr(calc, name)
        if value < ZERO:
            errors.append(f"{name} cannot be negative: {value}")

    def check(label: str, expected: Decimal, actual: Decimal) -> None:
        if abs(actual - expected) > tolerance:
            errors.append(f"{label} incorrect. Expected: {expected}, Got: {actual}")

    check("Taxable subtotal", _total(calc, TAXABLE_FIELDS), calc.taxable_subtotal)
    check("Non-taxable total", _total(calc, NON_TAXABLE_FIELDS), calc.non_taxable_total)
    check("GST calculation", round2(calc.taxable_subtotal * calc.gst_rate), calc.gst_amount)
    check("After-tax subtotal", calc.taxable_subtotal + calc.gst_amount, calc.after_tax_subtotal)
    check(
        "Grand total",
        calc.after_tax_subtotal + _total(calc, NON_TAXABLE_FIELDS),
        calc.grand_total,
    )

    if calc.gst_amount > calc.taxable_subtotal * HIGH_GST_RATIO:
        warnings.append("GST seems unusually high - please verify tax rate")
    if calc.grand_total == ZERO:
        warnings.append("Grand total is zero - nothing to invoice")
    if calc.is_reimbursement_only:
        warnings.append("Invoice contains only reimbursements - no taxable services")

    return TaxValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


def gst_amount(taxable_amount: Decimal, *, rate: Decimal = ALBERTA_GST_RATE) -> Decimal:
    return round2(Decimal(taxable_amount) * rate)


def after_tax(taxable_amount: Decimal, *, rate: Decimal = ALBERTA_GST_RATE) -> Decimal:
    return Decimal(taxable_amount) + gst_amount(taxable_amount, rate=rate)
