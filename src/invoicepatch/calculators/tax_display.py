"""Human-readable renderings of tax calculations, and GST planning helpers."""

from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

from invoicepatch.calculators.tax_calc import round2
from invoicepatch.models.tax import ZERO, AnnualGSTEstimate, TaxCalculationResult

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")


def format_cad(amount: Decimal | int | str) -> str:
    """Format as Canadian dollars, e.g. ``$1,234.50`` or ``-$3.00``."""
    value = round2(Decimal(amount))
    sign = "-" if value < ZERO else ""
    return f"{sign}${abs(value):,.2f}"


def format_percent(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


def tax_breakdown_text(calc: TaxCalculationResult) -> str:
    """Invoice breakdown, one line per non-zero component."""
    lines: list[str] = []

    if calc.day_rate_total > ZERO:
        lines.append(f"Labour Services: {format_cad(calc.day_rate_total)}")
    if calc.truck_rate_total > ZERO:
        lines.append(f"Equipment Services: {format_cad(calc.truck_rate_total)}")
    if calc.additional_charges > ZERO:
        lines.append(f"Additional Services: {format_cad(calc.additional_charges)}")

    lines.append(f"Subtotal (Taxable): {format_cad(calc.taxable_subtotal)}")
    lines.append(f"GST ({format_percent(calc.gst_rate)}): {format_cad(calc.gst_amount)}")
    lines.append(f"Total after GST: {format_cad(calc.after_tax_subtotal)}")

    if calc.travel_reimbursement > ZERO:
        lines.append(
            f"Travel Reimbursement: {format_cad(calc.travel_reimbursement)} (non-taxable)"
        )
    if calc.subsistence > ZERO:
        lines.append(f"Subsistence: {format_cad(calc.subsistence)} (non-taxable)")

    lines.append(f"TOTAL: {format_cad(calc.grand_total)}")
    return "\n".join(lines)


def format_gst_number(gst_number: str) -> str:
    """Render a 15-character CRA business number as ``123456789 RT 0001``.

    Anything that is not 15 alphanumerics once cleaned is returned untouched.
    """
    clean = _NON_ALNUM.sub("", gst_number).upper()
    if len(clean) == 15:
        return f"{clean[:9]} RT {clean[11:]}"
    return gst_number


def annual_gst_estimate(
    monthly_average: TaxCalculationResult,
    *,
    rate: Optional[Decimal] = None,
) -> AnnualGSTEstimate:
    """Project a year of GST from one average month of invoicing."""
    if rate is None:
        rate = monthly_average.gst_rate
    annual_taxable = monthly_average.taxable_subtotal * 12
    annual_gst = annual_taxable * rate
    return AnnualGSTEstimate(
        annual_taxable_income=round2(annual_taxable),
        annual_gst_payable=round2(annual_gst),
        quarterly_gst_payment=round2(annual_gst / 4),
        monthly_gst_reserve=round2(annual_gst / 12),
    )
