"""Invoice tax models: raw amounts in, GST-inclusive totals out.

Taxable services (day rate, truck/equipment rate, additional charges) attract
GST. Reimbursements (travel, subsistence) never do.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator

ZERO = Decimal("0")

TAXABLE_FIELDS = ("day_rate_total", "truck_rate_total", "additional_charges")
NON_TAXABLE_FIELDS = ("travel_reimbursement", "subsistence")


def _is_blank(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float):
        return value != value  # NaN
    if isinstance(value, Decimal):
        return value.is_nan()
    return False


def _to_decimal_input(value: Any) -> Any:
    # float -> str first so 30.6 stays 30.6 and not its binary expansion
    if isinstance(value, float):
        return Decimal(repr(value))
    return value


def _check_amount(value: Decimal) -> Decimal:
    if not value.is_finite():
        raise ValueError("must be a finite number")
    if value < ZERO:
        raise ValueError(f"cannot be negative: {value}")
    return value


class TaxInput(BaseModel):
    """The five currency amounts of one invoice (or one day of work)."""

    day_rate_total: Decimal
    truck_rate_total: Decimal
    additional_charges: Decimal = ZERO
    travel_reimbursement: Decimal
    subsistence: Decimal

    model_config = {"frozen": True}

    @field_validator("*", mode="before")
    @classmethod
    def _coerce(cls, value: Any, info: ValidationInfo) -> Any:
        if info.field_name == "additional_charges" and _is_blank(value):
            return ZERO
        return _to_decimal_input(value)

    @field_validator("*")
    @classmethod
    def _non_negative(cls, value: Decimal) -> Decimal:
        return _check_amount(value)


class DailyWorkEntry(BaseModel):
    """One day's raw work fields as captured by the daily check-in."""

    day_rate: Decimal = ZERO
    day_rate_used: bool = True
    truck_rate: Decimal = ZERO
    truck_used: bool = False
    travel_kms: Decimal = ZERO
    travel_rate_per_km: Optional[Decimal] = None  # None -> standard CRA rate
    subsistence: Decimal = ZERO
    additional_charges: Optional[Decimal] = None

    model_config = {"frozen": True}

    @field_validator(
        "day_rate", "truck_rate", "travel_kms", "travel_rate_per_km",
        "subsistence", "additional_charges",
        mode="before",
    )
    @classmethod
    def _coerce(cls, value: Any, info: ValidationInfo) -> Any:
        if _is_blank(value):
            if info.field_name in ("travel_rate_per_km", "additional_charges"):
                return None
            return ZERO
        return _to_decimal_input(value)

    @field_validator(
        "day_rate", "truck_rate", "travel_kms", "travel_rate_per_km",
        "subsistence", "additional_charges",
    )
    @classmethod
    def _non_negative(cls, value: Optional[Decimal]) -> Optional[Decimal]:
        return None if value is None else _check_amount(value)


class TaxCalculationResult(BaseModel):
    """Immutable GST calculation, always re-derivable from its inputs."""

    day_rate_total: Decimal = ZERO
    truck_rate_total: Decimal = ZERO
    additional_charges: Decimal = ZERO
    travel_reimbursement: Decimal = ZERO
    subsistence: Decimal = ZERO

    taxable_subtotal: Decimal = ZERO
    gst_amount: Decimal = ZERO
    after_tax_subtotal: Decimal = ZERO
    non_taxable_total: Decimal = ZERO
    grand_total: Decimal = ZERO

    gst_rate: Decimal = Decimal("0.05")

    model_config = {"frozen": True}

    @property
    def is_reimbursement_only(self) -> bool:
        return self.taxable_subtotal == ZERO and self.non_taxable_total > ZERO


class TaxValidationReport(BaseModel):
    """Outcome of re-checking a calculation against its own inputs."""

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class AnnualGSTEstimate(BaseModel):
    """Annual GST planning figures projected from one average month."""

    annual_taxable_income: Decimal
    annual_gst_payable: Decimal
    quarterly_gst_payment: Decimal
    monthly_gst_reserve: Decimal
