"""Shared fixtures."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from invoicepatch.calculators.payroll_calc import generate_schedule
from invoicepatch.models.tax import TaxInput


@pytest.fixture
def day_amounts() -> TaxInput:
    """A typical field day: day rate, truck, 45 km travel and subsistence."""
    return TaxInput(
        day_rate_total=Decimal("450.00"),
        truck_rate_total=Decimal("150.00"),
        additional_charges=Decimal("0"),
        travel_reimbursement=Decimal("30.60"),
        subsistence=Decimal("75.00"),
    )


@pytest.fixture
def day_entry() -> dict:
    return {
        "day_rate": "450.00",
        "day_rate_used": True,
        "truck_rate": "150.00",
        "truck_used": True,
        "travel_kms": "45",
        "subsistence": "75.00",
    }


@pytest.fixture
def schedule():
    """Three full periods from Monday 2024-01-01."""
    return generate_schedule(date(2024, 1, 1), 3)
