"""Tests for invoice breakdown text and GST planning helpers."""

from __future__ import annotations

from decimal import Decimal

import pytest

from invoicepatch.calculators.tax_calc import calculate_tax
from invoicepatch.calculators.tax_display import (
    annual_gst_estimate,
    format_cad,
    format_gst_number,
    format_percent,
    tax_breakdown_text,
)


@pytest.mark.parametrize(
    "amount,expected",
    [
        (Decimal("1234.5"), "$1,234.50"),
        (Decimal("0"), "$0.00"),
        (-3, "-$3.00"),
        ("735.605", "$735.61"),
    ],
)
def test_format_cad(amount, expected):
    assert format_cad(amount) == expected


def test_format_percent():
    assert format_percent(Decimal("0.05")) == "5%"
    assert format_percent(Decimal("0.14975")) == "14.975%"


class TestBreakdownText:
    def test_typical_field_day(self, day_amounts):
        text = tax_breakdown_text(calculate_tax(day_amounts))
        assert text.splitlines() == [
            "Labour Services: $450.00",
            "Equipment Services: $150.00",
            "Subtotal (Taxable): $600.00",
            "GST (5%): $30.00",
            "Total after GST: $630.00",
            "Travel Reimbursement: $30.60 (non-taxable)",
            "Subsistence: $75.00 (non-taxable)",
            "TOTAL: $735.60",
        ]

    def test_additional_services_line(self):
        calc = calculate_tax(
            {
                "day_rate_total": "0",
                "truck_rate_total": "0",
                "additional_charges": "100",
                "travel_reimbursement": "0",
                "subsistence": "0",
            }
        )
        lines = tax_breakdown_text(calc).splitlines()
        assert lines[0] == "Additional Services: $100.00"
        assert lines[-1] == "TOTAL: $105.00"


class TestGstNumber:
    def test_formats_fifteen_characters(self):
        assert format_gst_number("123456789RT0001") == "123456789 RT 0001"

    def test_strips_separators(self):
        assert format_gst_number("123-456-789 rt 0001") == "123456789 RT 0001"

    def test_other_lengths_unchanged(self):
        assert format_gst_number("12345") == "12345"


def test_annual_gst_estimate(day_amounts):
    estimate = annual_gst_estimate(calculate_tax(day_amounts))
    assert estimate.annual_taxable_income == Decimal("7200.00")
    assert estimate.annual_gst_payable == Decimal("360.00")
    assert estimate.quarterly_gst_payment == Decimal("90.00")
    assert estimate.monthly_gst_reserve == Decimal("30.00")
