"""Canadian sales tax rates by province and territory (CRA published rates).

Rates are percentages. Alberta charges federal GST only.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from invoicepatch.core.exceptions import ValidationError


@dataclass(frozen=True)
class Province:
    code: str
    name: str
    gst: Decimal
    pst: Decimal
    hst: Decimal
    business_number_required: bool = True

    @property
    def total_percent(self) -> Decimal:
        return self.gst + self.pst + self.hst

    @property
    def rate(self) -> Decimal:
        """Combined rate as a fraction, e.g. 0.05 for 5%."""
        return self.total_percent / Decimal("100")


def _p(code: str, name: str, gst: str, pst: str, hst: str, bn: bool = True) -> Province:
    return Province(code, name, Decimal(gst), Decimal(pst), Decimal(hst), bn)


PROVINCES: dict[str, Province] = {
    p.code: p
    for p in (
        _p("BC", "British Columbia", "5", "7", "0"),
        _p("AB", "Alberta", "5", "0", "0"),
        _p("SK", "Saskatchewan", "5", "6", "0"),
        _p("MB", "Manitoba", "5", "7", "0"),
        _p("ON", "Ontario", "0", "0", "13"),
        _p("QC", "Quebec", "5", "9.975", "0"),
        _p("NB", "New Brunswick", "0", "0", "15"),
        _p("NS", "Nova Scotia", "0", "0", "15"),
        _p("PE", "Prince Edward Island", "0", "0", "15"),
        _p("NL", "Newfoundland and Labrador", "0", "0", "15"),
        _p("YT", "Yukon", "5", "0", "0", bn=False),
        _p("NT", "Northwest Territories", "5", "0", "0", bn=False),
        _p("NU", "Nunavut", "5", "0", "0", bn=False),
    )
}


def get_province(code: str) -> Province:
    try:
        return PROVINCES[code.strip().upper()]
    except (KeyError, AttributeError):
        raise ValidationError(f"Invalid province code: {code!r}", field="province") from None


def sales_tax_rate(code: str) -> Decimal:
    return get_province(code).rate
