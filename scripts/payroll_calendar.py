"""Print a bi-weekly payroll calendar for a contract start date.

Usage:
    python scripts/payroll_calendar.py --start 2024-01-01 --periods 26
    python scripts/payroll_calendar.py --start 2024-01-03 --anchor grid --grid-reference 2024-01-01
    python scripts/payroll_calendar.py --start 2024-01-03 --first-period-end 2024-01-09 --format csv
    python scripts/payroll_calendar.py --start 2024-01-01 --anchor weekday --adjust-payment
"""

from __future__ import annotations

import argparse
import csv
import io
import sys
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from invoicepatch.calculators.payroll_calc import format_period, generate_schedule, parse_date
from invoicepatch.calculators.period_anchors import (
    ExplicitFirstPeriodEnd,
    FixedGridAnchor,
    FullFirstPeriod,
    WeekdayEndAnchor,
)
from invoicepatch.core.config import PayrollConfig
from invoicepatch.core.exceptions import ValidationError
from invoicepatch.core.protocols import PeriodAnchor
from invoicepatch.models.payroll import PayrollSchedule

COLUMNS = [
    "period", "start", "end", "days", "working_days",
    "partial", "submit_by", "payment",
]


def build_rows(schedule: PayrollSchedule) -> list[dict[str, Any]]:
    return [
        {
            "period": p.period_number,
            "start": p.start_date.isoformat(),
            "end": p.end_date.isoformat(),
            "days": p.days_in_period,
            "working_days": p.working_days,
            "partial": "yes" if p.is_partial_period else "",
            "submit_by": p.submission_deadline.isoformat(),
            "payment": p.payment_date.isoformat(),
        }
        for p in schedule.periods
    ]


def render_table(rows: list[dict[str, Any]]) -> str:
    widths = {c: max([len(c)] + [len(str(r[c])) for r in rows]) for c in COLUMNS}
    lines = ["  ".join(c.ljust(widths[c]) for c in COLUMNS)]
    lines.append("  ".join("-" * widths[c] for c in COLUMNS))
    for row in rows:
        lines.append("  ".join(str(row[c]).ljust(widths[c]) for c in COLUMNS))
    return "\n".join(lines)


def render_csv(rows: list[dict[str, Any]]) -> str:
    buf = io.StringIO()
    writer = csv.DictWriter(buf, fieldnames=COLUMNS, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buf.getvalue()


def choose_anchor(args: argparse.Namespace) -> PeriodAnchor:
    if args.first_period_end:
        return ExplicitFirstPeriodEnd(parse_date(args.first_period_end, field="first_period_end"))
    if args.anchor == "grid":
        return FixedGridAnchor(parse_date(args.grid_reference, field="grid_reference"))
    if args.anchor == "weekday":
        return WeekdayEndAnchor(args.weekday)
    return FullFirstPeriod()


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Print an InvoicePatch payroll calendar")
    parser.add_argument("--start", required=True, help="Contract start date (YYYY-MM-DD)")
    parser.add_argument("--periods", type=int, default=26, help="Number of pay periods")
    parser.add_argument("--anchor", choices=["full", "grid", "weekday"], default="full",
                        help="First period alignment policy")
    parser.add_argument("--grid-reference", default="2024-01-01",
                        help="A date on the 14-day grid (with --anchor grid)")
    parser.add_argument("--weekday", type=int, choices=range(7), default=3,
                        help="Period end weekday, Monday=0 (with --anchor weekday)")
    parser.add_argument("--first-period-end", default=None,
                        help="Explicit end date of period 1 (overrides --anchor)")
    parser.add_argument("--submission-offset", type=int, default=None,
                        help="Days after period end that timesheets are due")
    parser.add_argument("--payment-offset", type=int, default=None,
                        help="Days after the submission deadline that payment lands")
    parser.add_argument("--adjust-payment", action="store_true",
                        help="Move payment dates off weekends and statutory holidays")
    parser.add_argument("--format", choices=["table", "csv", "text"], default="table")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    overrides: dict[str, int | bool] = {}
    if args.submission_offset is not None:
        overrides["submission_offset_days"] = args.submission_offset
    if args.payment_offset is not None:
        overrides["payment_offset_days"] = args.payment_offset
    if args.adjust_payment:
        overrides["adjust_payment_dates"] = True

    try:
        config = PayrollConfig(**overrides)
        schedule = generate_schedule(args.start, args.periods, anchor=choose_anchor(args), config=config)
    except (ValidationError, PydanticValidationError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "text":
        print("\n".join(format_period(p) for p in schedule.periods))
        return 0
    rows = build_rows(schedule)
    print(render_csv(rows) if args.format == "csv" else render_table(rows))
    return 0


if __name__ == "__main__":
    sys.exit(main())
