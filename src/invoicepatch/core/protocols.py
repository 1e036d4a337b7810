"""Protocol interfaces for InvoicePatch abstractions.

Structural typing, no inheritance required, easy to test with isinstance().
"""

from __future__ import annotations

from datetime import date
from typing import Protocol, runtime_checkable


# ---------------------------------------------------------------------------
# Payroll: period alignment policy
# ---------------------------------------------------------------------------

@runtime_checkable
class PeriodAnchor(Protocol):
    """Decides where the first pay period of a schedule ends.

    Returns the inclusive end date of period 1 for a contract starting on
    ``start_date``. Every later period is a full 14 days.
    """

    def __call__(self, start_date: date) -> date: ...


# ---------------------------------------------------------------------------
# Persistence: Key/Value Store
# ---------------------------------------------------------------------------

@runtime_checkable
class IKeyValueStore(Protocol):
    """Durable string key/value storage (Redis-compatible)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...
