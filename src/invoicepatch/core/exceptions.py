"""InvoicePatch exception hierarchy."""

from __future__ import annotations


class InvoicePatchError(Exception):
    """Base exception for all InvoicePatch errors."""


class ValidationError(InvoicePatchError):
    """Invalid input to a calculator or service."""

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message if field is None else f"{field}: {message}")


class RecordNotFoundError(InvoicePatchError):
    """No payroll record stored for a contractor."""

    def __init__(self, contractor_id: str) -> None:
        self.contractor_id = contractor_id
        super().__init__(f"No payroll record for contractor {contractor_id!r}")


class StoreError(InvoicePatchError):
    """Key/value store operation failed."""
