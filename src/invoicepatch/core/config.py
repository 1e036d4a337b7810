"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings

from invoicepatch.calculators.jurisdictions import sales_tax_rate


class TaxConfig(BaseSettings):
    """Invoice tax configuration."""

    model_config = {"env_prefix": "INVOICEPATCH_TAX_"}

    province: str = "AB"
    travel_rate_per_km: Decimal = Decimal("0.68")  # CRA standard, 2024
    validation_tolerance: Decimal = Decimal("0.01")

    @property
    def rate(self) -> Decimal:
        """Combined sales tax rate for the configured province."""
        return sales_tax_rate(self.province)


class PayrollConfig(BaseSettings):
    """Bi-weekly pay period configuration."""

    model_config = {"env_prefix": "INVOICEPATCH_PAYROLL_"}

    submission_offset_days: int = Field(default=3, gt=0)  # after period end
    payment_offset_days: int = Field(default=7, gt=0)  # after submission deadline
    default_period_count: int = Field(default=26, gt=0)
    upcoming_horizon_days: int = Field(default=60, ge=0)
    anchor: Literal["full", "grid", "weekday"] = "full"
    grid_reference_date: date = date(2024, 1, 1)
    period_end_weekday: int = Field(default=3, ge=0, le=6)  # Monday=0; 3 is Thursday
    adjust_payment_dates: bool = False  # roll payment past weekends and holidays


class RedisConfig(BaseSettings):
    """Redis key/value store configuration."""

    model_config = {"env_prefix": "INVOICEPATCH_REDIS_"}

    host: str = "localhost"
    port: int = 6379
    db: int = 0
    key_prefix: str = "invoicepatch:"


class AppSettings(BaseSettings):
    """Root application settings aggregating all sub-configs."""

    model_config = {"env_prefix": "INVOICEPATCH_"}

    environment: Literal["dev", "uat", "prod"] = "dev"
    log_level: str = "INFO"
    log_format: Literal["text", "json"] = "text"
    store_backend: Literal["memory", "redis"] = "memory"

    tax: TaxConfig = TaxConfig()
    payroll: PayrollConfig = PayrollConfig()
    redis: RedisConfig = RedisConfig()
