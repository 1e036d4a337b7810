"""FastAPI dependencies resolving objects wired onto ``app.state``."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from invoicepatch.core.config import AppSettings
from invoicepatch.services.contractor_payroll import ContractorPayrollService


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_payroll_service(request: Request) -> ContractorPayrollService:
    return request.app.state.payroll_service


SettingsDep = Annotated[AppSettings, Depends(get_settings)]
PayrollServiceDep = Annotated[ContractorPayrollService, Depends(get_payroll_service)]
