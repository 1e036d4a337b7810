"""FastAPI application with lifespan, error mapping and router mounting."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicepatch.api.routes import health, payroll, tax
from invoicepatch.core.config import AppSettings
from invoicepatch.core.exceptions import RecordNotFoundError, StoreError, ValidationError
from invoicepatch.core.logger import init_logging
from invoicepatch.persistence import create_store
from invoicepatch.persistence.payroll_repository import PayrollRecordRepository
from invoicepatch.services.contractor_payroll import ContractorPayrollService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Initialize and tear down application resources."""
    init_logging(app.state.settings)
    logger.info(
        "InvoicePatch API starting (environment=%s, store=%s)",
        app.state.settings.environment, app.state.settings.store_backend,
    )
    yield


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, **extra}),
    )


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
        return _error(400, str(exc), field=exc.field)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.warning("Rejected %s %s: malformed body", request.method, request.url.path)
        return _error(400, "Invalid request body", errors=exc.errors())

    @app.exception_handler(RecordNotFoundError)
    async def _not_found(request: Request, exc: RecordNotFoundError) -> JSONResponse:
        return _error(404, str(exc))

    @app.exception_handler(StoreError)
    async def _store_error(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(503, "Storage unavailable")


def create_app(settings: AppSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    if settings is None:
        settings = AppSettings()

    app = FastAPI(
        title="InvoicePatch Tax & Payroll API",
        version="0.1.0",
        lifespan=lifespan,
    )
    store = create_store(settings)
    app.state.settings = settings
    app.state.store = store
    app.state.payroll_service = ContractorPayrollService(
        settings=settings,
        repository=PayrollRecordRepository(store),
    )

    _register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(payroll.router, prefix="/payroll")
    app.include_router(tax.router, prefix="/tax")
    return app
