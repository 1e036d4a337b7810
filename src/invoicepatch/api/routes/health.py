"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from invoicepatch.api.dependencies import PayrollServiceDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "healthy"}


@router.get("/ready")
async def ready(service: PayrollServiceDep) -> dict:
    return {"status": "ready", "services": [await service.health_check()]}
