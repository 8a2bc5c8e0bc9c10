"""
hotel_california.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/health`), answered without touching dependencies.
- Readiness probe (`/readyz`) with DB connectivity validation.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from hotel_california.api.deps import pipeline_dep
from hotel_california.api.pipeline import Operation, RequestPipeline, Services
from hotel_california.api.requests import HealthRequest, decode_health

router = APIRouter()


async def _health(services: Services, req: HealthRequest, principal: None) -> dict[str, Any]:
    return {"ping": "Pong"}


async def _ready(services: Services, req: HealthRequest, principal: None) -> dict[str, Any]:
    await services.gateway.ping()
    return {"status": "ready"}


HEALTH = Operation(name="Health", decode=decode_health, execute=_health, authenticated=False)
READY = Operation(name="Ready", decode=decode_health, execute=_ready, authenticated=False)


@router.get("/health")
async def health(request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)) -> Response:
    return await pipeline.handle(request, HEALTH)


@router.get("/readyz")
async def readyz(request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)) -> Response:
    return await pipeline.handle(request, READY)
