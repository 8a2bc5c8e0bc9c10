"""
hotel_california.api.routers.dev

Dev/test-only helpers; the app factory does not mount this router in prod.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from hotel_california.api.deps import pipeline_dep
from hotel_california.api.pipeline import Operation, RequestPipeline, Services
from hotel_california.api.requests import RegisterUserRequest, decode_register_user

router = APIRouter(prefix="/v1/dev", tags=["dev"])


async def _register_user(
    services: Services, req: RegisterUserRequest, principal: None
) -> dict[str, Any]:
    user_id = await services.accounts.register_user(
        first_name=req.first_name,
        last_name=req.last_name,
        username=req.user_name,
        password=req.password,
    )
    return {"isSuccessfully": True, "userId": user_id}


REGISTER_USER = Operation(
    name="RegisterUser", decode=decode_register_user, execute=_register_user, authenticated=False
)


@router.post("/users")
async def register_user(
    request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)
) -> Response:
    return await pipeline.handle(request, REGISTER_USER)
