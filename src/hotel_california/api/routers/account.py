from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from hotel_california.api.deps import pipeline_dep
from hotel_california.api.pipeline import Operation, RequestPipeline, Services
from hotel_california.api.requests import SignInRequest, decode_sign_in

router = APIRouter(prefix="/v1/account", tags=["account"])


async def _sign_in(services: Services, req: SignInRequest, principal: None) -> dict[str, Any]:
    token = await services.accounts.sign_in(username=req.user_name, password=req.password)
    return {"isSuccessfully": True, "token": token}


SIGN_IN = Operation(name="SignIn", decode=decode_sign_in, execute=_sign_in, authenticated=False)


@router.post("/sign-in")
async def sign_in(request: Request, pipeline: RequestPipeline = Depends(pipeline_dep)) -> Response:
    return await pipeline.handle(request, SIGN_IN)
