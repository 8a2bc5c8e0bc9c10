"""
hotel_california.api.deps

FastAPI dependency wiring for the API layer.
"""

from __future__ import annotations

from fastapi import Request

from hotel_california.api.pipeline import RequestPipeline


def pipeline_dep(request: Request) -> RequestPipeline:
    # The pipeline is built in the app lifespan (`hotel_california.api.app.create_app`).
    return request.app.state.pipeline  # type: ignore[attr-defined]
