"""
hotel_california.api.app

FastAPI app factory for the Hotel California service.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Build shared, read-only infrastructure once (message catalog, DB engine,
  services, request pipeline) and dispose it on shutdown.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI

from hotel_california import __version__
from hotel_california.api.pipeline import RequestPipeline, Services
from hotel_california.api.routers.account import router as account_router
from hotel_california.api.routers.dev import router as dev_router
from hotel_california.api.routers.health import router as health_router
from hotel_california.api.routers.reservations import router as reservations_router
from hotel_california.auth.guard import AuthGuard
from hotel_california.auth.jwt import JwtConfig
from hotel_california.db.gateway import SqlGateway
from hotel_california.db.init_db import init_db
from hotel_california.db.session import create_engine, create_sessionmaker
from hotel_california.localization.catalog import MessageCatalog
from hotel_california.observability.logging import configure_logging, get_logger
from hotel_california.observability.middleware import RequestContextMiddleware
from hotel_california.services.account_service import AccountService
from hotel_california.services.reservation_service import ReservationService
from hotel_california.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    # Configure structured logging once at process startup (before app serves requests).
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Loaded once; requests only read it.
        catalog = MessageCatalog.load(
            settings.localization_dir, default_language=settings.default_language
        )

        engine = create_engine(settings)
        if settings.env in ("dev", "test"):
            await init_db(engine)
        gateway = SqlGateway(engine=engine, sessionmaker=create_sessionmaker(engine))

        jwt_cfg = JwtConfig(alg=settings.jwt_alg, secret=settings.jwt_secret)
        services = Services(
            accounts=AccountService(
                gateway=gateway,
                jwt_cfg=jwt_cfg,
                token_ttl=timedelta(hours=settings.token_ttl_hours),
            ),
            reservations=ReservationService(gateway=gateway),
            gateway=gateway,
        )
        app.state.gateway = gateway
        app.state.pipeline = RequestPipeline(
            catalog=catalog, guard=AuthGuard(jwt_cfg), services=services
        )
        try:
            yield
        finally:
            await gateway.close()
            log.info("shutdown")

    app = FastAPI(
        title="Hotel California Reservations",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.add_middleware(RequestContextMiddleware)
    app.include_router(health_router, tags=["health"])
    app.include_router(account_router)
    app.include_router(reservations_router)
    if settings.env != "prod":
        app.include_router(dev_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; business rules live in `hotel_california.services`.
