"""
stationery_connect.api.app

FastAPI app factory for the StationeryConnect service.

Responsibilities:
- Build the FastAPI application and register routers/middleware/error handlers.
- Initialize and dispose shared infrastructure (DB engine/session factory).
- Provide a single composition root where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from stationery_connect import __version__
from stationery_connect.api.errors import register_error_handlers
from stationery_connect.api.routers.blasts import router as blasts_router
from stationery_connect.api.routers.customers import router as customers_router
from stationery_connect.api.routers.dev_auth import router as dev_auth_router
from stationery_connect.api.routers.health import router as health_router
from stationery_connect.api.routers.products import router as products_router
from stationery_connect.api.routers.reports import router as reports_router
from stationery_connect.db.init_db import init_db
from stationery_connect.db.session import create_engine, create_sessionmaker
from stationery_connect.observability.logging import configure_logging, get_logger
from stationery_connect.observability.middleware import RequestContextMiddleware
from stationery_connect.settings import Settings

log = get_logger(__name__)


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.env != "dev",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        log.info("startup", env=settings.env)
        # Routers obtain sessions via dependencies (see `stationery_connect.api.deps`).
        engine = create_engine(settings)
        app.state.engine = engine
        app.state.sessionmaker = create_sessionmaker(engine)
        if settings.env in ("dev", "test"):
            # Dev/test convenience: create tables automatically.
            await init_db(engine)
        try:
            yield
        finally:
            await engine.dispose()
            log.info("shutdown")

    app = FastAPI(
        title="StationeryConnect",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_error_handlers(app)
    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(products_router)
    app.include_router(customers_router)
    app.include_router(blasts_router)
    app.include_router(reports_router)

    return app


# --- Module Notes -----------------------------------------------------------
# App composition stays here; access rules live in `auth.rls` and are applied
# by the service layer.
