"""
stationery_connect.api.errors

Translate service-layer failures into HTTP responses.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from stationery_connect.observability.logging import get_logger
from stationery_connect.services.errors import ServiceError

log = get_logger(__name__)


async def _service_error_handler(_: Request, exc: ServiceError) -> JSONResponse:
    log.info("request.rejected", status_code=exc.http_status, error=type(exc).__name__)
    return JSONResponse(status_code=exc.http_status, content={"detail": exc.message})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
