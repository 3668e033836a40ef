"""
stationery_connect.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Provide dependency functions for settings, DB sessions and services.
- Encapsulate app.state access patterns (engine/sessionmaker/settings).
"""

from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from stationery_connect.services.blasts import BlastService
from stationery_connect.services.records import CustomerService, ProductService
from stationery_connect.services.reports import ReportService
from stationery_connect.settings import Settings


def settings_dep(request: Request) -> Settings:
    # The settings the app was built with (see `api.app.create_app`).
    return request.app.state.settings  # type: ignore[attr-defined]


def sessionmaker_from_app(request: Request) -> async_sessionmaker[AsyncSession]:
    return request.app.state.sessionmaker  # type: ignore[attr-defined]


async def db_session(
    session_factory: async_sessionmaker[AsyncSession] = Depends(sessionmaker_from_app),
) -> AsyncIterator[AsyncSession]:
    # Request-scoped DB session. Commit/rollback is managed explicitly by the service layer.
    async with session_factory() as session:
        yield session


def product_service(session: AsyncSession = Depends(db_session)) -> ProductService:
    return ProductService(session=session)


def customer_service(session: AsyncSession = Depends(db_session)) -> CustomerService:
    return CustomerService(session=session)


def blast_service(session: AsyncSession = Depends(db_session)) -> BlastService:
    return BlastService(session=session)


def report_service(
    session: AsyncSession = Depends(db_session),
    settings: Settings = Depends(settings_dep),
) -> ReportService:
    return ReportService(
        session=session,
        top_n=settings.report_top_n,
        activity_limit=settings.recent_activity_limit,
    )
