"""
stationery_connect.api.routers.reports

Dashboard and report endpoints.

Responsibilities:
- Headline dashboard numbers and recent activity.
- Customer and product breakdowns with top-N rankings.
- JSON export (manager or above).
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict

from stationery_connect.api.deps import report_service
from stationery_connect.api.schemas import CustomerOut, ProductOut
from stationery_connect.auth.deps import get_principal, require_manager
from stationery_connect.auth.models import Principal
from stationery_connect.db.models import ActivityType
from stationery_connect.services.reports import ReportService

router = APIRouter(prefix="/v1/reports", tags=["reports"])


class ActivityOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: ActivityType
    description: str
    actor: str
    created_at: datetime


class DashboardOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_products: int
    total_customers: int
    pending_blasts: int
    sent_blasts: int
    inventory_value: float
    avg_open_rate: float
    recent_activities: list[ActivityOut]


class CustomerStatsOut(BaseModel):
    total: int
    by_group: dict[str, int]
    total_budget: float
    top: list[CustomerOut]


class ProductStatsOut(BaseModel):
    total: int
    in_stock: int
    out_of_stock: int
    inventory_value: float
    top: list[ProductOut]


@router.get("/dashboard", response_model=DashboardOut)
async def dashboard(
    principal: Principal = Depends(get_principal),
    svc: ReportService = Depends(report_service),
) -> DashboardOut:
    return DashboardOut.model_validate(await svc.dashboard(principal))


@router.get("/customers", response_model=CustomerStatsOut)
async def customer_stats(
    principal: Principal = Depends(get_principal),
    svc: ReportService = Depends(report_service),
) -> CustomerStatsOut:
    stats = await svc.customer_stats(principal)
    stats["top"] = [CustomerOut.model_validate(c) for c in stats["top"]]
    return CustomerStatsOut(**stats)


@router.get("/products", response_model=ProductStatsOut)
async def product_stats(
    principal: Principal = Depends(get_principal),
    svc: ReportService = Depends(report_service),
) -> ProductStatsOut:
    stats = await svc.product_stats(principal)
    stats["top"] = [ProductOut.model_validate(p) for p in stats["top"]]
    return ProductStatsOut(**stats)


@router.get("/export")
async def export(
    principal: Principal = Depends(require_manager),
    svc: ReportService = Depends(report_service),
) -> dict[str, Any]:
    return await svc.export(principal)
