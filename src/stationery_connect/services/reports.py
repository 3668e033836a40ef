"""
stationery_connect.services.reports

Aggregate reporting over access-filtered records.

Responsibilities:
- Dashboard headline numbers (inventory value, open rate, pending sends).
- Customer/product breakdowns and top-N rankings.
- Export summary for managers.

The aggregate helpers are pure and never reorder or mutate their inputs.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stationery_connect.auth.models import Principal
from stationery_connect.db.models import (
    Activity,
    Blast,
    BlastStatus,
    Customer,
    CustomerGroup,
    Product,
)
from stationery_connect.db.repositories.activities import ActivityRepo
from stationery_connect.services.blasts import BlastService
from stationery_connect.services.records import CustomerService, ProductService


@dataclass(frozen=True, slots=True)
class DashboardSummary:
    total_products: int
    total_customers: int
    pending_blasts: int
    sent_blasts: int
    inventory_value: float
    avg_open_rate: float
    recent_activities: list[Activity] = field(default_factory=list)


# Everything composed but not yet delivered counts towards "Pending Sends".
UNSENT_STATUSES = frozenset({BlastStatus.draft, BlastStatus.scheduled, BlastStatus.pending})


def pending_sends(blasts: Sequence[Blast]) -> int:
    return sum(1 for b in blasts if b.status in UNSENT_STATUSES)


def inventory_value(products: Sequence[Product]) -> float:
    return sum(p.price * p.stock for p in products)


def average_open_rate(blasts: Sequence[Blast]) -> float:
    sent = [b.open_rate for b in blasts if b.status == BlastStatus.sent]
    if not sent:
        return 0.0
    return sum(sent) / len(sent)


def customers_by_group(customers: Sequence[Customer]) -> dict[str, int]:
    counts = Counter(str(c.group) for c in customers)
    return {str(g): counts.get(str(g), 0) for g in CustomerGroup}


def top_customers(customers: Sequence[Customer], n: int) -> list[Customer]:
    return sorted(customers, key=lambda c: c.budget, reverse=True)[:n]


def top_products(products: Sequence[Product], n: int) -> list[Product]:
    return sorted(products, key=lambda p: p.price * p.stock, reverse=True)[:n]


class ReportService:
    def __init__(self, *, session: AsyncSession, top_n: int = 5, activity_limit: int = 10) -> None:
        self._products = ProductService(session=session)
        self._customers = CustomerService(session=session)
        self._blasts = BlastService(session=session)
        self._activities = ActivityRepo(session)
        self._top_n = top_n
        self._activity_limit = activity_limit

    async def dashboard(self, principal: Principal) -> DashboardSummary:
        products = await self._products.list_all(principal)
        customers = await self._customers.list_all(principal)
        blasts = await self._blasts.list_all(principal)
        return DashboardSummary(
            total_products=len(products),
            total_customers=len(customers),
            pending_blasts=pending_sends(blasts),
            sent_blasts=sum(1 for b in blasts if b.status == BlastStatus.sent),
            inventory_value=inventory_value(products),
            avg_open_rate=average_open_rate(blasts),
            recent_activities=await self._activities.recent(
                principal.tenant_id, limit=self._activity_limit
            ),
        )

    async def customer_stats(self, principal: Principal) -> dict[str, Any]:
        customers = await self._customers.list_all(principal)
        return {
            "total": len(customers),
            "by_group": customers_by_group(customers),
            "total_budget": sum(c.budget for c in customers),
            "top": top_customers(customers, self._top_n),
        }

    async def product_stats(self, principal: Principal) -> dict[str, Any]:
        products = await self._products.list_all(principal)
        in_stock = sum(1 for p in products if p.in_stock)
        return {
            "total": len(products),
            "in_stock": in_stock,
            "out_of_stock": len(products) - in_stock,
            "inventory_value": inventory_value(products),
            "top": top_products(products, self._top_n),
        }

    async def export(self, principal: Principal) -> dict[str, Any]:
        return {
            "customers": len(await self._customers.list_all(principal)),
            "products": len(await self._products.list_all(principal)),
            "campaigns": len(await self._blasts.list_all(principal)),
            "export_date": datetime.now(tz=UTC).isoformat(),
        }
