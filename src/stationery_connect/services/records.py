"""
stationery_connect.services.records

CRUD services for tenant-scoped records.

Responsibilities:
- Apply the RLS model (`auth.rls`) to every list/get/create/update/delete.
- Stamp tenancy/ownership metadata on writes.
- Search/filter catalog and customer lists.
- Record activity events for notable actions.
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any, ClassVar, Generic, NoReturn, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

from stationery_connect.auth import rls
from stationery_connect.auth.models import Principal
from stationery_connect.db.base import TenantScoped
from stationery_connect.db.models import ActivityType, Customer, Product
from stationery_connect.db.repositories.activities import ActivityRepo
from stationery_connect.db.repositories.records import (
    CustomerRepo,
    ProductRepo,
    TenantRecordRepo,
)
from stationery_connect.observability.logging import get_logger
from stationery_connect.services.errors import PermissionDenied, RecordNotFound

log = get_logger(__name__)

M = TypeVar("M", bound=TenantScoped)

# Tenancy and ownership are fixed at creation time.
PROTECTED_FIELDS = frozenset({"id", "tenant_id", "created_by", "created_at", "updated_at"})

ALL = "all"


def _writable(values: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if k not in PROTECTED_FIELDS}


def _contains(haystack: str, needle: str) -> bool:
    return needle.lower() in haystack.lower()


def format_price(price: float) -> str:
    return f"{price:.0f}" if float(price).is_integer() else f"{price:.2f}"


def product_matches(product: Product, *, search: str | None, category: str | None) -> bool:
    if category and category != ALL and product.category != category:
        return False
    if not search:
        return True
    return _contains(product.name, search) or any(_contains(t, search) for t in product.tags or [])


def customer_matches(customer: Customer, *, search: str | None, group: str | None) -> bool:
    if group and group != ALL and customer.group != group:
        return False
    if not search:
        return True
    return _contains(customer.name, search) or _contains(customer.location, search)


class RecordService(Generic[M]):
    resource: ClassVar[str]
    repo_cls: ClassVar[type[TenantRecordRepo[Any]]]

    def __init__(self, *, session: AsyncSession) -> None:
        self._session = session
        self._repo: TenantRecordRepo[M] = self.repo_cls(session)
        self._activities = ActivityRepo(session)

    async def list_all(self, principal: Principal) -> list[M]:
        rows = await self._repo.list_for_tenant(principal.tenant_id)
        return rls.filter_by_access(principal, rows)

    async def get(self, principal: Principal, record_id: uuid.UUID) -> M:
        row = await self._repo.get(record_id)
        # Records of other tenants are reported exactly like missing ones.
        if row is None or not rls.can_read(principal, row):
            raise RecordNotFound(f"{self.resource.capitalize()} not found")
        return row

    async def create(self, principal: Principal, values: Mapping[str, Any]) -> M:
        if not rls.can_create(principal):
            self._deny(principal, "create")
        row = await self._repo.add(rls.stamp_on_create(principal, _writable(values)))
        await self._after_create(principal, row)
        await self._session.commit()
        log.info(f"{self.resource}.created", record_id=str(row.id))
        return row

    async def update(
        self, principal: Principal, record_id: uuid.UUID, values: Mapping[str, Any]
    ) -> M:
        row = await self.get(principal, record_id)
        if not rls.can_update(principal, row):
            self._deny(principal, "update", row)
        row = await self._repo.patch(row, rls.stamp_on_update(_writable(values)))
        await self._session.commit()
        log.info(f"{self.resource}.updated", record_id=str(row.id))
        return row

    async def delete(self, principal: Principal, record_id: uuid.UUID) -> None:
        row = await self.get(principal, record_id)
        if not rls.can_delete(principal, row):
            self._deny(principal, "delete", row)
        await self._repo.delete(row)
        await self._session.commit()
        log.info(f"{self.resource}.deleted", record_id=str(record_id))

    async def _after_create(self, principal: Principal, row: M) -> None:
        return None

    def _deny(self, principal: Principal, action: str, row: M | None = None) -> NoReturn:
        log.info(
            "rls.denied",
            resource=self.resource,
            action=action,
            record_id=str(row.id) if row is not None else None,
        )
        raise PermissionDenied()


class ProductService(RecordService[Product]):
    resource = "product"
    repo_cls = ProductRepo

    async def search(
        self, principal: Principal, *, search: str | None = None, category: str | None = None
    ) -> list[Product]:
        rows = await self.list_all(principal)
        return [p for p in rows if product_matches(p, search=search, category=category)]

    async def categories(self, principal: Principal) -> list[str]:
        rows = await self.list_all(principal)
        return sorted({p.category for p in rows})

    async def share(self, principal: Principal, record_id: uuid.UUID) -> str:
        product = await self.get(principal, record_id)
        text = f"{product.name} - ₹{format_price(product.price)}"
        await self._activities.add(
            tenant_id=principal.tenant_id,
            actor=principal.id,
            type=ActivityType.product_shared,
            description=f"{product.name} shared via WhatsApp",
            details={"product_id": str(product.id)},
        )
        await self._session.commit()
        log.info("product.shared", record_id=str(product.id))
        return text


class CustomerService(RecordService[Customer]):
    resource = "customer"
    repo_cls = CustomerRepo

    async def search(
        self, principal: Principal, *, search: str | None = None, group: str | None = None
    ) -> list[Customer]:
        rows = await self.list_all(principal)
        return [c for c in rows if customer_matches(c, search=search, group=group)]

    async def _after_create(self, principal: Principal, row: Customer) -> None:
        await self._activities.add(
            tenant_id=principal.tenant_id,
            actor=principal.id,
            type=ActivityType.customer_added,
            description=f"New customer {row.name} added",
            details={"customer_id": str(row.id)},
        )


# --- Module Notes -----------------------------------------------------------
# Routers never call repositories directly for tenant-owned records; going
# through these services is what keeps every path behind the RLS checks.
