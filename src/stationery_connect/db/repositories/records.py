"""
stationery_connect.db.repositories.records

Generic repository for tenant-scoped records (products, customers, blasts).

Responsibilities:
- Insert, fetch, list-by-tenant, patch and delete rows of one model.
"""

from __future__ import annotations

import uuid
from typing import Any, Generic, TypeVar

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from stationery_connect.db.base import TenantScoped
from stationery_connect.db.models import Blast, Customer, Product

M = TypeVar("M", bound=TenantScoped)


class TenantRecordRepo(Generic[M]):
    model: type[M]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(self, values: dict[str, Any]) -> M:
        row = self.model(**values)
        self._session.add(row)
        await self._session.flush()
        return row

    async def get(self, record_id: uuid.UUID) -> M | None:
        return await self._session.get(self.model, record_id)

    async def list_for_tenant(self, tenant_id: str) -> list[M]:
        # Newest first, matching how the dashboard lists records.
        stmt = (
            select(self.model)
            .where(self.model.tenant_id == tenant_id)
            .order_by(desc(self.model.created_at))
        )
        return list((await self._session.execute(stmt)).scalars().all())

    async def get_many(self, record_ids: list[uuid.UUID]) -> list[M]:
        if not record_ids:
            return []
        stmt = select(self.model).where(self.model.id.in_(record_ids))
        return list((await self._session.execute(stmt)).scalars().all())

    async def patch(self, row: M, values: dict[str, Any]) -> M:
        for key, value in values.items():
            setattr(row, key, value)
        await self._session.flush()
        return row

    async def delete(self, row: M) -> None:
        await self._session.delete(row)
        await self._session.flush()


class ProductRepo(TenantRecordRepo[Product]):
    model = Product


class CustomerRepo(TenantRecordRepo[Customer]):
    model = Customer


class BlastRepo(TenantRecordRepo[Blast]):
    model = Blast


# --- Module Notes -----------------------------------------------------------
# `list_for_tenant` narrows the query; services still run the results through
# `auth.rls.filter_by_access` before returning anything.
