"""
stationery_connect.db.repositories.activities

Repository for `Activity` entities.

Responsibilities:
- Append activity events (product shared, customer added, blast sent).
- Query the recent activity feed for a tenant.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from stationery_connect.db.models import Activity, ActivityType


class ActivityRepo:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def add(
        self,
        *,
        tenant_id: str,
        actor: str,
        type: ActivityType,
        description: str,
        details: dict[str, Any] | None = None,
    ) -> Activity:
        # Activities are append-only (no update/delete) in normal operation.
        ev = Activity(
            tenant_id=tenant_id,
            actor=actor,
            type=type,
            description=description,
            details=details or {},
        )
        self._session.add(ev)
        await self._session.flush()
        return ev

    async def recent(self, tenant_id: str, *, limit: int = 10) -> list[Activity]:
        stmt = (
            select(Activity)
            .where(Activity.tenant_id == tenant_id)
            .order_by(desc(Activity.created_at))
            .limit(limit)
        )
        return list((await self._session.execute(stmt)).scalars().all())
