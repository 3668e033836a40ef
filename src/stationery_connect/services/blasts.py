"""
stationery_connect.services.blasts

Mocked WhatsApp blast composition and sending.

Responsibilities:
- Render the message preview customers would receive.
- Compose blasts from access-checked customers and products.
- "Send" blasts (status transition + activity; no external delivery).
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping, Sequence
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from stationery_connect.auth import rls
from stationery_connect.auth.models import Principal
from stationery_connect.db.models import ActivityType, Blast, BlastStatus, Product
from stationery_connect.db.repositories.records import BlastRepo, CustomerRepo, ProductRepo
from stationery_connect.observability.logging import get_logger
from stationery_connect.services.errors import InvalidRequest
from stationery_connect.services.records import RecordService, format_price

log = get_logger(__name__)

INCOMPLETE_SELECTION = "Please select customers, products, and write a message"


def render_preview(message: str, products: Sequence[Product]) -> str:
    preview = message + "\n\n"
    if products:
        preview += "🛍️ Featured Products:\n"
        for product in products:
            preview += f"• {product.name} - ₹{format_price(product.price)}\n"
        preview += "\n📞 Contact us for bulk orders!"
    return preview


def _parse_ids(raw: Sequence[str | uuid.UUID]) -> list[uuid.UUID]:
    try:
        return [r if isinstance(r, uuid.UUID) else uuid.UUID(str(r)) for r in raw]
    except ValueError as e:
        raise InvalidRequest(f"Invalid id: {e}") from e


class BlastService(RecordService[Blast]):
    resource = "blast"
    repo_cls = BlastRepo

    def __init__(self, *, session: AsyncSession) -> None:
        super().__init__(session=session)
        self._customers = CustomerRepo(session)
        self._products = ProductRepo(session)

    async def compose(
        self,
        principal: Principal,
        *,
        title: str,
        message: str,
        customer_ids: Sequence[str | uuid.UUID],
        product_ids: Sequence[str | uuid.UUID],
        scheduled_at: datetime | None = None,
    ) -> Blast:
        if not customer_ids or not product_ids or not message.strip():
            raise InvalidRequest(INCOMPLETE_SELECTION)

        # Dedupe while keeping the order the recipients were picked in.
        cust_ids = list(dict.fromkeys(_parse_ids(customer_ids)))
        prod_ids = list(dict.fromkeys(_parse_ids(product_ids)))
        await self._require_visible(principal, self._customers, cust_ids, "customer")
        await self._require_visible(principal, self._products, prod_ids, "product")

        return await self.create(
            principal,
            {
                "title": title,
                "message": message,
                "customer_ids": [str(i) for i in cust_ids],
                "product_ids": [str(i) for i in prod_ids],
                "status": BlastStatus.scheduled if scheduled_at else BlastStatus.draft,
                "scheduled_at": scheduled_at,
            },
        )

    async def update(
        self, principal: Principal, record_id: uuid.UUID, values: Mapping[str, Any]
    ) -> Blast:
        blast = await self.get(principal, record_id)
        if not rls.can_update(principal, blast):
            self._deny(principal, "update", blast)
        if blast.status == BlastStatus.sent:
            raise InvalidRequest("Blast already sent")

        # Only `scheduled_at` may be cleared; a null title or message means "unchanged".
        patch = {k: v for k, v in values.items() if v is not None or k == "scheduled_at"}
        if "scheduled_at" in patch and blast.status in (BlastStatus.draft, BlastStatus.scheduled):
            patch["status"] = BlastStatus.scheduled if patch["scheduled_at"] else BlastStatus.draft
        return await super().update(principal, record_id, patch)

    async def preview(self, principal: Principal, record_id: uuid.UUID) -> str:
        blast = await self.get(principal, record_id)
        products = await self._products.get_many(_parse_ids(blast.product_ids))
        by_id = {p.id: p for p in rls.filter_by_access(principal, products)}
        ordered = [by_id[i] for i in _parse_ids(blast.product_ids) if i in by_id]
        return render_preview(blast.message, ordered)

    async def send(self, principal: Principal, record_id: uuid.UUID) -> Blast:
        blast = await self.get(principal, record_id)
        if not rls.can_update(principal, blast):
            self._deny(principal, "send", blast)
        if blast.status == BlastStatus.sent:
            raise InvalidRequest("Blast already sent")

        now = datetime.now(tz=UTC)
        blast = await self._repo.patch(
            blast, rls.stamp_on_update({"status": BlastStatus.sent, "sent_at": now}, now=now)
        )
        await self._activities.add(
            tenant_id=principal.tenant_id,
            actor=principal.id,
            type=ActivityType.blast_sent,
            description=(
                f"WhatsApp blast sent to {len(blast.customer_ids)} customers "
                f"with {len(blast.product_ids)} products"
            ),
            details={"blast_id": str(blast.id)},
        )
        await self._session.commit()
        log.info("blast.sent", record_id=str(blast.id), recipients=len(blast.customer_ids))
        return blast

    async def _require_visible(
        self,
        principal: Principal,
        repo: CustomerRepo | ProductRepo,
        ids: list[uuid.UUID],
        kind: str,
    ) -> None:
        rows = rls.filter_by_access(principal, await repo.get_many(ids))
        missing = set(ids) - {r.id for r in rows}
        if missing:
            # Unknown and cross-tenant ids are indistinguishable to the caller.
            unknown = ", ".join(sorted(str(m) for m in missing))
            raise InvalidRequest(f"Unknown {kind} ids: {unknown}")


# --- Module Notes -----------------------------------------------------------
# There is no WhatsApp integration: "sending" only flips status and records an
# activity, so the dashboard and reports behave as if delivery happened.
