"""
stationery_connect.api.routers.blasts

WhatsApp blast endpoints (compose, preview, mocked send).
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from stationery_connect.api.deps import blast_service
from stationery_connect.api.schemas import BlastIn, BlastOut, BlastPatch, PreviewOut
from stationery_connect.auth.deps import get_principal
from stationery_connect.auth.models import Principal
from stationery_connect.services.blasts import BlastService

router = APIRouter(prefix="/v1/blasts", tags=["blasts"])


@router.get("", response_model=list[BlastOut])
async def list_blasts(
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> list[BlastOut]:
    return [BlastOut.model_validate(b) for b in await svc.list_all(principal)]


@router.post("", response_model=BlastOut, status_code=HTTP_201_CREATED)
async def compose_blast(
    body: BlastIn,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> BlastOut:
    blast = await svc.compose(
        principal,
        title=body.title,
        message=body.message,
        customer_ids=body.customer_ids,
        product_ids=body.product_ids,
        scheduled_at=body.scheduled_at,
    )
    return BlastOut.model_validate(blast)


@router.get("/{blast_id}", response_model=BlastOut)
async def get_blast(
    blast_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> BlastOut:
    return BlastOut.model_validate(await svc.get(principal, blast_id))


@router.get("/{blast_id}/preview", response_model=PreviewOut)
async def preview_blast(
    blast_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> PreviewOut:
    return PreviewOut(preview=await svc.preview(principal, blast_id))


@router.patch("/{blast_id}", response_model=BlastOut)
async def update_blast(
    blast_id: uuid.UUID,
    body: BlastPatch,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> BlastOut:
    values = body.model_dump(exclude_unset=True)
    blast = await svc.update(principal, blast_id, values)
    return BlastOut.model_validate(blast)


@router.post("/{blast_id}/send", response_model=BlastOut)
async def send_blast(
    blast_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> BlastOut:
    return BlastOut.model_validate(await svc.send(principal, blast_id))


@router.delete("/{blast_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_blast(
    blast_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: BlastService = Depends(blast_service),
) -> None:
    await svc.delete(principal, blast_id)
