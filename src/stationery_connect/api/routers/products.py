"""
stationery_connect.api.routers.products

Product catalog endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from stationery_connect.api.deps import product_service
from stationery_connect.api.schemas import ProductIn, ProductOut, ProductPatch
from stationery_connect.auth.deps import get_principal
from stationery_connect.auth.models import Principal
from stationery_connect.services.records import ProductService

router = APIRouter(prefix="/v1/products", tags=["products"])


class ShareOut(BaseModel):
    text: str


@router.get("", response_model=list[ProductOut])
async def list_products(
    search: str | None = Query(default=None, max_length=256),
    category: str | None = Query(default=None, max_length=128),
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> list[ProductOut]:
    rows = await svc.search(principal, search=search, category=category)
    return [ProductOut.model_validate(r) for r in rows]


@router.get("/categories", response_model=list[str])
async def list_categories(
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> list[str]:
    return await svc.categories(principal)


@router.post("", response_model=ProductOut, status_code=HTTP_201_CREATED)
async def create_product(
    body: ProductIn,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> ProductOut:
    row = await svc.create(principal, body.model_dump())
    return ProductOut.model_validate(row)


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(
    product_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> ProductOut:
    return ProductOut.model_validate(await svc.get(principal, product_id))


@router.patch("/{product_id}", response_model=ProductOut)
async def update_product(
    product_id: uuid.UUID,
    body: ProductPatch,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> ProductOut:
    values = body.model_dump(exclude_unset=True, exclude_none=True)
    row = await svc.update(principal, product_id, values)
    return ProductOut.model_validate(row)


@router.delete("/{product_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> None:
    await svc.delete(principal, product_id)


@router.post("/{product_id}/share", response_model=ShareOut)
async def share_product(
    product_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: ProductService = Depends(product_service),
) -> ShareOut:
    return ShareOut(text=await svc.share(principal, product_id))
