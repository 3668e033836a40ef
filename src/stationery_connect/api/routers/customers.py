"""
stationery_connect.api.routers.customers

Customer (retailer) endpoints.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from stationery_connect.api.deps import customer_service
from stationery_connect.api.schemas import CustomerIn, CustomerOut, CustomerPatch
from stationery_connect.auth.deps import get_principal
from stationery_connect.auth.models import Principal
from stationery_connect.services.records import CustomerService

router = APIRouter(prefix="/v1/customers", tags=["customers"])


@router.get("", response_model=list[CustomerOut])
async def list_customers(
    search: str | None = Query(default=None, max_length=256),
    group: str | None = Query(default=None, max_length=64),
    principal: Principal = Depends(get_principal),
    svc: CustomerService = Depends(customer_service),
) -> list[CustomerOut]:
    rows = await svc.search(principal, search=search, group=group)
    return [CustomerOut.model_validate(r) for r in rows]


@router.post("", response_model=CustomerOut, status_code=HTTP_201_CREATED)
async def create_customer(
    body: CustomerIn,
    principal: Principal = Depends(get_principal),
    svc: CustomerService = Depends(customer_service),
) -> CustomerOut:
    return CustomerOut.model_validate(await svc.create(principal, body.model_dump()))


@router.get("/{customer_id}", response_model=CustomerOut)
async def get_customer(
    customer_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: CustomerService = Depends(customer_service),
) -> CustomerOut:
    return CustomerOut.model_validate(await svc.get(principal, customer_id))


@router.patch("/{customer_id}", response_model=CustomerOut)
async def update_customer(
    customer_id: uuid.UUID,
    body: CustomerPatch,
    principal: Principal = Depends(get_principal),
    svc: CustomerService = Depends(customer_service),
) -> CustomerOut:
    values = body.model_dump(exclude_unset=True, exclude_none=True)
    row = await svc.update(principal, customer_id, values)
    return CustomerOut.model_validate(row)


@router.delete("/{customer_id}", status_code=HTTP_204_NO_CONTENT)
async def delete_customer(
    customer_id: uuid.UUID,
    principal: Principal = Depends(get_principal),
    svc: CustomerService = Depends(customer_service),
) -> None:
    await svc.delete(principal, customer_id)
