"""
stationery_connect.api.schemas

Request/response models shared by the resource routers.

Tenancy and ownership fields appear only on responses; request models never
accept them, so clients cannot move a record between tenants or owners.
"""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from stationery_connect.db.models import BlastStatus, CustomerGroup


class RecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    tenant_id: str
    created_by: str | None
    created_at: datetime
    updated_at: datetime


# Products


class ProductIn(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    category: str = Field(min_length=1, max_length=128)
    price: float = Field(ge=0)
    image: str = Field(default="", max_length=1024)
    tags: list[str] = Field(default_factory=list)
    stock: int = Field(default=0, ge=0)


class ProductPatch(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    category: str | None = Field(default=None, min_length=1, max_length=128)
    price: float | None = Field(default=None, ge=0)
    image: str | None = Field(default=None, max_length=1024)
    tags: list[str] | None = None
    stock: int | None = Field(default=None, ge=0)


class ProductOut(RecordOut):
    name: str
    category: str
    price: float
    image: str
    tags: list[str]
    stock: int
    in_stock: bool


# Customers


class CustomerIn(BaseModel):
    name: str = Field(min_length=1, max_length=256)
    location: str = Field(default="", max_length=256)
    budget: float = Field(default=0, ge=0)
    interests: list[str] = Field(default_factory=list)
    whatsapp_number: str = Field(min_length=5, max_length=32)
    group: CustomerGroup
    last_contact: datetime | None = None


class CustomerPatch(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=256)
    location: str | None = Field(default=None, max_length=256)
    budget: float | None = Field(default=None, ge=0)
    interests: list[str] | None = None
    whatsapp_number: str | None = Field(default=None, min_length=5, max_length=32)
    group: CustomerGroup | None = None
    last_contact: datetime | None = None


class CustomerOut(RecordOut):
    name: str
    location: str
    budget: float
    interests: list[str]
    whatsapp_number: str
    group: CustomerGroup
    last_contact: datetime | None


# Blasts


class BlastIn(BaseModel):
    title: str = Field(default="", max_length=256)
    message: str = Field(max_length=4096)
    customer_ids: list[uuid.UUID] = Field(default_factory=list)
    product_ids: list[uuid.UUID] = Field(default_factory=list)
    scheduled_at: datetime | None = None


class BlastPatch(BaseModel):
    title: str | None = Field(default=None, max_length=256)
    message: str | None = Field(default=None, min_length=1, max_length=4096)
    scheduled_at: datetime | None = None


class BlastOut(RecordOut):
    title: str
    message: str
    customer_ids: list[str]
    product_ids: list[str]
    status: BlastStatus
    scheduled_at: datetime | None
    sent_at: datetime | None
    open_rate: float


class PreviewOut(BaseModel):
    preview: str
