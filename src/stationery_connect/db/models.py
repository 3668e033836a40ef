"""
stationery_connect.db.models

Persistence schema for the CRM.

Responsibilities:
- Define ORM models for tenant-owned records:
  - Product: catalog item
  - Customer: retailer contact
  - Blast: mocked WhatsApp promotional message
  - Activity: append-only tenant activity feed
"""

from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Enum, Float, Index, Integer, String, Text
from sqlalchemy import Uuid as SAUuid
from sqlalchemy.orm import Mapped, mapped_column

from stationery_connect.db.base import Base, TenantScoped, UTCDateTime, utcnow


class CustomerGroup(enum.StrEnum):
    premium = "Premium"
    rural = "Rural"
    budget_buyers = "Budget Buyers"


class BlastStatus(enum.StrEnum):
    draft = "draft"
    scheduled = "scheduled"
    pending = "pending"
    sent = "sent"
    failed = "failed"


class ActivityType(enum.StrEnum):
    product_shared = "product_shared"
    customer_added = "customer_added"
    blast_sent = "blast_sent"


class Product(TenantScoped, Base):
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    category: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    price: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    image: Mapped[str] = mapped_column(String(1024), nullable=False, default="")
    tags: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def stock_value(self) -> float:
        return self.price * self.stock


class Customer(TenantScoped, Base):
    __tablename__ = "customers"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    name: Mapped[str] = mapped_column(String(256), nullable=False)
    location: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    budget: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    interests: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    whatsapp_number: Mapped[str] = mapped_column(String(32), nullable=False)
    group: Mapped[CustomerGroup] = mapped_column(Enum(CustomerGroup), nullable=False, index=True)
    last_contact: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)


class Blast(TenantScoped, Base):
    __tablename__ = "blasts"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    title: Mapped[str] = mapped_column(String(256), nullable=False, default="")
    message: Mapped[str] = mapped_column(Text, nullable=False)
    customer_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    product_ids: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    status: Mapped[BlastStatus] = mapped_column(Enum(BlastStatus), nullable=False, index=True)
    scheduled_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    sent_at: Mapped[datetime | None] = mapped_column(UTCDateTime(), nullable=True)
    # Written by the delivery collaborator once read receipts exist; sending here
    # is mocked, so it stays 0.0 and `avg_open_rate` reports 0.0 until then.
    open_rate: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)


class Activity(Base):
    __tablename__ = "activities"

    id: Mapped[uuid.UUID] = mapped_column(
        SAUuid(as_uuid=True), primary_key=True, default=uuid.uuid4
    )
    tenant_id: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    actor: Mapped[str] = mapped_column(String(256), nullable=False)
    type: Mapped[ActivityType] = mapped_column(Enum(ActivityType), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    details: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), nullable=False, default=utcnow, index=True
    )

    __table_args__ = (Index("ix_activities_tenant_created", "tenant_id", "created_at"),)


# --- Module Notes -----------------------------------------------------------
# JSON columns (tags, interests, recipient ids) keep the schema small; they are
# only ever filtered in application code after tenant scoping.
