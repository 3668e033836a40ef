"""
stationery_connect.auth.models

Auth domain models.

Responsibilities:
- Define the closed set of roles (`Role`).
- Define the authenticated identity type (`Principal`) passed explicitly into
  every authorization check.
- Define the structural shape of a tenant-scoped record (`Resource`).
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Protocol


class Role(enum.StrEnum):
    admin = "admin"
    manager = "manager"
    user = "user"


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity, immutable for the lifetime of a session.
    """

    id: str
    email: str
    name: str
    role: Role
    tenant_id: str


class Resource(Protocol):
    """
    Any tenant-owned record (product, customer, blast).

    ORM rows satisfy this structurally; `created_by` is informational and only
    consulted for the `user` role's write permissions.
    """

    @property
    def tenant_id(self) -> str: ...

    @property
    def created_by(self) -> str | None: ...


# --- Module Notes -----------------------------------------------------------
# Role is a StrEnum so it serializes to/from JWT claims and JSON unchanged.
