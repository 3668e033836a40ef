"""
stationery_connect.auth.rls

Row-level-security (RLS) authorization model.

Responsibilities:
- Decide whether a principal may read/create/update/delete a resource.
- Filter collections down to what a principal may see.
- Stamp new/updated records with tenancy, ownership and timestamps.

Every function here is pure: no I/O, no shared state, no exceptions. Callers
turn a `False` into an authorization error (mutations) or drop the record
from the result (reads).
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from typing import Any, TypeVar

from stationery_connect.auth.models import Principal, Resource, Role

R = TypeVar("R", bound=Resource)

_KNOWN_ROLES: frozenset[str] = frozenset(Role)
_UNRESTRICTED_WRITERS: frozenset[str] = frozenset({Role.admin, Role.manager})


def tenant_matches(principal: Principal, resource_tenant_id: str | None) -> bool:
    return principal.tenant_id == resource_tenant_id


def can_read(principal: Principal, resource: Resource) -> bool:
    return tenant_matches(principal, resource.tenant_id)


def can_create(principal: Principal) -> bool:
    # Tenancy of new records is enforced by `stamp_on_create`, not here.
    return True


def can_update(principal: Principal, resource: Resource) -> bool:
    if not tenant_matches(principal, resource.tenant_id):
        return False
    if principal.role in _UNRESTRICTED_WRITERS:
        return True
    if principal.role == Role.user:
        # Records with no recorded creator are not writable by plain users.
        return bool(resource.created_by) and resource.created_by == principal.id
    return False


def can_delete(principal: Principal, resource: Resource) -> bool:
    return can_update(principal, resource)


def filter_by_access(principal: Principal, resources: Iterable[R]) -> list[R]:
    return [r for r in resources if can_read(principal, r)]


def stamp_on_create(
    principal: Principal,
    partial: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    ts = now or datetime.now(tz=UTC)
    return {
        **partial,
        "tenant_id": principal.tenant_id,
        "created_by": principal.id,
        "created_at": ts,
        "updated_at": ts,
    }


def stamp_on_update(
    partial: Mapping[str, Any],
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    return {**partial, "updated_at": now or datetime.now(tz=UTC)}


def is_admin(principal: Principal) -> bool:
    return principal.role == Role.admin


def is_manager_or_above(principal: Principal) -> bool:
    return principal.role in _UNRESTRICTED_WRITERS


def is_known_role(principal: Principal) -> bool:
    return principal.role in _KNOWN_ROLES


# --- Module Notes -----------------------------------------------------------
# Cross-tenant checks always run first so no role can see past the tenant boundary.
