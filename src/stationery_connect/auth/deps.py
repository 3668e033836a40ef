"""
stationery_connect.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a typed `Principal`, validating role and tenant
  at the boundary so downstream checks can rely on them.
- Provide role-gate dependencies for coarse-grained endpoints.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.status import HTTP_401_UNAUTHORIZED, HTTP_403_FORBIDDEN

from stationery_connect.api.deps import settings_dep
from stationery_connect.auth import rls
from stationery_connect.auth.jwt import JwtConfig, JwtValidationError, decode_and_validate
from stationery_connect.auth.models import Principal, Role
from stationery_connect.observability.logging import bind_principal, get_logger
from stationery_connect.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


def get_principal(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    settings: Settings = Depends(settings_dep),
) -> Principal:
    if creds is None or not creds.credentials:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Missing bearer token")

    try:
        cfg = JwtConfig.from_settings(settings)
        payload = decode_and_validate(cfg=cfg, token=creds.credentials)
    except JwtValidationError as e:
        log.info("auth.invalid_token", reason=str(e))
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail=f"Invalid token: {e}") from e

    subject = str(payload.get("sub", ""))
    tenant_id = str(payload.get("tenant_id") or "")
    role_raw = payload.get("role")
    if not subject:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token subject")
    if not tenant_id:
        raise HTTPException(status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token tenant")
    try:
        role = Role(role_raw)
    except ValueError:
        log.info("auth.unknown_role", role=str(role_raw))
        raise HTTPException(
            status_code=HTTP_401_UNAUTHORIZED, detail="Invalid token role"
        ) from None

    principal = Principal(
        id=subject,
        email=str(payload.get("email", "")),
        name=str(payload.get("name", "")),
        role=role,
        tenant_id=tenant_id,
    )
    bind_principal(user_id=principal.id, tenant_id=principal.tenant_id, role=str(principal.role))
    return principal


def require_manager(principal: Principal = Depends(get_principal)) -> Principal:
    if not rls.is_manager_or_above(principal):
        log.info("rls.denied", action="manager_only")
        raise HTTPException(status_code=HTTP_403_FORBIDDEN, detail="Not permitted")
    return principal


# --- Module Notes -----------------------------------------------------------
# Per-record decisions live in the service layer (see `services.records`);
# these dependencies only establish identity and gate whole endpoints.
