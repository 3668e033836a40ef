"""
stationery_connect.api.routers.dev_auth

Session endpoints.

Responsibilities:
- Mint short-lived tokens for local/dev use (disabled in prod).
- Expose the current principal (`/v1/auth/me`).
"""

from __future__ import annotations

from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from starlette.status import HTTP_404_NOT_FOUND

from stationery_connect.api.deps import settings_dep
from stationery_connect.auth import rls
from stationery_connect.auth.deps import get_principal
from stationery_connect.auth.jwt import JwtConfig, issue_token
from stationery_connect.auth.models import Principal, Role
from stationery_connect.settings import Settings

router = APIRouter(tags=["auth"])


class DevTokenRequest(BaseModel):
    subject: str = Field(min_length=1, max_length=256)
    tenant_id: str = Field(min_length=1, max_length=128)
    role: Role = Role.user
    email: str = Field(default="", max_length=256)
    name: str = Field(default="", max_length=256)
    ttl_minutes: int = Field(default=60, ge=1, le=24 * 60)


class DevTokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PrincipalResponse(BaseModel):
    id: str
    email: str
    name: str
    role: Role
    tenant_id: str
    is_admin: bool
    is_manager_or_above: bool


@router.post("/v1/dev/token", response_model=DevTokenResponse)
async def mint_dev_token(
    body: DevTokenRequest,
    settings: Settings = Depends(settings_dep),
) -> DevTokenResponse:
    if settings.env == "prod":
        raise HTTPException(status_code=HTTP_404_NOT_FOUND, detail="Not found")

    principal = Principal(
        id=body.subject,
        email=body.email,
        name=body.name,
        role=body.role,
        tenant_id=body.tenant_id,
    )
    token = issue_token(
        cfg=JwtConfig.from_settings(settings),
        principal=principal,
        ttl=timedelta(minutes=body.ttl_minutes),
    )
    return DevTokenResponse(access_token=token)


@router.get("/v1/auth/me", response_model=PrincipalResponse)
async def me(principal: Principal = Depends(get_principal)) -> PrincipalResponse:
    return PrincipalResponse(
        id=principal.id,
        email=principal.email,
        name=principal.name,
        role=principal.role,
        tenant_id=principal.tenant_id,
        is_admin=rls.is_admin(principal),
        is_manager_or_above=rls.is_manager_or_above(principal),
    )
