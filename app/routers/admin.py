"""Admin session router — login, session check and logout for the dashboard."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import bearer_token, require_admin
from app.core.exceptions import UnauthorizedError
from app.db.base import get_db
from app.schemas.admin import (
    AdminLoginRequest,
    AdminLoginResponse,
    AdminLogoutResponse,
    AdminSessionResponse,
)
from app.services.admin_session import AdminSession, AdminSessionService

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/login", response_model=AdminLoginResponse)
async def login(
    body: AdminLoginRequest,
    session: AsyncSession = Depends(get_db),
):
    """Exchange the admin password for a bearer token."""
    token, admin_session = await AdminSessionService(session).login(body.password)
    return AdminLoginResponse(token=token, expires_at=admin_session.expires_at)


@router.get("/session", response_model=AdminSessionResponse)
async def current_session(admin: AdminSession | None = Depends(require_admin)):
    return AdminSessionResponse(expires_at=admin.expires_at if admin else None)


@router.post("/logout", response_model=AdminLogoutResponse)
async def logout(
    token: str | None = Depends(bearer_token),
    session: AsyncSession = Depends(get_db),
):
    if not token:
        raise UnauthorizedError()
    await AdminSessionService(session).logout(token)
    return AdminLogoutResponse()
