"""FastAPI dependencies guarding the admin dashboard endpoints."""


from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import UnauthorizedError
from app.db.base import get_db
from app.services.admin_session import AdminSession, AdminSessionService

def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()

async def require_admin(
    token: str | None = Depends(bearer_token),
    session: AsyncSession = Depends(get_db),
) -> AdminSession | None:
    """Reject the request with 401 unless it carries a live admin session.

    Returns ``None`` when admin auth is disabled by configuration.
    """
    if not settings.admin_auth_enabled:
        return None
    if not token:
        raise UnauthorizedError()
    return await AdminSessionService(session).verify(token)
