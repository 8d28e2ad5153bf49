"""Admin session service — password login issuing expiring bearer tokens.

The admin password is server configuration only. A successful login returns a
random token once; only its SHA-256 hash is stored, under
``admin_session_<hash>`` in the KV store, with an expiry and a revoked flag.
"""

from __future__ import annotations

import asyncio
import hashlib
import hmac
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.exceptions import ServiceUnavailableError, UnauthorizedError
from app.repositories.kv_store import KeyValueStore
from app.schemas.common import CamelModel

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "admin_session_"


class AdminSession(CamelModel):
    token_hash: str
    created_at: datetime
    expires_at: datetime
    revoked: bool = False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _session_key(token_hash: str) -> str:
    return f"{SESSION_KEY_PREFIX}{token_hash}"


class AdminSessionService:
    def __init__(
        self,
        session: AsyncSession,
        now: Callable[[], datetime] = _utcnow,
    ):
        self._store = KeyValueStore(session)
        self._now = now

    async def login(self, password: str) -> tuple[str, AdminSession]:
        """Check *password* and open a session. Returns ``(token, session)``."""
        expected = settings.admin_password
        if not expected:
            logger.error("Admin login attempted but ADMIN_PASSWORD is not configured")
            raise ServiceUnavailableError("Admin access is not configured")

        if settings.admin_login_delay_seconds > 0:
            await asyncio.sleep(settings.admin_login_delay_seconds)

        if not hmac.compare_digest(password.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("Rejected admin login with an invalid password")
            raise UnauthorizedError("Invalid admin password")

        token = secrets.token_urlsafe(32)
        now = self._now()
        admin_session = AdminSession(
            token_hash=_hash_token(token),
            created_at=now,
            expires_at=now + timedelta(minutes=settings.admin_session_ttl_minutes),
        )
        await self._store.set(
            _session_key(admin_session.token_hash),
            admin_session.model_dump(mode="json", by_alias=True),
        )
        await self._store.commit()
        logger.info("Admin session opened, expires %s", admin_session.expires_at.isoformat())
        return token, admin_session

    async def verify(self, token: str) -> AdminSession:
        raw = await self._store.get(_session_key(_hash_token(token)))
        if raw is None:
            raise UnauthorizedError("Invalid or expired admin session")
        try:
            admin_session = AdminSession.model_validate(raw)
        except PydanticValidationError as exc:
            logger.warning("Unreadable admin session record: %s", exc)
            raise UnauthorizedError("Invalid or expired admin session") from exc
        if admin_session.revoked or admin_session.expires_at <= self._now():
            raise UnauthorizedError("Invalid or expired admin session")
        return admin_session

    async def logout(self, token: str) -> None:
        admin_session = await self.verify(token)
        revoked = admin_session.model_copy(update={"revoked": True})
        await self._store.set(
            _session_key(revoked.token_hash),
            revoked.model_dump(mode="json", by_alias=True),
        )
        await self._store.commit()
        logger.info("Admin session closed")
