"""Shared pytest fixtures for the test suite.

Fixture overview
----------------
engine / session    — in-memory SQLite (aiosqlite + StaticPool) with all tables
clock               — deterministic, strictly increasing UTC clock
clock_factory       — FakeClock class, for custom start/step
application_payload — a complete, valid public submission (camelCase JSON)
sent_emails         — requests captured by the mocked Resend API
notifier            — NotificationDispatcher wired to the mocked Resend API
admin_settings      — admin password configured, login delay disabled
client              — httpx.AsyncClient talking to the app over ASGI
admin_headers       — Authorization header from a real /admin/login
"""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

import app.domain  # noqa: F401
from app.core.config import settings
from app.db.base import Base, get_db
from app.main import app as fastapi_app
from app.routers.vendor_applications import get_notifier
from app.services.notification import NotificationDispatcher

ADMIN_PASSWORD = "market2025admin"


class FakeClock:
    """Callable returning ``start + n * step`` on the n-th call."""

    def __init__(
        self,
        start: datetime = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc),
        step: timedelta = timedelta(minutes=1),
    ):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        self.current = self.current + self.step
        return self.current


# ── Database ─────────────────────────────────────────────────────────────────


@pytest.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def clock_factory() -> type[FakeClock]:
    return FakeClock


# ── Domain data ──────────────────────────────────────────────────────────────


@pytest.fixture
def application_payload() -> dict:
    return {
        "businessName": "Jane's Jams",
        "contactName": "Jane Doe",
        "email": "jane@example.com",
        "phone": "555-1234",
        "vendorType": "food",
        "description": "Small-batch jams and preserves.",
        "productsServices": "Strawberry jam, apricot preserves, pepper jelly",
        "foodPermits": "NA",
        "availabilityStartWeek": "June 5",
    }


# ── Email ────────────────────────────────────────────────────────────────────


@pytest.fixture
def sent_emails() -> list[dict]:
    return []


@pytest.fixture
def notifier(sent_emails) -> NotificationDispatcher:
    def handler(request: httpx.Request) -> httpx.Response:
        sent_emails.append(
            {"headers": dict(request.headers), "body": json.loads(request.content)}
        )
        return httpx.Response(200, json={"id": f"email_{len(sent_emails)}"})

    return NotificationDispatcher(
        "re_test_key",
        sender="Market <market@example.com>",
        recipients=["organiser@example.com"],
        transport=httpx.MockTransport(handler),
    )


# ── HTTP ─────────────────────────────────────────────────────────────────────


@pytest.fixture
def admin_settings(monkeypatch):
    monkeypatch.setattr(settings, "admin_password", ADMIN_PASSWORD)
    monkeypatch.setattr(settings, "admin_login_delay_seconds", 0)
    monkeypatch.setattr(settings, "admin_auth_enabled", True)
    return settings


@pytest.fixture
async def client(session_factory, notifier, admin_settings):
    async def _get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    fastapi_app.dependency_overrides[get_db] = _get_db
    fastapi_app.dependency_overrides[get_notifier] = lambda: notifier
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
async def admin_headers(client) -> dict[str, str]:
    resp = await client.post("/admin/login", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}
