"""Vendor application service — intake validation, review updates and statistics.

Rule: No SQLAlchemy / no FastAPI here. Pure Python business logic.
"""


import logging
import re
import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import NotFoundError, ValidationError
from app.repositories.kv_store import KeyValueStore
from app.repositories.vendor_application import VendorApplicationRepository
from app.schemas.vendor_application import (
    APPLICATION_STATUSES,
    VENDOR_TYPES,
    ApplicationStats,
    VendorApplication,
    VendorApplicationCreate,
    VendorApplicationUpdate,
)

logger = logging.getLogger(__name__)

# Checked in this order; the first missing one is reported.
REQUIRED_FIELDS: tuple[str, ...] = (
    "business_name",
    "contact_name",
    "email",
    "phone",
    "vendor_type",
    "description",
    "products_services",
    "food_permits",
    "availability_start_week",
)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

DEFAULT_REVIEWER = "admin"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _alias(field_name: str) -> str:
    return VendorApplicationCreate.model_fields[field_name].alias or field_name


def validate_submission(data: VendorApplicationCreate) -> None:
    """Raise :class:`ValidationError` for the first problem found in *data*."""
    for name in REQUIRED_FIELDS:
        value = getattr(data, name)
        if value is None or not value.strip():
            field = _alias(name)
            raise ValidationError(f"Missing required field: {field}", field=field)

    if not EMAIL_RE.fullmatch(data.email):
        raise ValidationError("Invalid email format", field="email")

    if data.vendor_type not in VENDOR_TYPES:
        raise ValidationError(
            f"Unknown vendor type '{data.vendor_type}'", field="vendorType"
        )


class VendorApplicationService:
    def __init__(
        self,
        session: AsyncSession,
        now: Callable[[], datetime] = _utcnow,
    ):
        self._repo = VendorApplicationRepository(KeyValueStore(session))
        self._now = now

    async def create(self, data: VendorApplicationCreate) -> VendorApplication:
        validate_submission(data)
        application = VendorApplication(
            id=str(uuid.uuid4()),
            business_name=data.business_name,
            contact_name=data.contact_name,
            email=data.email,
            phone=data.phone,
            website=data.website or "",
            vendor_type=data.vendor_type,
            description=data.description,
            products_services=data.products_services,
            experience=data.experience or "",
            special_requirements=data.special_requirements or "",
            food_permits=data.food_permits,
            availability_start_week=data.availability_start_week,
            status="pending",
            submitted_at=self._now(),
        )
        await self._repo.add(application)
        logger.info("Stored vendor application %s (%s)", application.id, application.business_name)
        return application

    async def get(self, application_id: str) -> VendorApplication:
        application = await self._repo.get(application_id)
        if application is None:
            raise NotFoundError("Application", application_id)
        return application

    async def list_all(self) -> list[VendorApplication]:
        """All resolvable applications, newest submission first."""
        ids = await self._repo.list_ids()
        applications = [a for a in await self._repo.get_many(ids) if a is not None]
        # stable sort: equal timestamps keep index order
        applications.sort(key=lambda a: a.submitted_at, reverse=True)
        logger.debug("Listed %d of %d indexed applications", len(applications), len(ids))
        return applications

    async def update(self, application_id: str, data: VendorApplicationUpdate) -> VendorApplication:
        existing = await self.get(application_id)  # raises 404 if missing
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        changes["reviewed_by"] = changes.get("reviewed_by") or DEFAULT_REVIEWER
        changes["reviewed_at"] = self._now()

        updated = existing.model_copy(update=changes)
        await self._repo.save(updated)
        logger.info(
            "Application %s reviewed by %s: status=%s",
            application_id, updated.reviewed_by, updated.status,
        )
        return updated

    async def stats(self) -> ApplicationStats:
        ids = await self._repo.list_ids()
        counts = dict.fromkeys(APPLICATION_STATUSES, 0)
        for application in await self._repo.get_many(ids):
            if application is not None:
                counts[application.status] += 1
        # total counts index entries, resolved or not
        return ApplicationStats(total=len(ids), **counts)
