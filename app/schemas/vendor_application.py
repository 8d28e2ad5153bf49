"""Vendor application schemas: the stored record, request DTOs and response envelopes."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from app.schemas.common import CamelModel

ApplicationStatus = Literal["pending", "approved", "rejected"]

APPLICATION_STATUSES: tuple[str, ...] = ("pending", "approved", "rejected")

VENDOR_TYPES: frozenset[str] = frozenset({
    "artisan",
    "jewelry",
    "art",
    "pottery",
    "textiles",
    "woodwork",
    "food",
    "musician",
    "other",
})


class VendorApplication(CamelModel):
    """A stored application. Persisted in the KV store in its camelCase JSON form."""

    id: str
    business_name: str
    contact_name: str
    email: str
    phone: str
    website: str = ""
    vendor_type: str
    description: str
    products_services: str
    experience: str = ""
    special_requirements: str = ""
    food_permits: str
    availability_start_week: str
    status: ApplicationStatus = "pending"
    submitted_at: datetime
    reviewed_at: Optional[datetime] = None
    reviewed_by: Optional[str] = None
    notes: str = ""


class VendorApplicationCreate(CamelModel):
    """Public submission form. Presence of required fields is checked by the service
    so the error can name the first missing one."""

    business_name: str | None = None
    contact_name: str | None = None
    email: str | None = None
    phone: str | None = None
    website: str | None = None
    vendor_type: str | None = None
    description: str | None = None
    products_services: str | None = None
    experience: str | None = None
    special_requirements: str | None = None
    food_permits: str | None = None
    availability_start_week: str | None = None


class VendorApplicationUpdate(CamelModel):
    """Admin review. Omitted or null fields keep their stored value."""

    status: ApplicationStatus | None = None
    notes: str | None = None
    reviewed_by: str | None = None


class SubmissionResponse(CamelModel):
    success: bool = True
    application_id: str
    message: str = "Application submitted successfully!"
    email_sent: bool


class ApplicationListResponse(CamelModel):
    applications: list[VendorApplication]


class ApplicationUpdateResponse(CamelModel):
    success: bool = True
    application: VendorApplication
    message: str = "Application updated successfully!"


class ApplicationStats(BaseModel):
    total: int = 0
    pending: int = 0
    approved: int = 0
    rejected: int = 0
