"""Vendor application router — public submission plus admin review endpoints.

Pattern:
  1. Inject DB session (and the admin guard where required) via Depends
  2. Instantiate the service with the session
  3. Wrap the call in ``failure_message`` so store failures map to a 500
     with a route-specific message
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import require_admin
from app.core.exceptions import failure_message
from app.db.base import get_db
from app.schemas.vendor_application import (
    ApplicationListResponse,
    ApplicationStats,
    ApplicationUpdateResponse,
    SubmissionResponse,
    VendorApplicationCreate,
    VendorApplicationUpdate,
)
from app.services.notification import NotificationDispatcher
from app.services.vendor_application import VendorApplicationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/vendor-applications", tags=["Vendor Applications"])


def get_notifier() -> NotificationDispatcher:
    return NotificationDispatcher.from_settings()


# ------------------------------------------------------------------
# Public
# ------------------------------------------------------------------

@router.post("", response_model=SubmissionResponse)
async def submit_application(
    body: VendorApplicationCreate,
    session: AsyncSession = Depends(get_db),
    notifier: NotificationDispatcher = Depends(get_notifier),
):
    """Submit a vendor application. The record is committed before the
    notification email is attempted; email failure only sets ``emailSent``."""
    with failure_message("Failed to process application. Please try again."):
        application = await VendorApplicationService(session).create(body)

    result = await notifier.notify(application)
    return SubmissionResponse(application_id=application.id, email_sent=result.success)


# ------------------------------------------------------------------
# Admin
# ------------------------------------------------------------------

@router.get(
    "",
    response_model=ApplicationListResponse,
    dependencies=[Depends(require_admin)],
)
async def list_applications(session: AsyncSession = Depends(get_db)):
    """All applications, newest first. Status filtering happens client-side."""
    with failure_message("Failed to fetch applications"):
        applications = await VendorApplicationService(session).list_all()
    return ApplicationListResponse(applications=applications)


@router.get(
    "/stats",
    response_model=ApplicationStats,
    dependencies=[Depends(require_admin)],
)
async def application_stats(session: AsyncSession = Depends(get_db)):
    with failure_message("Failed to fetch statistics"):
        return await VendorApplicationService(session).stats()


@router.put(
    "/{application_id}",
    response_model=ApplicationUpdateResponse,
    dependencies=[Depends(require_admin)],
)
async def update_application(
    application_id: str,
    body: VendorApplicationUpdate,
    session: AsyncSession = Depends(get_db),
):
    """Set status and/or notes. Omitted fields keep their current value."""
    with failure_message("Failed to update application"):
        application = await VendorApplicationService(session).update(application_id, body)
    return ApplicationUpdateResponse(application=application)
