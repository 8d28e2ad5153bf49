"""Vendor showcase router — read-only passthrough to the Vendors table."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import failure_message
from app.db.base import get_db
from app.schemas.vendor import VendorListResponse, VendorOut
from app.services.vendor import VendorService

router = APIRouter(prefix="/vendors", tags=["Vendors"])


@router.get("", response_model=VendorListResponse)
async def list_vendors(session: AsyncSession = Depends(get_db)):
    """Published vendors, newest first."""
    with failure_message("Failed to fetch vendors"):
        vendors = await VendorService(session).list_vendors()
    return VendorListResponse(vendors=[VendorOut.model_validate(v) for v in vendors])
