"""Vendor showcase service — read-only listing of published vendors.

Rule: No SQLAlchemy / no FastAPI here. Pure Python business logic.
"""


import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.vendor import Vendor
from app.repositories.vendor import VendorRepository

logger = logging.getLogger(__name__)

class VendorService:
    def __init__(self, session: AsyncSession):
        self._repo = VendorRepository(session)

    async def list_vendors(self) -> list[Vendor]:
        vendors = await self._repo.list_newest_first()
        logger.debug("Fetched %d vendors", len(vendors))
        return vendors
