"""Vendor repository — read-only access to the published Vendors table."""


from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DownstreamError
from app.domain.vendor import Vendor


class VendorRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    async def list_newest_first(self) -> list[Vendor]:
        try:
            result = await self._session.execute(
                select(Vendor).order_by(Vendor.created_at.desc(), Vendor.id.desc())
            )
        except SQLAlchemyError as exc:
            raise DownstreamError("Vendor database error", details=str(exc)) from exc
        return list(result.scalars().all())
