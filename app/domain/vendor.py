"""SQLAlchemy ORM model for published market vendors.

Rows are maintained by the market organisers outside this service; the API
only reads them for the public vendor showcase.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class Vendor(Base):
    __tablename__ = "Vendors"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    website: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # "artisan" | "jewelry" | "art" | "food" | "musician" | ...
    vendor_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
