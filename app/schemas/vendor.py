"""Vendor showcase response models (snake_case, mirrors the Vendors table)."""


from datetime import datetime

from pydantic import BaseModel

class VendorOut(BaseModel):
    id: int
    created_at: datetime
    name: str
    website: str | None = None
    image: str | None = None
    vendor_type: str | None = None

    model_config = {"from_attributes": True}

class VendorListResponse(BaseModel):
    success: bool = True
    vendors: list[VendorOut]
