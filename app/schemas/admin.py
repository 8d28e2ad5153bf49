"""Admin session request/response schemas."""


from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel

class AdminLoginRequest(CamelModel):
    password: str = Field(..., min_length=1)

class AdminLoginResponse(CamelModel):
    success: bool = True
    token: str
    expires_at: datetime

class AdminSessionResponse(CamelModel):
    authenticated: bool = True
    expires_at: datetime | None = None

class AdminLogoutResponse(CamelModel):
    success: bool = True
