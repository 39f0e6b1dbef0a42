from datetime import datetime
from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

Role = Literal["users", "admin", "VIP"]


class RegisterPayload(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    username: str = Field(min_length=1, max_length=64)
    email: EmailStr
    password: str = Field(min_length=1, max_length=255)


class LoginPayload(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    email: Optional[EmailStr] = None
    profile_image_url: Optional[str] = None


class IdentityRead(BaseModel):
    id: int
    name: str
    username: str
    email: str
    role: Role
    is_banned: bool
    profile_image_url: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IdentitySummary(BaseModel):
    """Embedded owner/author/buyer/seller shape."""

    id: int
    name: str
    username: str
    role: Role
    profile_image_url: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: IdentityRead


class Location(BaseModel):
    latitude: float
    longitude: float
    accuracy: Optional[float] = None


class SessionRecordPayload(BaseModel):
    device_info: dict[str, Any] = Field(default_factory=dict)
    ip_address: Optional[str] = None
    location: Optional[Location] = None


class SessionRecordResponse(BaseModel):
    recorded: bool


class RoleUpdate(BaseModel):
    role: Role
