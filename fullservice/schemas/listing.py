from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from fullservice.schemas.user import IdentitySummary


class ListingCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    # accepts "12.50" as well as 12.5
    price: Decimal = Field(ge=0, max_digits=12, decimal_places=2)

    icon_url: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    video_url: Optional[str] = None

    contact_platform: Optional[str] = Field(default=None, max_length=50)
    contact_info: Optional[str] = Field(default=None, max_length=255)


class ListingRead(BaseModel):
    id: int
    target_number: Optional[str] = None
    owner_id: int
    name: str
    description: str
    price: Decimal

    icon_url: Optional[str] = None
    images: List[str] = Field(default_factory=list, validation_alias="image_urls")
    video_url: Optional[str] = None

    contact_platform: Optional[str] = None
    contact_info: Optional[str] = None

    is_active: bool
    created_at: datetime

    owner: Optional[IdentitySummary] = None

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
