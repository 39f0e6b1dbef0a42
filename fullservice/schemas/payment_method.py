from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class PaymentMethodCreate(BaseModel):
    payment_name: str = Field(min_length=1, max_length=255)
    address: str = Field(min_length=1, max_length=255)
    description: Optional[str] = None
    payment_icon_url: Optional[str] = None
    qr_code_url: Optional[str] = None


class PaymentMethodRead(BaseModel):
    id: int
    user_id: int
    payment_name: str
    address: str
    description: Optional[str] = None
    payment_icon_url: Optional[str] = None
    qr_code_url: Optional[str] = None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
