from datetime import datetime
from decimal import Decimal
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from fullservice.schemas.listing import ListingRead
from fullservice.schemas.user import IdentitySummary

OrderStatus = Literal["pending", "approved", "rejected"]
OrderBox = Literal["received", "sent"]


class OrderCreate(BaseModel):
    product_id: int = Field(gt=0)
    payment_method_id: int = Field(gt=0)
    # proof image as data URL; checked in the service so the caller gets MissingProof
    payment_proof_url: Optional[str] = None


class OrderRead(BaseModel):
    id: int
    order_number: Optional[str] = None
    product_id: int
    buyer_id: int
    seller_id: int
    payment_method_id: Optional[int] = None
    payment_proof_url: str
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime

    product: Optional[ListingRead] = None
    buyer: Optional[IdentitySummary] = None
    seller: Optional[IdentitySummary] = None

    model_config = ConfigDict(from_attributes=True)


class Receipt(BaseModel):
    order_number: str
    status: OrderStatus
    order_date: datetime
    product_name: str
    target_number: Optional[str] = None
    total_amount: Decimal
    buyer_name: str
    buyer_username: str
    seller_name: str
    seller_username: str
