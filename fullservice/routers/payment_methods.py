from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.security import get_current_user
from fullservice.models.user import User
from fullservice.schemas.payment_method import PaymentMethodCreate, PaymentMethodRead
from fullservice.services import payments

router = APIRouter(prefix="/payment-methods", tags=["payment-methods"])


@router.get("/mine", response_model=List[PaymentMethodRead])
def list_my_methods(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return payments.list_own_methods(db, current_user)


@router.get("/seller/{seller_id}", response_model=List[PaymentMethodRead])
def list_seller_methods(
    seller_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return payments.list_active_methods(db, seller_id)


@router.post("/", response_model=PaymentMethodRead, status_code=status.HTTP_201_CREATED)
def create_method(
    method_in: PaymentMethodCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return payments.create_payment_method(db, current_user, method_in)
