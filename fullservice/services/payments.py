from typing import List

from sqlalchemy.orm import Session

from fullservice.models.payment_method import PaymentMethod
from fullservice.models.user import User
from fullservice.schemas.payment_method import PaymentMethodCreate


def create_payment_method(db: Session, owner: User, method_in: PaymentMethodCreate) -> PaymentMethod:
    method = PaymentMethod(**method_in.model_dump(), user_id=owner.id, is_active=True)
    db.add(method)
    db.commit()
    db.refresh(method)
    return method


def list_own_methods(db: Session, owner: User) -> List[PaymentMethod]:
    return (
        db.query(PaymentMethod)
        .filter(PaymentMethod.user_id == owner.id)
        .order_by(PaymentMethod.created_at.desc(), PaymentMethod.id.desc())
        .all()
    )


def list_active_methods(db: Session, seller_id: int) -> List[PaymentMethod]:
    """What a buyer is offered at checkout."""
    return (
        db.query(PaymentMethod)
        .filter(
            PaymentMethod.user_id == seller_id,
            PaymentMethod.is_active.is_(True),
        )
        .order_by(PaymentMethod.id.asc())
        .all()
    )
