"""
Order workflow: checkout by the buyer, one decision by the seller.

    pending -> approved
    pending -> rejected

Both terminal states are final. The decision is a compare-and-swap on
``status = 'pending'`` so two concurrent decisions cannot both land.
"""
import logging
from datetime import datetime
from typing import List

from sqlalchemy.orm import Session, joinedload, selectinload

from fullservice.core.errors import MissingProof, NotFound, OrderConflict, ValidationError
from fullservice.core.permissions import Action, require
from fullservice.models.listing import Listing
from fullservice.models.order import STATUS_APPROVED, STATUS_PENDING, STATUS_REJECTED, Order
from fullservice.models.user import User
from fullservice.schemas.order import OrderCreate, Receipt
from fullservice.services.catalog import get_listing
from fullservice.services.payments import list_active_methods

logger = logging.getLogger(__name__)

DECISIONS = (STATUS_APPROVED, STATUS_REJECTED)


def _order_query(db: Session):
    return db.query(Order).options(
        joinedload(Order.product).selectinload(Listing.images),
        joinedload(Order.buyer),
        joinedload(Order.seller),
    )


def get_order(db: Session, order_id: int) -> Order:
    order = _order_query(db).filter(Order.id == order_id).first()
    if order is None:
        raise NotFound("Order not found")
    return order


def create_order(db: Session, buyer: User, order_in: OrderCreate) -> Order:
    listing = get_listing(db, order_in.product_id)
    require(buyer, Action.PURCHASE_LISTING, listing)

    methods = list_active_methods(db, listing.owner_id)
    if not methods:
        raise ValidationError("Seller has no payment methods available")

    method = next((m for m in methods if m.id == order_in.payment_method_id), None)
    if method is None:
        raise NotFound("Payment method not found")

    proof = (order_in.payment_proof_url or "").strip()
    if not proof:
        raise MissingProof()

    order = Order(
        product_id=listing.id,
        buyer_id=buyer.id,
        seller_id=listing.owner_id,
        payment_method_id=method.id,
        payment_proof_url=proof,
        total_amount=listing.price,
        status=STATUS_PENDING,
    )
    db.add(order)
    db.flush()

    order.order_number = f"ORD{order.id:06d}"
    db.commit()

    logger.info("Order %s placed by %s for listing %s", order.order_number, buyer.id, listing.id)
    return get_order(db, order.id)


def list_orders(db: Session, user: User, box: str) -> List[Order]:
    """``received``: orders where the user sells; ``sent``: where the user buys."""
    query = _order_query(db)
    if box == "received":
        query = query.filter(Order.seller_id == user.id)
    else:
        query = query.filter(Order.buyer_id == user.id)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def decide_order(db: Session, actor: User, order_id: int, status: str) -> Order:
    if status not in DECISIONS:
        raise ValidationError(f"Unsupported order status: {status}")

    order = get_order(db, order_id)
    require(actor, Action.DECIDE_ORDER, order)

    updated = (
        db.query(Order)
        .filter(Order.id == order_id, Order.status == STATUS_PENDING)
        .update(
            {Order.status: status, Order.updated_at: datetime.utcnow()},
            synchronize_session=False,
        )
    )
    if updated == 0:
        db.rollback()
        raise OrderConflict()
    db.commit()

    logger.info("Order %s %s by seller %s", order.order_number, status, actor.id)
    db.expire_all()
    return get_order(db, order_id)


def build_receipt(db: Session, viewer: User, order_id: int) -> Receipt:
    order = get_order(db, order_id)
    require(viewer, Action.VIEW_RECEIPT, order)

    if order.status != STATUS_APPROVED:
        raise OrderConflict("Receipt is only available for approved orders")

    return Receipt(
        order_number=order.order_number,
        status=order.status,
        order_date=order.created_at,
        product_name=order.product.name,
        target_number=order.product.target_number,
        total_amount=order.total_amount,
        buyer_name=order.buyer.name,
        buyer_username=order.buyer.username,
        seller_name=order.seller.name,
        seller_username=order.seller.username,
    )
