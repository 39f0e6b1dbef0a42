from typing import List, Literal

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import HTMLResponse, PlainTextResponse
from sqlalchemy.orm import Session

from fullservice.core.database import get_db
from fullservice.core.permissions import Action, require
from fullservice.core.security import get_current_user
from fullservice.models.order import STATUS_APPROVED, STATUS_REJECTED
from fullservice.models.user import User
from fullservice.schemas.order import OrderBox, OrderCreate, OrderRead, Receipt
from fullservice.services import orders, receipts

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(
    order_in: OrderCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return orders.create_order(db, current_user, order_in)


@router.get("/", response_model=List[OrderRead])
def list_orders(
    box: OrderBox = "received",
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return orders.list_orders(db, current_user, box)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    order = orders.get_order(db, order_id)
    # buyer and seller are the only parties who may see an order
    require(current_user, Action.VIEW_RECEIPT, order)
    return order


@router.post("/{order_id}/approve", response_model=OrderRead)
def approve_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return orders.decide_order(db, current_user, order_id, STATUS_APPROVED)


@router.post("/{order_id}/reject", response_model=OrderRead)
def reject_order(
    order_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return orders.decide_order(db, current_user, order_id, STATUS_REJECTED)


@router.get("/{order_id}/receipt", response_model=Receipt)
def get_receipt(
    order_id: int,
    fmt: Literal["json", "html", "text"] = Query("json", alias="format"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    receipt = orders.build_receipt(db, current_user, order_id)
    if fmt == "html":
        return HTMLResponse(receipts.render_html(receipt))
    if fmt == "text":
        return PlainTextResponse(receipts.render_text(receipt))
    return receipt
