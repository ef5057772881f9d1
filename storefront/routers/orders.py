from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from storefront.dependencies import get_db
from storefront.schemas.order import OrderCreate, OrderCreated, OrderRead, OrderStatusUpdate
from storefront.services import order_service

router = APIRouter(prefix="/orders", tags=["Orders"])


@router.post("", response_model=OrderCreated, status_code=201)
def submit_order(payload: OrderCreate, db: Session = Depends(get_db)):
    order_id = order_service.submit_order(db, payload)
    return OrderCreated(order_id=order_id)


@router.get("", response_model=List[OrderRead])
def list_orders(
    status: Optional[str] = Query(None, description="pending | delivered | cancelled"),
    db: Session = Depends(get_db),
):
    return order_service.list_orders(db, status=status)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, db: Session = Depends(get_db)):
    return order_service.get_order(db, order_id)


@router.patch("/{order_id}/status", response_model=OrderRead)
def update_order_status(order_id: int, payload: OrderStatusUpdate, db: Session = Depends(get_db)):
    return order_service.update_order_status(db, order_id, payload.status)


__all__ = ["router"]
